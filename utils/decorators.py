from functools import wraps


def Singleton(cls):
    """
    Class decorator that makes every instantiation return the same object.

    Args:
        cls (type): Decorated class.

    Returns:
        Callable: Factory returning the single instance of the class.
    """
    instances = {}

    @wraps(cls)
    def get_instance(*args, **kwargs):
        if cls not in instances:
            instances[cls] = cls(*args, **kwargs)
        return instances[cls]

    return get_instance
