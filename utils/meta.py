import inspect
from types import FunctionType

from exceptions import AnalyticsException
from utils.log import get_logger


class ExceptionHandlingMeta(type):
    """
    Metaclass that automatically wraps all class methods (excluding `__init__`) with exception handling.

    Domain errors (AnalyticsException) pass through unchanged. Any other error is
    logged with its traceback and the method returns `None`.
    """
    def __new__(cls, name: str, bases: tuple, dct: dict) -> type:
        """
        Creates a new class with wrapped methods.

        Args:
            name (str): Name of the class being created.
            bases (tuple): Tuple of base classes.
            dct (dict): Dictionary containing class attributes and methods.

        Returns:
            type: New class with wrapped methods.
        """
        logger = get_logger(name)

        def create_wrapper(original_method: FunctionType, is_async: bool) -> FunctionType:
            if is_async:
                async def wrapper(*args, **kwargs):
                    try:
                        return await original_method(*args, **kwargs)
                    except AnalyticsException:
                        raise
                    except Exception:
                        logger.error("An error has occurred in method %s:", original_method.__name__, exc_info=True)
                        return None
            else:
                def wrapper(*args, **kwargs):
                    try:
                        return original_method(*args, **kwargs)
                    except AnalyticsException:
                        raise
                    except Exception:
                        logger.error("An error has occurred in method %s:", original_method.__name__, exc_info=True)
                        return None
            wrapper.__name__ = original_method.__name__
            wrapper.__doc__ = original_method.__doc__
            return wrapper

        for attr_name, attr_value in dct.items():
            if isinstance(attr_value, FunctionType) and attr_name != "__init__":
                is_async = inspect.iscoroutinefunction(attr_value)
                dct[attr_name] = create_wrapper(attr_value, is_async)

        return super().__new__(cls, name, bases, dct)
