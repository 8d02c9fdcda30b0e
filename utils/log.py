import logging
from logging.handlers import RotatingFileHandler

from constants import LOG_LEVEL, LOGS_DIR


def get_logger(name: str, level: int | str = LOG_LEVEL) -> logging.Logger:
    """
    Create and configure a RotatingFileHandler logger with the given name and log level.
    Max bytes in one log file is 10 Mb. Repeated calls with the same name reuse
    the already configured handler.

    Args:
        name (str): The name of the logger. Also used as the log file name.
        level (int | str, optional): The log level for the logger. Defaults to LOG_LEVEL.

    Returns:
        logging.Logger: The configured logger.

    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    LOGS_DIR.mkdir(parents=True, exist_ok=True)
    file_path = LOGS_DIR / f"{name}.log"
    file_handler = RotatingFileHandler(file_path.as_posix(), maxBytes=10 * 1024 * 1024, backupCount=10)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s [in %(pathname)s:%(lineno)d]")
    )
    file_handler.setLevel(level)
    logger.addHandler(file_handler)
    return logger
