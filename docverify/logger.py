import logging
import sys

from config import settings


def get_logger(name: str, level: str = None) -> logging.Logger:
    """
    Configure a standard logger for pipeline logs.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level or settings.LOG_LEVEL)
    return logger
