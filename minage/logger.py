# minage/logger.py
"""Logging setup for the minimum password age service"""
import logging

ROOT_LOGGER_NAME = "minage"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a logger namespaced under the package root logger.

    Args:
        name: Component name, e.g. "policy.min_age"

    Returns:
        logging.Logger for "minage" or "minage.<name>"
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a console handler to the root package logger.

    Safe to call once per application instance; existing handlers are
    replaced so repeated app creation in tests does not duplicate output.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
