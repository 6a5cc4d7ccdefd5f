import logging
import os
import sys


def configure_logger(name: str = "rsspress", level: str = None) -> logging.Logger:
    """Configure and return the logger for the application."""
    logger = logging.getLogger(name)
    level_name = (level or os.getenv("RSSPRESS_LOG_LEVEL", "info")).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    logger.setLevel(log_level)

    # Only add handler if it doesn't already exist (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for handler in logger.handlers:
            handler.setLevel(log_level)

    return logger


def create_logger(module_name: str) -> logging.Logger:
    """Get a logger for a specific module under the rsspress namespace."""
    if module_name.startswith("rsspress."):
        module_name = module_name[len("rsspress."):]
    return logging.getLogger(f"rsspress.{module_name}")


# Initialize the main logger
logger = configure_logger()

__all__ = ["logger", "configure_logger", "create_logger"]
