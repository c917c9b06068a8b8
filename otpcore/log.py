"""
log.py — Logging setup shared by the CLI and the HTTP adapter.

Library modules only call logging.getLogger(__name__); handlers are attached
here, once, by the entry point.
"""

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger with a console handler (and optional rotating file).

    Calling it again only updates the level; handlers are not duplicated.

    Arguments:
        level: DEBUG, INFO, WARNING, ERROR
        log_file: path for a RotatingFileHandler (10MB x 5), or None

    Returns:
        the "otpcore" logger
    """
    root_logger = logging.getLogger()
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    if not getattr(root_logger, "_otpcore_configured", False):
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if log_file:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        root_logger._otpcore_configured = True

    root_logger.setLevel(numeric_level)
    return logging.getLogger("otpcore")
