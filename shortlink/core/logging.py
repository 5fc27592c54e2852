"""
Core logging module.

This module configures the application logging with Loguru.
"""

import logging
import sys
from typing import Optional

from loguru import logger

from shortlink.core.config import Settings, settings as default_settings


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging and redirect to loguru.

    Uvicorn and SQLAlchemy log through the standard library; this handler
    forwards those records to loguru so everything ends up in one place.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Try to get corresponding Loguru level or use level number
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(config: Optional[Settings] = None):
    """
    Configure application logging using Loguru.

    Installs a stderr sink (plain text or JSON), an optional rotating file
    sink, and intercepts standard library logging.

    Args:
        config: Settings to read logging options from (defaults to the
            module-level settings)

    Returns:
        The configured loguru logger
    """
    config = config or default_settings

    # Remove default handlers
    logger.remove()

    logger.add(
        sys.stderr,
        level=config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        serialize=config.LOG_JSON,
        backtrace=config.DEBUG,
        diagnose=config.DEBUG,
    )

    if config.LOG_FILE:
        logger.add(
            config.LOG_FILE,
            level=config.LOG_LEVEL,
            serialize=config.LOG_JSON,
            rotation=config.LOG_ROTATION,
            retention=config.LOG_RETENTION,
            compression="gz",
        )

    # Intercept standard library logging
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Modify existing loggers to use InterceptHandler
    for name in logging.root.manager.loggerDict.keys():
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    for log_name in ["uvicorn", "uvicorn.access", "uvicorn.error", "fastapi"]:
        logging_logger = logging.getLogger(log_name)
        logging_logger.handlers = [InterceptHandler()]
        logging_logger.propagate = False

    # SQL echo goes through the standard "sqlalchemy.engine" logger
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if config.DB_ECHO else logging.WARNING
    )

    return logger
