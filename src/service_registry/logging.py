"""Logging configuration for applications using the registries.

The package itself only emits records through loguru and is disabled by
default; call ``setup_logging`` (or ``logger.enable("service_registry")``)
to see them.
"""

import logging
import sys

from loguru import logger

PACKAGE_NAME = "service_registry"


class InterceptHandler(logging.Handler):
    """Intercept standard logging messages toward loguru."""

    def emit(self, record):
        # Get corresponding loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(log_level: str, intercept_stdlib: bool = True) -> None:
    """Configure loguru and enable registry log output.

    Args:
        log_level: Log level to use (usually ``Settings.log_level``)
        intercept_stdlib: Redirect the standard ``logging`` module to loguru
    """
    log_level = log_level.upper()

    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=log_level,
        colorize=True,
    )
    logger.enable(PACKAGE_NAME)
    logger.debug(f"Log level set to: {log_level}")

    if intercept_stdlib:
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
