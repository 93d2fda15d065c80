"""Logging configuration for the game core."""

import logging
import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(log_level: str, intercept_stdlib: bool = True) -> int:
    """Configure loguru logging for the whole process.

    Args:
        log_level: Log level to use (usually ``Settings.log_level``).
        intercept_stdlib: Route standard ``logging`` records into loguru.

    Returns:
        The id of the stderr sink, usable with ``logger.remove``.
    """
    log_level = log_level.upper()

    logger.remove()
    sink_id = logger.add(sys.stderr, format=LOG_FORMAT, level=log_level, colorize=True)
    logger.debug(f"Log level set to: {log_level}")

    if intercept_stdlib:
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
        for name in ("asyncio", "stockquest"):
            logging.getLogger(name).setLevel(log_level)

    return sink_id
