"""
core/logging.py

Single place where the loguru sink is configured. Modules just do
`from loguru import logger` and log; `setup_logging()` runs once at startup.
"""

import sys

from loguru import logger

from island_properties.core.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level> | {extra}"
)


def setup_logging(level: str | None = None) -> None:
    """Replace loguru's default handler with one honouring LOG_LEVEL."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        backtrace=settings.DEBUG,
        diagnose=False,  # locals can hold plaintext passwords
    )
