"""
Logging setup for the referral tree engine.

Configures loguru sinks for scripts and host applications that do not
configure logging themselves.
"""

import sys

from loguru import logger

from referral_tree.config import settings


def setup_logging(level: str | None = None, log_file: str | None = None) -> None:
    """
    Replace default loguru sinks.

    Args:
        level: Minimum level, settings.log_level when omitted
        log_file: Optional file path with daily rotation
    """
    level = (level or settings.log_level).upper()

    logger.remove()
    logger.add(sys.stderr, level=level)

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            level=level,
            encoding="utf-8",
        )

    logger.debug("Referral tree logging configured", extra={"level": level})
