"""
Logging setup
"""

import sys
from typing import Optional
from loguru import logger


def configure_logging(level: str = 'INFO', log_file: Optional[str] = None):
    """
    Configure loguru sinks

    Args:
        level: Minimum level for the stderr sink
        log_file: Optional path of a rotating DEBUG log file
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )
