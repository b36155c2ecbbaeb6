"""
Logging setup for the EpicLeaderboard package.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Configure the package logger with a single stderr handler.

    stdout is left alone so the MCP stdio transport stays clean. Calling this
    again only updates the level.
    """
    logger = logging.getLogger("epic_leaderboard")

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger
