"""
Logging helpers.

Privacy rules for every log line in this project:
- NEVER log Supabase Auth tokens, API keys, or secrets
- Domain descriptions are user text: log them through truncate_for_log
- Do not log embedding vectors

Counts, model names, user_id, and sanitized error messages are fine.
"""

import logging
from typing import Optional

from prompt_recommender.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Return a logger with its own stderr handler.

    The level defaults to settings.LOG_LEVEL (INFO if that is not a valid
    level name). Calling this twice for the same name does not add a second
    handler.
    """
    logger = logging.getLogger(name)

    if level is None:
        configured = logging.getLevelName(settings.LOG_LEVEL.upper())
        level = configured if isinstance(configured, int) else logging.INFO
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def truncate_for_log(text: str, limit: int = 50) -> str:
    """Shorten free text before it goes into a log line."""
    if len(text) <= limit:
        return text
    return f"{text[:limit]}..."
