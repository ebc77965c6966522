"""Logging configuration with Rich formatting.

setup_logging() installs a RichHandler at LOG_LEVEL and keeps the chatty
httpx, openai and trafilatura loggers at WARNING so request logs from
article fetches and model calls do not drown out the analysis log lines.
"""

import logging
from rich.logging import RichHandler
from .config import get_settings

def setup_logging():
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)]
    )
    
    # Quiet down some noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("trafilatura").setLevel(logging.WARNING)

def get_logger(name: str):
    return logging.getLogger(name)
