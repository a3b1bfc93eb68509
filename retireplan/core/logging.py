import logging
import sys
from typing import Optional

from retireplan.config import settings
from retireplan.utils.logging_redaction import install_redaction_filter


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure centralized application logging.
    """
    level = level or settings.LOG_LEVEL
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # Filters on handlers also see records propagated from child loggers
    install_redaction_filter()


def get_logger(name: str) -> logging.Logger:
    """
    Retrieve a namespaced logger.
    """
    return logging.getLogger(name)
