"""
Console logging for the API, UI and build scripts.

The level comes from Settings.log_level (CONTACT_PRICING_LOG_LEVEL) unless
given explicitly. Calling configure_logging again replaces the handler
instead of stacking a second one.
"""
import logging
import sys
from typing import Optional

from .settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "streamlit")


def configure_logging(level: Optional[str] = None, settings: Optional[Settings] = None) -> logging.Handler:
    """
    Install a single stdout handler on the root logger.

    Returns the installed handler.
    """
    settings = settings or get_settings()
    level = (level or settings.log_level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("contact_pricing").debug("Logging configured at %s", level)
    return handler
