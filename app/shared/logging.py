"""Logging configuration for the application."""

import logging
import sys
import warnings

from app.core.config import get_settings
from app.shared.context import RequestIdLogFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise settings.log_level.
    Output goes to stdout and every line carries the current request ID.
    In the dev environment Python warnings are routed through logging and
    deprecation warnings from third-party packages are silenced so they do
    not flood the console.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else settings.log_level.upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdLogFilter())
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[handler],
    )
    if settings.app_env == "dev":
        logging.captureWarnings(True)
        warnings.filterwarnings("ignore", category=DeprecationWarning)
        warnings.filterwarnings("ignore", category=PendingDeprecationWarning)

