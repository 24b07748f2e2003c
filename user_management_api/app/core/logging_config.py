"""
Logging setup for the User Management API.

``setup_logging`` attaches the service's console handler (and,
optionally, a file handler) to the root logger and routes Uvicorn's
loggers through them, so application and server messages share one
format.  The service's handlers are named; handlers installed by
anyone else, such as a test runner's capture handler, are left alone
and do not count as "already configured".
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

CONSOLE_HANDLER_NAME = "user_management_api.console"
FILE_HANDLER_NAME = "user_management_api.file"

# Uvicorn attaches its own handlers to these when it configures logging.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def service_handlers(logger: logging.Logger) -> List[logging.Handler]:
    """Handlers on ``logger`` that were installed by ``setup_logging``."""
    return [h for h in logger.handlers if h.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME)]


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> bool:
    """Configure the root logger for the service.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  Missing parent directories
        are created.  If omitted, no file handler is added.

    Returns
    -------
    bool
        ``True`` if the service handlers were attached, ``False`` if a
        previous call already attached them.
    """
    root = logging.getLogger()
    if service_handlers(root):
        # e.g. a second ``create_app`` call in the same process.
        return False

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    root.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True

    return True
