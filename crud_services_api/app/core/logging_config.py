"""
Logging for the services.

Everything the project logs goes through loggers below
``crud_services_api`` (``logging.getLogger(__name__)`` in each
module).  ``setup_logging`` attaches the handlers to that package
logger instead of the root logger, so the configuration applies even
when uvicorn or a test runner has already set up the root logger.

``run.py`` builds several applications in one process and each build
calls ``setup_logging``; later calls only change the level.
"""

import logging
from pathlib import Path
from typing import List, Optional

PACKAGE_LOGGER = "crud_services_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure and return the ``crud_services_api`` logger.

    Parameters
    ----------
    level : str
        Level name such as ``"DEBUG"`` or ``"info"``.  Unknown names
        fall back to ``INFO``.
    logfile : Optional[str]
        Also write to this file, creating its directory if needed.
        Ignored once handlers are attached.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    numeric_level = getattr(logging, level.upper(), None)
    logger.setLevel(numeric_level if isinstance(numeric_level, int) else logging.INFO)
    if logger.handlers:
        return logger

    for handler in _build_handlers(logfile):
        logger.addHandler(handler)
    # Records are handled here; the root logger would print them twice
    logger.propagate = False
    return logger
