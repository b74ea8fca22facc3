# mdclip/utils/logger.py

import logging
import os
import sys
from pathlib import Path
from platformdirs import user_log_dir

from mdclip.config import APP_NAME, APP_AUTHOR

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def _has_handler(logger, kind):
    return any(getattr(h, "_mdclip_kind", None) == kind for h in logger.handlers)


def _attach(logger, handler, kind, level, fmt):
    handler._mdclip_kind = kind
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)


def setup_logger(console=False):
    """
    Configure the "mdclip" logger.

    Records go to a file in the user log dir when MDCLIP_DEBUG is set, and to
    stderr when ``console`` is true (``mdclip --verbose``). With neither, the
    logger stays silent. Safe to call again; handlers are added once.
    """
    logger = logging.getLogger(APP_NAME)
    logger.propagate = False
    debug_file = bool(os.environ.get("MDCLIP_DEBUG"))

    if console:
        logger.setLevel(logging.DEBUG)
        if not _has_handler(logger, "console"):
            _attach(logger, logging.StreamHandler(sys.stderr), "console", logging.DEBUG, CONSOLE_FORMAT)
    elif debug_file:
        logger.setLevel(min(logger.level or logging.INFO, logging.INFO))

    if debug_file and not _has_handler(logger, "file"):
        log_dir = Path(user_log_dir(appname=APP_NAME, appauthor=APP_AUTHOR))
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "app.debug.log", encoding="utf-8")
        _attach(logger, fh, "file", logging.INFO, LOG_FORMAT)

    if not console and not debug_file:
        logger.setLevel(logging.CRITICAL)
        if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
            logger.addHandler(logging.NullHandler())
    return logger


logger = setup_logger()
