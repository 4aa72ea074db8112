# ffvideo/common/logging.py
from __future__ import annotations

import logging


def get_logger(name: str = "ffvideo", level: int | str | None = None) -> logging.Logger:
    """
    Return a package logger. If nothing configured the root logger yet
    (library used from a script), add a basicConfig once.
    Under uvicorn the server's handlers are reused as-is.
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if level is not None:
        logger.setLevel(level.upper() if isinstance(level, str) else level)
    return logger
