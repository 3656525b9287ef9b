# medianorm/common/logging.py
from __future__ import annotations

import logging

from medianorm.common.settings import get_settings


def get_logger(name: str | None = None, level: int | str | None = None) -> logging.Logger:
    """
    Return a package logger (defaults to the app-wide one).
    If no handlers are set anywhere, we add a basicConfig once at the
    configured LOG_LEVEL so diagnostics are visible when run standalone.
    """
    cfg = get_settings()
    logger = logging.getLogger(name or cfg.app_name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=cfg.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if level is not None:
        logger.setLevel(level)
    return logger
