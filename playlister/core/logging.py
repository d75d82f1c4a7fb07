"""Loguru setup shared by the bootstrap, repositories and services."""

from __future__ import annotations

import sys
from typing import Any

from loguru import logger

from .config import get_settings


def setup_logger(level: str | None = None) -> None:
    """Replace loguru's default sink with the application console sink."""
    settings = get_settings()
    logger.remove()
    logger.configure(extra={"service": "playlister", "module": "root"})
    logger.add(
        sink=sys.stderr,
        level=(level or settings.log_level),
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[module]}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=settings.app_env != "prod",
        backtrace=settings.app_env != "prod",
        diagnose=False,
    )


def get_logger(name: str) -> Any:
    """Logger bound to the calling module, usually ``get_logger(__name__)``."""
    return logger.bind(module=name, service="playlister")
