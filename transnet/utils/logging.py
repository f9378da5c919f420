"""Logging setup for the translation-network pipeline and its analytics passes.

Every module asks for ``get_logger(__name__)``; the first call installs a
single stream handler on the root logger. ``TRANSNET_LOG_LEVEL`` overrides the
default level and ``TRANSNET_LOGGER_NAME`` the name used when none is given.
"""
from __future__ import annotations

import logging
import os
from typing import Optional, Union


_LOGGER_CACHE: dict[str, logging.Logger] = {}

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value."""
    if level is None:
        level = os.getenv("TRANSNET_LOG_LEVEL", "INFO")
    if isinstance(level, int):
        return level
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return numeric


def configure_root_logger(level: Union[int, str, None] = None) -> None:
    """Install the pipeline's handler once; later calls only adjust the level."""
    root = logging.getLogger()
    numeric = resolve_level(level)
    if root.handlers:
        root.setLevel(numeric)
        return
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logging.basicConfig(level=numeric, handlers=[handler])


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Retrieve a configured logger, caching it for reuse."""
    if name is None:
        name = os.getenv("TRANSNET_LOGGER_NAME", "transnet")
    if name not in _LOGGER_CACHE:
        if not logging.getLogger().handlers:
            configure_root_logger()
        _LOGGER_CACHE[name] = logging.getLogger(name)
    return _LOGGER_CACHE[name]
