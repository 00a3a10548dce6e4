# utils/__init__.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Utility module exports

from .config import Settings, load_settings, STORE_ENV_VAR
from .logger import LogLevel, get_logger, configure_logging

__all__ = [
    "Settings",
    "load_settings",
    "STORE_ENV_VAR",
    "LogLevel",
    "get_logger",
    "configure_logging",
]
