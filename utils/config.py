# utils/config.py
# This file is part of Cursorlog - A Resumable Commit History Walker
#
# Environment-driven configuration

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from model.exceptions import ConfigurationError

STORE_ENV_VAR = "GIT_DIR"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for a walk.

    Attributes:
        store_location: Git directory or graph file holding the records
    """

    store_location: Path


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from the environment.

    Args:
        environ: Environment mapping, defaults to ``os.environ``

    Returns:
        Settings for the current process

    Raises:
        ConfigurationError: If the store location is not set
    """
    if environ is None:
        environ = os.environ

    location = environ.get(STORE_ENV_VAR, "").strip()
    if not location:
        raise ConfigurationError(f"must set {STORE_ENV_VAR}")

    return Settings(store_location=Path(location).expanduser())
