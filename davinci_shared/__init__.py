# davinci_shared/__init__.py
# Copyright (c) 2026 Monolink Systems
# Licensed under AGPLv3 (Nebula Open Source Edition, non-corporate)
"""Small system-information helpers shared across DaVinci components."""

import logging
from importlib.metadata import PackageNotFoundError, version as _dist_version

from .core.sysinfo import cpu_count, unix_timestamp
from .core.system_info import get_system_info, log_system_info

__all__ = ["cpu_count", "get_system_info", "log_system_info", "unix_timestamp", "version"]

DIST_NAME = "davinci-shared"
# Keep in sync with pyproject.toml.
__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def version() -> str:
    """Return the installed distribution version."""
    try:
        return _dist_version(DIST_NAME)
    except PackageNotFoundError:
        return __version__
