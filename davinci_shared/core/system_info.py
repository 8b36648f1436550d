# davinci_shared/core/system_info.py
# Copyright (c) 2026 Monolink Systems
# Licensed under AGPLv3 (Nebula Open Source Edition, non-corporate)
import logging
import platform

from .cgroup import DEFAULT_ROOT
from .sysinfo import cpu_count, machine_cpu_count, quota_cpu_count, unix_timestamp

logger = logging.getLogger(__name__)


def _describe(query):
    try:
        return query() or None
    except Exception as exc:
        logger.debug(f"platform query {getattr(query, '__name__', query)} failed: {exc}")
        return None


def get_system_info(settings=None):
    """One-shot snapshot of the library readings plus host descriptors.

    ``settings`` only changes where cgroup limits are read from; the readers
    themselves never load configuration.
    """
    from .. import version

    cgroup_root = settings.CGROUP_ROOT if settings is not None else DEFAULT_ROOT
    return {
        "version": version(),
        "os": _describe(platform.system),
        "release": _describe(platform.release),
        "python": _describe(platform.python_version),
        "hostname": _describe(platform.node),
        "cpu_count": cpu_count(cgroup_root),
        "cpu_count_machine": machine_cpu_count(),
        "cpu_quota_cores": quota_cpu_count(cgroup_root),
        "unix_timestamp": unix_timestamp(),
    }


def log_system_info(settings=None):
    """Log the snapshot through a configured logger and return it."""
    from ..utils.config import get_settings
    from ..utils.logger import get_logger

    if settings is None:
        settings = get_settings()
    report_logger = get_logger("davinci_shared.system", settings)
    info = get_system_info(settings)
    report_logger.info(
        f"[System] v{info['version']} | OS={info['os']} {info['release']} | "
        f"Host={info['hostname']} | CPU={info['cpu_count']} "
        f"(machine={info['cpu_count_machine']}, quota={info['cpu_quota_cores']}) | "
        f"Unix={info['unix_timestamp']}"
    )
    return info
