# davinci_shared/core/sysinfo.py
# Copyright (c) 2026 Monolink Systems
# Licensed under AGPLv3 (Nebula Open Source Edition, non-corporate)
import logging
import math
import os
import time
from typing import Optional

import psutil

from .cgroup import DEFAULT_ROOT, cgroup_cpu_quota_cores

logger = logging.getLogger(__name__)


def unix_timestamp() -> int:
    """Return the current Unix timestamp in whole seconds, or 0 if unreadable."""
    try:
        seconds = time.time()
        if not math.isfinite(seconds) or seconds < 0:
            return 0
        return int(seconds)
    except (OSError, OverflowError, ValueError) as exc:
        logger.debug(f"wall clock unreadable: {exc}")
        return 0


def cpu_count(cgroup_root: str = DEFAULT_ROOT) -> int:
    """Return the number of logical CPUs this process may use, at least 1."""
    candidates = [n for n in (affinity_cpu_count(), quota_cpu_count(cgroup_root)) if n]
    if candidates:
        return min(candidates)
    return machine_cpu_count() or 1


def affinity_cpu_count() -> Optional[int]:
    # Not os.process_cpu_count: it returns PYTHON_CPU_COUNT as given.
    sched_getaffinity = getattr(os, "sched_getaffinity", None)
    if sched_getaffinity is not None:
        count = _positive(lambda: len(sched_getaffinity(0)))
        if count:
            return count

    return _positive(lambda: len(psutil.Process().cpu_affinity()))


def quota_cpu_count(cgroup_root: str = DEFAULT_ROOT) -> Optional[int]:
    try:
        return cgroup_cpu_quota_cores(root=cgroup_root)
    except Exception as exc:
        logger.debug(f"cgroup quota lookup failed: {exc}")
        return None


def machine_cpu_count() -> Optional[int]:
    # psutil first; os.cpu_count also follows PYTHON_CPU_COUNT on 3.13+.
    return _positive(lambda: psutil.cpu_count(logical=True)) or _positive(os.cpu_count)


def _positive(query) -> Optional[int]:
    try:
        value = query()
    except Exception as exc:
        logger.debug(f"cpu query {getattr(query, '__name__', query)} failed: {exc}")
        return None
    if isinstance(value, int) and value > 0:
        return value
    return None
