# davinci_shared/core/cgroup.py
# Copyright (c) 2026 Monolink Systems
# Licensed under AGPLv3 (Nebula Open Source Edition, non-corporate)
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_ROOT = "/sys/fs/cgroup"
PROC_SELF_CGROUP = "/proc/self/cgroup"
PROC_SELF_MOUNTINFO = "/proc/self/mountinfo"
DEFAULT_PERIOD_US = 100000


def quota_to_cores(quota: int, period: int) -> Optional[int]:
    """Whole cores for a CFS quota; a quota below one period still counts as one."""
    if quota <= 0 or period <= 0:
        return None
    return max(1, quota // period)


def parse_cpu_max(text: str) -> Optional[int]:
    """Turn a v2 cpu.max body ("<quota> <period>") into whole cores. "max" is unlimited."""
    parts = str(text or "").split()
    if not parts or parts[0] == "max":
        return None
    try:
        quota = int(parts[0])
        period = int(parts[1]) if len(parts) > 1 else DEFAULT_PERIOD_US
    except ValueError:
        return None
    return quota_to_cores(quota, period)


def parse_cfs(quota_text: str, period_text: str) -> Optional[int]:
    """Turn v1 cpu.cfs_quota_us / cpu.cfs_period_us into whole cores. -1 is unlimited."""
    try:
        quota = int(str(quota_text).strip())
        period = int(str(period_text).strip())
    except ValueError:
        return None
    return quota_to_cores(quota, period)


def _relative(path: str) -> Optional[str]:
    rel = str(path or "").strip().lstrip("/")
    if ".." in Path(rel).parts:
        return None
    return rel


def _walk_up(group: Path, top: Path) -> Iterator[Path]:
    current = group
    while current == top or top in current.parents:
        yield current
        if current == top:
            return
        current = current.parent


class CgroupV2Reader:
    """Read-only view of the unified-hierarchy CPU limits applied to this process."""

    def __init__(self, root: str = DEFAULT_ROOT, proc_self_cgroup: str = PROC_SELF_CGROUP):
        self.root = Path(str(root or DEFAULT_ROOT).strip() or DEFAULT_ROOT)
        self.proc_self_cgroup = Path(proc_self_cgroup)

    def available(self) -> bool:
        return (self.root / "cgroup.controllers").exists()

    def group_path(self) -> Optional[Path]:
        try:
            lines = self.proc_self_cgroup.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            logger.debug(f"cannot read {self.proc_self_cgroup}: {exc}")
            return None

        for line in lines:
            if line.startswith("0::"):
                rel = _relative(line.split("0::", 1)[1])
                if rel is None:
                    return None
                return self.root / rel if rel else self.root
        return None

    def cpu_quota_cores(self) -> Optional[int]:
        """Tightest cpu.max limit between our group and the root, in cores."""
        if not self.available():
            return None
        group = self.group_path()
        if group is None:
            return None

        limits = []
        for path in _walk_up(group, self.root):
            try:
                body = (path / "cpu.max").read_text(encoding="utf-8")
            except OSError:
                continue
            cores = parse_cpu_max(body)
            if cores is not None:
                limits.append(cores)
        return min(limits) if limits else None


class CgroupV1Reader:
    """CFS quota of the v1 cpu controller, for legacy and hybrid hosts."""

    def __init__(
        self,
        root: str = DEFAULT_ROOT,
        proc_self_cgroup: str = PROC_SELF_CGROUP,
        proc_self_mountinfo: str = PROC_SELF_MOUNTINFO,
    ):
        self.root = Path(str(root or DEFAULT_ROOT).strip() or DEFAULT_ROOT)
        self.proc_self_cgroup = Path(proc_self_cgroup)
        self.proc_self_mountinfo = Path(proc_self_mountinfo)

    def cpu_group(self) -> Optional[str]:
        """Group path of the cpu controller from /proc/self/cgroup, e.g. "/docker/abc"."""
        try:
            lines = self.proc_self_cgroup.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            logger.debug(f"cannot read {self.proc_self_cgroup}: {exc}")
            return None

        for line in lines:
            parts = line.split(":", 2)
            if len(parts) != 3 or not parts[1]:
                continue
            if "cpu" in parts[1].split(","):
                return parts[2].strip() or "/"
        return None

    def mounts(self) -> List[Tuple[str, Path]]:
        """(mount root, mount point) pairs of v1 hierarchies carrying the cpu controller."""
        out: List[Tuple[str, Path]] = []
        try:
            lines = self.proc_self_mountinfo.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            logger.debug(f"cannot read {self.proc_self_mountinfo}: {exc}")
            lines = []

        for line in lines:
            head, sep, tail = line.partition(" - ")
            if not sep:
                continue
            fields = head.split()
            fs = tail.split()
            if len(fields) < 5 or len(fs) < 3 or fs[0] != "cgroup":
                continue
            if "cpu" in fs[2].split(","):
                out.append((fields[3], Path(fields[4])))

        if not out:
            # No mountinfo: assume the usual systemd layout below root.
            for name in ("cpu,cpuacct", "cpuacct,cpu", "cpu"):
                candidate = self.root / name
                if candidate.is_dir():
                    out.append(("/", candidate))
                    break
        return out

    def cpu_quota_cores(self) -> Optional[int]:
        group = self.cpu_group()
        if group is None:
            return None

        for mount_root, mount_point in self.mounts():
            # Inside containers the mount root is usually the group itself.
            mount_root = "/" + mount_root.strip("/")
            group_abs = "/" + group.strip("/")
            if mount_root == "/":
                rel = group_abs
            elif group_abs == mount_root or group_abs.startswith(mount_root + "/"):
                rel = group_abs[len(mount_root):]
            else:
                continue
            rel = _relative(rel)
            if rel is None:
                continue

            limits = []
            for path in _walk_up(mount_point / rel if rel else mount_point, mount_point):
                try:
                    quota = (path / "cpu.cfs_quota_us").read_text(encoding="utf-8")
                    period = (path / "cpu.cfs_period_us").read_text(encoding="utf-8")
                except OSError:
                    continue
                cores = parse_cfs(quota, period)
                if cores is not None:
                    limits.append(cores)
            if limits:
                return min(limits)
        return None


def cgroup_cpu_quota_cores(
    root: str = DEFAULT_ROOT,
    proc_self_cgroup: str = PROC_SELF_CGROUP,
    proc_self_mountinfo: str = PROC_SELF_MOUNTINFO,
) -> Optional[int]:
    """Tightest CPU quota from either hierarchy; hybrid hosts may carry both."""
    limits = [
        n
        for n in (
            CgroupV2Reader(root, proc_self_cgroup).cpu_quota_cores(),
            CgroupV1Reader(root, proc_self_cgroup, proc_self_mountinfo).cpu_quota_cores(),
        )
        if n
    ]
    return min(limits) if limits else None
