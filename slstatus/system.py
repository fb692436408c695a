"""File contents, time, disks, entropy, host and load readings."""

from __future__ import annotations

import os
import socket
import time
from typing import Optional

from .util import StatusError, fmt_human, read_uint, warn, MAX_LINE

ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"
_BUFFER = 1024


def cat(path: os.PathLike | str) -> Optional[str]:
    """Return the first line of a file, or None if it is empty."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(MAX_LINE)
    except OSError as exc:
        warn(f"fopen '{path}'", exc)
        return None
    if line.endswith("\n"):
        line = line[:-1]
    return line or None


def datetime(fmt: str) -> Optional[str]:
    """Return the local time formatted with ``fmt``."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result.encode("utf-8")) >= _BUFFER:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def _statvfs(path: os.PathLike | str) -> Optional[os.statvfs_result]:
    try:
        return os.statvfs(path)
    except OSError as exc:
        warn(f"statvfs '{path}'", exc)
        return None


def disk_free(path: os.PathLike | str) -> Optional[str]:
    """Return the space available to unprivileged users."""
    fs = _statvfs(path)
    return None if fs is None else fmt_human(fs.f_frsize * fs.f_bavail, 1024)


def disk_perc(path: os.PathLike | str) -> Optional[str]:
    """Return the disk usage in percent."""
    fs = _statvfs(path)
    if fs is None or fs.f_blocks == 0:
        return None
    return str(int(100 * (1 - fs.f_bavail / fs.f_blocks)))


def disk_total(path: os.PathLike | str) -> Optional[str]:
    """Return the total size of the file system."""
    fs = _statvfs(path)
    return None if fs is None else fmt_human(fs.f_frsize * fs.f_blocks, 1024)


def disk_used(path: os.PathLike | str) -> Optional[str]:
    """Return the used space of the file system."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * (fs.f_blocks - fs.f_bfree), 1024)


def entropy(unused: Optional[str] = None, path: os.PathLike | str = ENTROPY_AVAIL) -> Optional[str]:
    """Return the kernel's available entropy."""
    try:
        return str(read_uint(path))
    except StatusError:
        return None


def hostname(unused: Optional[str] = None) -> Optional[str]:
    """Return the host name."""
    try:
        return socket.gethostname()
    except OSError as exc:
        warn("gethostname", exc)
        return None


def kernel_release(unused: Optional[str] = None) -> Optional[str]:
    """Return the kernel release, as ``uname -r`` prints it."""
    try:
        return os.uname().release
    except OSError as exc:
        warn("uname", exc)
        return None


def load_avg(unused: Optional[str] = None) -> Optional[str]:
    """Return the 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def num_files(path: os.PathLike | str) -> Optional[str]:
    """Return the number of entries in a directory."""
    try:
        with os.scandir(path) as entries:
            count = sum(1 for _ in entries)
    except OSError as exc:
        warn(f"opendir '{path}'", exc)
        return None
    return str(count)