"""Memory and swap figures from the kernel's meminfo."""

from __future__ import annotations

import os
from typing import Dict, Optional

from .util import fmt_human, warn

MEMINFO = "/proc/meminfo"


def parse_meminfo(text: str) -> Dict[str, int]:
    """Map each ``Name: value kB`` line to its value in kB."""
    fields: Dict[str, int] = {}
    for line in text.splitlines():
        name, sep, rest = line.partition(":")
        if not sep:
            continue
        parts = rest.split()
        if parts and parts[0].isdigit():
            fields[name.strip()] = int(parts[0])
    return fields


def _meminfo(path: os.PathLike | str, *names: str) -> Optional[tuple]:
    try:
        with open(path, encoding="utf-8") as handle:
            fields = parse_meminfo(handle.read())
    except OSError as exc:
        warn(f"fopen '{path}'", exc)
        return None
    try:
        return tuple(fields[name] for name in names)
    except KeyError:
        return None


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def ram_free(unused: Optional[str] = None, path: os.PathLike | str = MEMINFO) -> Optional[str]:
    """Return the memory available for new allocations."""
    values = _meminfo(path, "MemAvailable")
    return None if values is None else fmt_human(values[0] * 1024, 1024)


def ram_perc(unused: Optional[str] = None, path: os.PathLike | str = MEMINFO) -> Optional[str]:
    """Return memory usage in percent, not counting buffers and cache."""
    values = _meminfo(path, "MemTotal", "MemFree", "Buffers", "Cached")
    if values is None:
        return None
    total, free, buffers, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * ((total - free) - (buffers + cached)), total))


def ram_total(unused: Optional[str] = None, path: os.PathLike | str = MEMINFO) -> Optional[str]:
    """Return the total memory size."""
    values = _meminfo(path, "MemTotal")
    return None if values is None else fmt_human(values[0] * 1024, 1024)


def ram_used(unused: Optional[str] = None, path: os.PathLike | str = MEMINFO) -> Optional[str]:
    """Return used memory, not counting buffers and cache."""
    values = _meminfo(path, "MemTotal", "MemFree", "Buffers", "Cached")
    if values is None:
        return None
    total, free, buffers, cached = values
    return fmt_human(max(total - free - buffers - cached, 0) * 1024, 1024)


def swap_free(unused: Optional[str] = None, path: os.PathLike | str = MEMINFO) -> Optional[str]:
    """Return the free swap space."""
    values = _meminfo(path, "SwapFree")
    return None if values is None else fmt_human(values[0] * 1024, 1024)


def swap_perc(unused: Optional[str] = None, path: os.PathLike | str = MEMINFO) -> Optional[str]:
    """Return swap usage in percent."""
    values = _meminfo(path, "SwapTotal", "SwapFree", "SwapCached")
    if values is None:
        return None
    total, free, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * (total - free - cached), total))


def swap_total(unused: Optional[str] = None, path: os.PathLike | str = MEMINFO) -> Optional[str]:
    """Return the total swap size."""
    values = _meminfo(path, "SwapTotal")
    return None if values is None else fmt_human(values[0] * 1024, 1024)


def swap_used(unused: Optional[str] = None, path: os.PathLike | str = MEMINFO) -> Optional[str]:
    """Return the used swap space."""
    values = _meminfo(path, "SwapTotal", "SwapFree", "SwapCached")
    if values is None:
        return None
    total, free, cached = values
    return fmt_human(max(total - free - cached, 0) * 1024, 1024)