"""CPU frequency and usage."""

from __future__ import annotations

import os
from typing import Optional, Sequence

from .util import StatusError, fmt_human, read_line, read_uint

CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"
PROC_STAT = "/proc/stat"

# user nice system idle iowait irq softirq
_FIELDS = 7
_BUSY = (0, 1, 2, 5, 6)


def cpu_freq(unused: Optional[str] = None, path: os.PathLike | str = CPU_FREQ) -> Optional[str]:
    """Return the current frequency of the first CPU, scaled to Hz prefixes."""
    try:
        khz = read_uint(path)
    except StatusError:
        return None
    return fmt_human(khz * 1000, 1000)


class CpuUsage:
    """Usage in percent since the previous call, from the aggregate CPU line."""

    def __init__(self, stat_path: os.PathLike | str = PROC_STAT) -> None:
        self.stat_path = stat_path
        self._previous: Optional[Sequence[float]] = None

    def _sample(self) -> Optional[list]:
        try:
            fields = read_line(self.stat_path).split()[1 : 1 + _FIELDS]
            values = [float(field) for field in fields]
        except (StatusError, ValueError):
            return None
        return values if len(values) == _FIELDS else None

    def __call__(self, unused: Optional[str] = None) -> Optional[str]:
        current = self._sample()
        if current is None:
            return None
        previous, self._previous = self._previous, current
        if previous is None or previous[0] == 0:
            return None

        total = sum(previous) - sum(current)
        if total == 0:
            return None
        busy = sum(previous[i] for i in _BUSY) - sum(current[i] for i in _BUSY)
        return str(int(100 * busy / total))


_cpu_usage = CpuUsage()


def cpu_perc(unused: Optional[str] = None) -> Optional[str]:
    """Return the system-wide CPU usage since the previous call."""
    return _cpu_usage(unused)