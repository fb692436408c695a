"""Commands, temperature, uptime, user identity and pamixer volume."""

from __future__ import annotations

import os
import pwd
import re
import subprocess
import time
from typing import Optional, Sequence

from .util import MAX_LINE, StatusError, read_uint, warn

UNKNOWN_STR = "n/a"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def run_command(cmd: str) -> Optional[str]:
    """Run ``cmd`` in a shell and return the first line it prints."""
    try:
        proc = subprocess.Popen(cmd, shell=True, stdout=subprocess.PIPE)
    except OSError as exc:
        warn(f"popen '{cmd}'", exc)
        return None
    with proc:
        assert proc.stdout is not None
        raw = proc.stdout.readline(MAX_LINE)
        proc.stdout.close()
        proc.wait()
    line = raw.decode("utf-8", errors="replace")
    if line.endswith("\n"):
        line = line[:-1]
    return line or None


def temp(file: os.PathLike | str) -> Optional[str]:
    """Return a millidegree sensor reading in whole degrees Celsius."""
    try:
        return str(read_uint(file) // 1000)
    except StatusError:
        return None


def format_uptime(seconds: int) -> str:
    """Format a number of seconds as ``Hh Mm``."""
    hours, rest = divmod(int(seconds), 3600)
    return f"{hours}h {rest // 60}m"


def _uptime_clock() -> int:
    for name in ("CLOCK_BOOTTIME", "CLOCK_UPTIME"):
        clock = getattr(time, name, None)
        if clock is not None:
            return clock
    return time.CLOCK_MONOTONIC


def uptime(unused: Optional[str] = None) -> Optional[str]:
    """Return the time since boot."""
    clock = _uptime_clock()
    try:
        seconds = time.clock_gettime(clock)
    except OSError as exc:
        warn(f"clock_gettime {clock}", exc)
        return None
    return format_uptime(int(seconds))


def gid(unused: Optional[str] = None) -> str:
    """Return the real group id."""
    return str(os.getgid())


def uid(unused: Optional[str] = None) -> str:
    """Return the effective user id."""
    return str(os.geteuid())


def username(unused: Optional[str] = None) -> Optional[str]:
    """Return the name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError as exc:
        warn(f"getpwuid '{euid}'", exc)
        return None


def volume_icon(volume: int, muted: bool) -> str:
    """Pick a speaker icon for a volume level."""
    if muted:
        return "󰖁"
    if volume <= 33:
        return "󰕿"
    if volume <= 66:
        return "󰖀"
    return "󰕾"


def _first_line(argv: Sequence[str]) -> Optional[str]:
    try:
        result = subprocess.run(list(argv), capture_output=True, text=True)
    except OSError:
        return None
    lines = result.stdout.splitlines()
    return lines[0] if lines else None


def pamixer_status(unused: Optional[str] = None) -> str:
    """Return a volume icon and percentage as reported by pamixer."""
    mute = _first_line(["pamixer", "--get-mute"])
    muted = mute is not None and mute.startswith("true")

    volume_line = _first_line(["pamixer", "--get-volume"])
    if volume_line is None:
        return UNKNOWN_STR
    match = _LEADING_INT.match(volume_line)
    volume = int(match.group(1)) if match else 0
    return f"{volume_icon(volume, muted)} {volume}%"