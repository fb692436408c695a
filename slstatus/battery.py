"""Battery charge, state and remaining time from the power-supply class."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

from .util import StatusError, read_line, read_uint

POWER_SUPPLY = "/sys/class/power_supply"

STATE_SYMBOLS = {
    "Charging": "",
    "Discharging": "󱐋",
    "Full": "",
    "Not charging": "󰖎",
}

_STATE = re.compile(r"[a-zA-Z ]{1,12}")
_INT = re.compile(r"\s*([+-]?\d+)")


def _battery_dir(bat: str, sysfs_root: os.PathLike | str) -> Path:
    return Path(sysfs_root) / bat


def _read_state(directory: Path) -> Optional[str]:
    try:
        line = read_line(directory / "status")
    except StatusError:
        return None
    match = _STATE.match(line)
    return match.group(0) if match else None


def _pick(directory: Path, first: str, second: str) -> Optional[Path]:
    for name in (first, second):
        candidate = directory / name
        if os.access(candidate, os.R_OK):
            return candidate
    return None


def battery_perc(bat: str, sysfs_root: os.PathLike | str = POWER_SUPPLY) -> Optional[str]:
    """Return the battery capacity in percent."""
    try:
        line = read_line(_battery_dir(bat, sysfs_root) / "capacity")
    except StatusError:
        return None
    match = _INT.match(line)
    return str(int(match.group(1))) if match else None


def battery_state(bat: str, sysfs_root: os.PathLike | str = POWER_SUPPLY) -> Optional[str]:
    """Return a symbol for the charging state, or ``?`` if it is unknown."""
    state = _read_state(_battery_dir(bat, sysfs_root))
    if state is None:
        return None
    return STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str, sysfs_root: os.PathLike | str = POWER_SUPPLY) -> Optional[str]:
    """Return the time left while discharging as ``Hh Mm``, else an empty string."""
    directory = _battery_dir(bat, sysfs_root)
    state = _read_state(directory)
    if state is None:
        return None

    charge_path = _pick(directory, "charge_now", "energy_now")
    if charge_path is None:
        return None
    try:
        charge_now = read_uint(charge_path)
    except StatusError:
        return None

    if state != "Discharging":
        return ""

    current_path = _pick(directory, "current_now", "power_now")
    if current_path is None:
        return None
    try:
        current_now = read_uint(current_path)
    except StatusError:
        return None
    if current_now == 0:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"