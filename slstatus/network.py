"""Interface addresses, link state and transfer rates."""

from __future__ import annotations

import os
import socket
from pathlib import Path
from typing import Optional

import psutil

from .util import StatusError, fmt_human, read_uint, warn

NET_CLASS = "/sys/class/net"
DEFAULT_INTERVAL_MS = 1000

_COUNTER_MODULUS = 2**64


def _addresses(interface: str) -> Optional[list]:
    try:
        table = psutil.net_if_addrs()
    except OSError as exc:
        warn("getifaddrs", exc)
        return None
    return table.get(interface)


def _ip(interface: str, family: int) -> Optional[str]:
    for addr in _addresses(interface) or ():
        if addr.family == family:
            return addr.address
    return None


def ipv4(interface: str) -> Optional[str]:
    """Return the first IPv4 address of ``interface``."""
    return _ip(interface, socket.AF_INET)


def ipv6(interface: str) -> Optional[str]:
    """Return the first IPv6 address of ``interface``."""
    return _ip(interface, socket.AF_INET6)


def up(interface: str) -> Optional[str]:
    """Return ``up`` or ``down`` for an interface that has an address entry."""
    if not _addresses(interface):
        return None
    try:
        stats = psutil.net_if_stats().get(interface)
    except OSError as exc:
        warn("getifaddrs", exc)
        return None
    if stats is None:
        return None
    return "up" if stats.isup else "down"


class NetSpeed:
    """Bytes per second through an interface since the previous call."""

    def __init__(
        self,
        direction: str,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        sysfs_root: os.PathLike | str = NET_CLASS,
    ) -> None:
        if direction not in ("rx", "tx"):
            raise ValueError(f"direction must be 'rx' or 'tx', not {direction!r}")
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.direction = direction
        self.interval_ms = interval_ms
        self.sysfs_root = Path(sysfs_root)
        self._bytes = 0

    def __call__(self, interface: str) -> Optional[str]:
        previous = self._bytes
        path = self.sysfs_root / interface / "statistics" / f"{self.direction}_bytes"
        try:
            self._bytes = read_uint(path)
        except StatusError:
            return None
        if previous == 0:
            return None
        delta = (self._bytes - previous) % _COUNTER_MODULUS
        return fmt_human(delta * 1000 // self.interval_ms, 1024)


_rx = NetSpeed("rx")
_tx = NetSpeed("tx")


def netspeed_rx(interface: str) -> Optional[str]:
    """Return the receive rate of ``interface``."""
    return _rx(interface)


def netspeed_tx(interface: str) -> Optional[str]:
    """Return the transmit rate of ``interface``."""
    return _tx(interface)