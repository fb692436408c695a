"""Master volume from an OSS mixer device."""

from __future__ import annotations

import fcntl
import os
import struct
from typing import Optional

from .util import warn

SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic", "cd",
    "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2", "line3",
    "dig1", "dig2", "dig3", "phin", "phout", "video", "radio", "monitor",
)

_IOC_READ = 2
_INT = struct.Struct("i")
SOUND_MIXER_DEVMASK = 0xFE


def mixer_read_request(channel: int) -> int:
    """Return the ioctl request number that reads mixer ``channel``."""
    return (_IOC_READ << 30) | (_INT.size << 16) | (ord("M") << 8) | channel


SOUND_MIXER_READ_DEVMASK = mixer_read_request(SOUND_MIXER_DEVMASK)


def _ioctl_int(fd: int, request: int) -> int:
    result = fcntl.ioctl(fd, request, _INT.pack(0))
    return _INT.unpack(result)[0]


def vol_perc(card: os.PathLike | str) -> Optional[str]:
    """Return the left-channel master volume in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as exc:
        warn(f"open '{card}'", exc)
        return None
    value = None
    try:
        try:
            devmask = _ioctl_int(fd, SOUND_MIXER_READ_DEVMASK)
        except OSError as exc:
            warn("ioctl 'SOUND_MIXER_READ_DEVMASK'", exc)
            return None
        for channel, name in enumerate(SOUND_DEVICE_NAMES):
            if devmask & (1 << channel) and name == "vol":
                try:
                    value = _ioctl_int(fd, mixer_read_request(channel))
                except OSError as exc:
                    warn(f"ioctl 'MIXER_READ({channel})'", exc)
                    return None
    finally:
        os.close(fd)
    if value is None:
        return None
    return str(value & 0xFF)