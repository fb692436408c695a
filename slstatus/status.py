"""The status line: components, argument parsing and the update loop."""

from __future__ import annotations

import contextlib
import os
import re
import signal
import socket
import struct
import sys
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, TextIO

from . import battery, cpu, memory, misc, system, wifi
from .util import StatusError, die, warn

VERSION = "1.1"
PROG = "slstatus"

# Interval between updates, in milliseconds.
INTERVAL_MS = 1000
# Text shown when a component has no value.
UNKNOWN_STR = "n/a"
# Maximum length of the status line in bytes, terminator included.
MAXLEN = 2048

_CONVERSION = re.compile(r"%[%s]")


@dataclass(frozen=True)
class Arg:
    """One status component: a reading function, its format and its argument."""

    func: Callable[[Optional[str]], Optional[str]]
    fmt: str
    args: Optional[str] = None


@dataclass
class Options:
    """Command-line options: print to stdout, and stop after one update."""

    to_stdout: bool = False
    once: bool = False


def default_args() -> List[Arg]:
    """Return the configured list of status components."""
    return [
        Arg(wifi.wifi_perc, "%s ", "wlp0s20f3"),
        Arg(wifi.wifi_essid, " %s │ ", "wlp0s20f3"),
        Arg(misc.pamixer_status, "%s │", None),
        Arg(cpu.cpu_perc, " 󰘚 %s%%   ", None),
        Arg(memory.ram_perc, " 󰍛 %s%% │", None),
        Arg(battery.battery_state, " %s ", "BAT1"),
        Arg(battery.battery_perc, "%s%% │", "BAT1"),
        Arg(system.datetime, " 󰥔  %s", "%m/%d %H:%M"),
    ]


def _usage() -> None:
    die(f"usage: {PROG} [-v] [-s] [-1]")


def parse_args(argv: Optional[Sequence[str]] = None) -> Options:
    """Parse command-line flags; exit on ``-v`` or on bad usage."""
    argv = list(sys.argv[1:] if argv is None else argv)
    options = Options()
    index = 0
    while index < len(argv):
        arg = argv[index]
        if not arg.startswith("-") or arg == "-":
            break
        index += 1
        if arg == "--":
            break
        for flag in arg[1:]:
            if flag == "v":
                die(f"{PROG}-{VERSION}")
            elif flag == "1":
                options.once = True
                options.to_stdout = True
            elif flag == "s":
                options.to_stdout = True
            else:
                _usage()
    if index < len(argv):
        _usage()
    return options


def _format(fmt: str, value: str) -> str:
    return _CONVERSION.sub(lambda m: "%" if m.group(0) == "%%" else value, fmt)


def build_status(
    args: Iterable[Arg], unknown_str: str = UNKNOWN_STR, maxlen: int = MAXLEN
) -> str:
    """Render every component into one line of at most ``maxlen - 1`` bytes."""
    pieces: List[bytes] = []
    used = 0
    for arg in args:
        result = arg.func(arg.args)
        if result is None:
            result = unknown_str
        piece = _format(arg.fmt, result).encode("utf-8")
        room = maxlen - used
        if len(piece) >= room:
            warn("vsnprintf: Output truncated")
            if room > 1:
                pieces.append(piece[: room - 1])
            break
        pieces.append(piece)
        used += len(piece)
    return b"".join(pieces).decode("utf-8", errors="ignore")


def _pad(length: int) -> int:
    return (-length) % 4


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    chunks = []
    while size > 0:
        chunk = sock.recv(size)
        if not chunk:
            raise StatusError("connection closed by X server")
        chunks.append(chunk)
        size -= len(chunk)
    return b"".join(chunks)


def _read_counted(data: bytes, offset: int) -> tuple:
    (length,) = struct.unpack_from(">H", data, offset)
    start = offset + 2
    return data[start : start + length], start + length


def _xauth_cookie(number: str, local: bool) -> tuple:
    path = os.environ.get("XAUTHORITY") or os.path.expanduser("~/.Xauthority")
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        return b"", b""
    host = socket.gethostname().encode()
    offset = 0
    try:
        while offset < len(data):
            (family,) = struct.unpack_from(">H", data, offset)
            address, offset = _read_counted(data, offset + 2)
            entry_number, offset = _read_counted(data, offset)
            name, offset = _read_counted(data, offset)
            cookie, offset = _read_counted(data, offset)
            if entry_number and entry_number.decode(errors="replace") != number:
                continue
            if name != b"MIT-MAGIC-COOKIE-1":
                continue
            if family == 65535 or not local or (family == 256 and address == host):
                return name, cookie
    except struct.error:
        pass
    return b"", b""


class _XDisplay:
    """A minimal X11 connection that sets the root window's name."""

    _CHANGE_PROPERTY = 18
    _WM_NAME = 39
    _STRING = 31

    def __init__(self, sock: socket.socket, root: int) -> None:
        self._sock = sock
        self.root = root

    @classmethod
    def open(cls, display: Optional[str] = None) -> "_XDisplay":
        display = display if display is not None else os.environ.get("DISPLAY", "")
        host, sep, rest = display.rpartition(":")
        if not sep or not rest:
            raise StatusError("no display")
        number, _, screen_text = rest.partition(".")
        screen = int(screen_text) if screen_text else 0
        local = host in ("", "unix") or host.startswith("/")
        if local:
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            target: object = f"/tmp/.X11-unix/X{number}"
        else:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            target = (host, 6000 + int(number))
        try:
            sock.connect(target)
            root = cls._handshake(sock, number, screen, local)
        except (OSError, StatusError, ValueError, struct.error):
            sock.close()
            raise StatusError(f"cannot open display {display!r}")
        return cls(sock, root)

    @staticmethod
    def _handshake(sock: socket.socket, number: str, screen: int, local: bool) -> int:
        name, cookie = _xauth_cookie(number, local)
        request = struct.pack("<BxHHHHxx", ord("l"), 11, 0, len(name), len(cookie))
        request += name + b"\0" * _pad(len(name)) + cookie + b"\0" * _pad(len(cookie))
        sock.sendall(request)
        header = _recv_exact(sock, 8)
        (extra,) = struct.unpack_from("<H", header, 6)
        data = _recv_exact(sock, extra * 4)
        if header[0] != 1:
            raise StatusError("X server refused the connection")
        (vendor_len,) = struct.unpack_from("<H", data, 16)
        num_screens, num_formats = data[20], data[21]
        if screen >= num_screens:
            raise StatusError("no such screen")
        offset = 32 + vendor_len + _pad(vendor_len) + 8 * num_formats
        for _ in range(screen):
            num_depths = data[offset + 39]
            offset += 40
            for _ in range(num_depths):
                (num_visuals,) = struct.unpack_from("<H", data, offset + 2)
                offset += 8 + 24 * num_visuals
        (root,) = struct.unpack_from("<I", data, offset)
        return root

    def store_name(self, name: Optional[str]) -> None:
        """Set the root window's name, or clear it when ``name`` is None."""
        payload = (name or "").encode("utf-8")
        padding = _pad(len(payload))
        request = struct.pack(
            "<BBHIIIBxxxI",
            self._CHANGE_PROPERTY, 0, 6 + (len(payload) + padding) // 4,
            self.root, self._WM_NAME, self._STRING, 8, len(payload),
        )
        self._sock.sendall(request + payload + b"\0" * padding)

    def close(self) -> None:
        self._sock.close()


@contextlib.contextmanager
def _signal_handlers(stop: threading.Event, wake: threading.Event) -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def terminate(signo: int, frame: object) -> None:
        if signo != signal.SIGUSR1:
            stop.set()
        wake.set()

    previous = {
        signo: signal.signal(signo, terminate)
        for signo in (signal.SIGINT, signal.SIGTERM, signal.SIGUSR1)
    }
    try:
        yield
    finally:
        for signo, handler in previous.items():
            signal.signal(signo, handler)


def run(
    args: Optional[Iterable[Arg]] = None,
    interval_ms: int = INTERVAL_MS,
    once: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Update the status every ``interval_ms`` until stopped.

    With a ``stream`` each status is printed as a line to it; without one it
    becomes the name of the X root window. SIGINT and SIGTERM stop the loop,
    SIGUSR1 forces an immediate update.
    """
    components = default_args() if args is None else list(args)
    stop = threading.Event()
    wake = threading.Event()
    if once:
        stop.set()

    display: Optional[_XDisplay] = None
    if stream is None:
        try:
            display = _XDisplay.open()
        except StatusError:
            die("XOpenDisplay: Failed to open display")

    with _signal_handlers(stop, wake):
        while True:
            start = time.monotonic()
            status = build_status(components)
            if stream is not None:
                try:
                    stream.write(status + "\n")
                    stream.flush()
                except OSError as exc:
                    die("puts", exc)
            else:
                try:
                    display.store_name(status)
                except OSError:
                    die("XStoreName: Allocation failed")

            if stop.is_set():
                break
            remaining = interval_ms / 1000 - (time.monotonic() - start)
            if remaining >= 0:
                wake.wait(remaining)
            wake.clear()
            if stop.is_set():
                break

    if display is not None:
        try:
            display.store_name(None)
        except OSError:
            pass
        try:
            display.close()
        except OSError:
            die("XCloseDisplay: Failed to close display")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the status monitor from the command line."""
    options = parse_args(argv)
    stream = sys.stdout if options.to_stdout else None
    run(default_args(), INTERVAL_MS, options.once, stream)
    return 0