"""Shared helpers: diagnostics, human-readable sizes and small file readers."""

from __future__ import annotations

import re
import sys
from os import PathLike
from typing import NoReturn, Optional, Union

StrPath = Union[str, "PathLike[str]"]

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_UINT = re.compile(r"\s*\+?(\d+)")

# Longest line a single read takes from a file, as the status buffer allows.
MAX_LINE = 1022


class StatusError(Exception):
    """Raised when a value cannot be read from the system."""


def warn(message: str, error: Optional[BaseException] = None) -> None:
    """Print a diagnostic to stderr, with the error's description if given."""
    if error is not None:
        detail = getattr(error, "strerror", None) or str(error)
        print(f"{message}: {detail}", file=sys.stderr)
    else:
        print(message, file=sys.stderr)


def die(message: str, error: Optional[BaseException] = None) -> NoReturn:
    """Print a diagnostic and exit with status 1."""
    warn(message, error)
    raise SystemExit(1)


def fmt_human(num: float, base: int) -> str:
    """Scale ``num`` by ``base`` and format it with one decimal and a prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: invalid base {base!r}") from None
    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_line(path: StrPath) -> str:
    """Return the first line of a file without its newline."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            line = handle.readline(MAX_LINE)
    except OSError as exc:
        warn(f"fopen '{path}'", exc)
        raise StatusError(f"cannot read {path}") from exc
    return line[:-1] if line.endswith("\n") else line


def read_uint(path: StrPath) -> int:
    """Return the unsigned integer at the start of a file."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            text = handle.read(4096)
    except OSError as exc:
        warn(f"fopen '{path}'", exc)
        raise StatusError(f"cannot read {path}") from exc
    match = _UINT.match(text)
    if match is None:
        raise StatusError(f"no number in {path}")
    return int(match.group(1))