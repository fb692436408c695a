"""Keyboard layout names and lock-key indicators."""

from __future__ import annotations

import re
from typing import Optional

# Symbol names from the xkb rules configuration that are not layouts.
INVALID_SYMBOLS = ("evdev", "inet", "pc", "base")

_SEPARATORS = re.compile(r"[+:_]")
_CAPS_LOCK = 1 << 0
_NUM_LOCK = 1 << 1


def valid_layout_or_variant(sym: str) -> bool:
    """Return False for symbol names that only name rules, not layouts."""
    return not any(sym.startswith(invalid) for invalid in INVALID_SYMBOLS)


def get_layout(syms: str, grp_num: int) -> Optional[str]:
    """Return the layout of group ``grp_num`` from an xkb symbols string."""
    layout = None
    group = 0
    for token in filter(None, _SEPARATORS.split(syms)):
        if group > grp_num:
            break
        if not valid_layout_or_variant(token):
            continue
        if len(token) == 1 and token in "0123456789":
            # :2, :3, :4 name additional layout groups
            continue
        layout = token
        group += 1
    return layout


def format_indicators(fmt: str, led_mask: int) -> str:
    """Render caps/num lock state according to ``fmt``.

    ``fmt`` holds ``c`` for caps lock and/or ``n`` for num lock, in either
    case, each optionally followed by ``?``. A letter followed by ``?`` is
    shown as written only while its indicator is on; otherwise it is always
    shown, lower case when off and upper case when on. Only the first four
    characters of ``fmt`` are looked at.
    """
    fmt = fmt[:4]
    out = []
    for i, char in enumerate(fmt):
        key = char.lower()
        if key not in ("c", "n"):
            continue
        toggle_case = i + 1 >= len(fmt) or fmt[i + 1] != "?"
        is_set = bool(led_mask & (_NUM_LOCK if key == "n" else _CAPS_LOCK))
        if toggle_case:
            out.append(key.upper() if is_set else key)
        elif is_set:
            out.append(char)
    return "".join(out)