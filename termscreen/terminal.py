"""Terminal set-up from a capability description."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Mapping
from dataclasses import dataclass

from termscreen.params import CapabilityError, tgoto
from termscreen.termcap import TermcapEntry, TermcapError, tgetent

_FLAG_NAMES = (
    "am", "bs", "da", "eo", "hc", "in", "mi", "ms",
    "nc", "ns", "os", "ul", "xb", "xn", "xt", "xs", "xx",
)

_STRING_NAMES = (
    "AL", "bc", "bt", "cd", "ce", "cl", "cm", "cr", "cs",
    "dc", "DL", "dm", "do", "ed", "ei", "k0", "k1", "k2",
    "k3", "k4", "k5", "k6", "k7", "k8", "k9", "ho", "ic",
    "im", "ip", "kd", "ke", "kh", "kl", "kr", "ks", "ku",
    "ll", "ma", "nd", "nl", "pc", "rc", "sc", "se", "SF",
    "so", "SR", "ta", "te", "ti", "uc", "ue", "up", "us",
    "vb", "vs", "ve", "al", "dl", "sf", "sr",
    "UP", "DO", "LE", "RI",
)

_DUMB_ENTRY = "xx|dumb:"
_MIN_COLUMNS = 5
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _number(entry: TermcapEntry, name: str) -> int:
    value = entry.number(name)
    return -1 if value is None else value


def _strtol(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _window_size(size: tuple[int, int] | None) -> tuple[int, int]:
    if size is not None:
        return size
    try:
        columns, lines = os.get_terminal_size(sys.stdout.fileno())
    except (AttributeError, OSError, ValueError):
        return 0, 0
    return lines, columns


@dataclass(frozen=True)
class Terminal:
    """The capabilities and geometry of one terminal.

    ``flags`` and ``strings`` are keyed by termcap capability name.
    """

    name: str
    entry: TermcapEntry
    lines: int
    cols: int
    flags: Mapping[str, bool]
    strings: Mapping[str, str | None]
    cursor_addressing: bool
    pad_char: str
    no_quick_change: bool

    @classmethod
    def from_entry(cls, entry: TermcapEntry, lines: int, cols: int) -> Terminal:
        """Read every capability the screen code uses from ``entry``."""
        flags = {name: entry.flag(name) for name in _FLAG_NAMES}
        strings: dict[str, str | None] = {
            name: entry.string(name) for name in _STRING_NAMES
        }

        if flags["xs"]:
            strings["so"] = strings["se"] = None
        else:
            if _number(entry, "sg") > 0:
                strings["so"] = None
            if _number(entry, "ug") > 0:
                strings["us"] = None
            if strings["so"] is None and strings["us"] is not None:
                strings["so"] = strings["us"]
                strings["se"] = strings["ue"]

        # Hardware tabs are always turned off, so backtab is never usable.
        strings["bt"] = None

        try:
            motion = tgoto(strings["cm"], 0, 0, strings["up"], strings["bc"])
            cursor_addressing = not motion.startswith("O")
        except CapabilityError:
            cursor_addressing = False
        if not cursor_addressing:
            strings["cm"] = None

        pc = strings["pc"]
        pad_char = (pc[:1] or "\0") if pc is not None else "\0"

        def missing(*names: str) -> bool:
            return all(strings[name] is None for name in names)

        no_quick_change = (
            missing("cs")
            or missing("ho")
            or missing("SF", "sf")
            or missing("SR", "sr")
        ) and (missing("AL", "al") or missing("DL", "dl"))

        return cls(
            name=entry.name,
            entry=entry,
            lines=lines,
            cols=cols,
            flags=flags,
            strings=strings,
            cursor_addressing=cursor_addressing,
            pad_char=pad_char,
            no_quick_change=no_quick_change,
        )

    def getcap(self, name: str) -> str | None:
        """Return any string capability of the terminal, or None."""
        return self.entry.string(name)


def setterm(
    term_type: str,
    environ: Mapping[str, str] | None = None,
    size: tuple[int, int] | None = None,
) -> Terminal:
    """Describe terminal ``term_type``.

    ``size`` is ``(lines, cols)``; when it is None the size of standard
    output is asked for, and when that is unknown or zero the description's
    ``li`` and ``co`` are used.  ``LINES`` and ``COLUMNS`` in the environment
    override all of these.  Raises ValueError when the terminal has fewer
    than five columns and TermcapError when the type is unknown.
    """
    env = os.environ if environ is None else environ
    name = term_type or "xx"
    failure: TermcapError | None = None
    try:
        entry = tgetent(name, env)
    except TermcapError as exc:
        failure = exc
        entry = TermcapEntry.parse(_DUMB_ENTRY)

    lines, cols = _window_size(size)
    if not lines or not cols:
        lines, cols = _number(entry, "li"), _number(entry, "co")

    if (value := env.get("LINES")) is not None:
        lines = _strtol(value)
    if (value := env.get("COLUMNS")) is not None:
        cols = _strtol(value)

    if cols < _MIN_COLUMNS:
        raise ValueError(f"terminal {name!r} has too few columns ({cols})")
    if failure is not None:
        raise TermcapError(f"unknown terminal type {name!r}") from failure
    return Terminal.from_entry(entry, lines, cols)