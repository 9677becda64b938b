"""Terminal line-discipline modes: raw, cbreak, echo and newline mapping."""

from __future__ import annotations

import sys
import termios
from dataclasses import dataclass, field

_OXTABS = getattr(termios, "OXTABS", getattr(termios, "XTABS", 0))
_TCSASOFT = getattr(termios, "TCSASOFT", 0)

#: Whether mode changes leave hardware settings (speed, parity) alone.
IGNORE_HARDWARE = bool(_TCSASOFT)

_WHEN = termios.TCSADRAIN | _TCSASOFT

IFLAG, OFLAG, CFLAG, LFLAG, ISPEED, OSPEED, CC = range(7)

_BASE, _CBREAK, _RAW = "base", "cbreak", "raw"


def _copy(attrs: list) -> list:
    return [*attrs[:CC], list(attrs[CC])]


def _getattr(fd: int) -> list:
    try:
        return termios.tcgetattr(fd)
    except termios.error as exc:
        raise OSError(*exc.args) from exc


def _setattr(fd: int, attrs: list) -> None:
    try:
        termios.tcsetattr(fd, _WHEN, attrs)
    except termios.error as exc:
        raise OSError(*exc.args) from exc


@dataclass
class TtyModes:
    """The normal, cbreak and raw attribute sets and which one is in use.

    Attribute sets are lists in the form used by :func:`termios.tcgetattr`.
    """

    original: list
    base: list
    cbreak_attrs: list
    raw_attrs: list
    newline_translated: bool
    echo_input: bool
    use_raw: bool = False
    raw_mode: bool = False
    pfast: bool = False
    _selected: str = field(default=_BASE, repr=False)

    @classmethod
    def from_attrs(cls, attrs: list) -> TtyModes:
        """Derive the three mode sets from the terminal's original attributes."""
        original = _copy(attrs)
        base = _copy(attrs)
        base[OFLAG] &= ~_OXTABS

        cbreak = _copy(base)
        cbreak[LFLAG] &= ~termios.ICANON
        cbreak[CC][termios.VMIN] = 1
        cbreak[CC][termios.VTIME] = 0

        raw = _copy(cbreak)
        raw[IFLAG] &= ~(
            termios.IGNBRK | termios.BRKINT | termios.PARMRK | termios.INLCR
            | termios.IGNCR | termios.ICRNL | termios.IXON
        )
        raw[OFLAG] &= ~termios.OPOST
        raw[LFLAG] &= ~(
            termios.ECHO | termios.ECHONL | termios.ICANON | termios.ISIG
            | termios.IEXTEN
        )
        if not IGNORE_HARDWARE:
            raw[IFLAG] &= ~termios.ISTRIP
            raw[CFLAG] &= ~(termios.CSIZE | termios.PARENB)
            raw[CFLAG] |= termios.CS8

        return cls(
            original=original,
            base=base,
            cbreak_attrs=cbreak,
            raw_attrs=raw,
            newline_translated=bool(base[OFLAG] & termios.ONLCR),
            echo_input=bool(base[LFLAG] & termios.ECHO),
        )

    def _all(self) -> tuple[list, list, list]:
        return self.raw_attrs, self.cbreak_attrs, self.base

    def current(self) -> list:
        """Return a copy of the attribute set currently selected."""
        selected = {
            _BASE: self.base,
            _CBREAK: self.cbreak_attrs,
            _RAW: self.raw_attrs,
        }[self._selected]
        return _copy(selected)

    def raw(self) -> list:
        """Select raw mode; returns the attributes to apply."""
        self.use_raw = self.pfast = self.raw_mode = True
        self._selected = _RAW
        return self.current()

    def noraw(self) -> list:
        """Leave raw mode for the normal one."""
        self.use_raw = self.pfast = self.raw_mode = False
        self._selected = _BASE
        return self.current()

    def cbreak(self) -> list:
        """Select character-at-a-time input (raw mode stays if it is set)."""
        self.raw_mode = True
        self._selected = _RAW if self.use_raw else _CBREAK
        return self.current()

    def nocbreak(self) -> list:
        """Return to line input (raw mode stays if it is set)."""
        self.raw_mode = False
        self._selected = _RAW if self.use_raw else _BASE
        return self.current()

    def echo(self) -> list:
        """Turn input echo on in every mode."""
        for attrs in self._all():
            attrs[LFLAG] |= termios.ECHO
        self.echo_input = True
        return self.current()

    def noecho(self) -> list:
        """Turn input echo off in every mode."""
        for attrs in self._all():
            attrs[LFLAG] &= ~termios.ECHO
        self.echo_input = False
        return self.current()

    def nl(self) -> list:
        """Map carriage return to newline on input and newline to CR-LF on output."""
        for attrs in self._all():
            attrs[IFLAG] |= termios.ICRNL
            attrs[OFLAG] |= termios.ONLCR
        self.pfast = self.raw_mode
        return self.current()

    def nonl(self) -> list:
        """Turn off newline mapping in both directions."""
        for attrs in self._all():
            attrs[IFLAG] &= ~termios.ICRNL
            attrs[OFLAG] &= ~termios.ONLCR
        self.pfast = True
        return self.current()


class Tty:
    """A terminal file descriptor and the modes applied to it.

    Used as a context manager, the original attributes are put back on exit.
    """

    def __init__(self, fd: int, modes: TtyModes) -> None:
        self.fd = fd
        self.modes = modes
        self._saved: list | None = None

    @classmethod
    def open(cls, fd: int | None = None) -> Tty:
        """Take over the terminal on ``fd`` (standard input by default).

        The normal mode is applied at once.  Raises OSError if ``fd`` is
        not a terminal.
        """
        if fd is None:
            fd = sys.stdin.fileno()
        tty = cls(fd, TtyModes.from_attrs(_getattr(fd)))
        tty.apply()
        return tty

    def apply(self) -> None:
        """Set the terminal to the currently selected mode."""
        _setattr(self.fd, self.modes.current())

    def savetty(self) -> None:
        """Remember the terminal's present attributes."""
        self._saved = _getattr(self.fd)

    def resetty(self) -> None:
        """Put back the attributes remembered by :meth:`savetty`."""
        if self._saved is None:
            raise RuntimeError("no terminal state has been saved")
        _setattr(self.fd, self._saved)

    def restore(self) -> None:
        """Put back the attributes the terminal had when it was opened."""
        _setattr(self.fd, self.modes.original)

    def __enter__(self) -> Tty:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.restore()