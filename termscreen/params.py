"""Expansion of parameterised capability strings (cursor motion, scrolling)."""

from __future__ import annotations

from collections.abc import Iterator


class CapabilityError(ValueError):
    """A capability string is missing or cannot be expanded."""


_CTRL_D = 0o004
_NEWLINE = 0o012


def _tdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _tmod(a: int, b: int) -> int:
    return a - b * _tdiv(a, b)


def _byte(value: int) -> str:
    return chr(value & 0xFF)


def _next_char(chars: Iterator[str], cap: str) -> int:
    ch = next(chars, None)
    if ch is None:
        raise CapabilityError(f"truncated escape in capability {cap!r}")
    return ord(ch)


def _digits(value: int, width: int) -> str:
    """Emit ``value`` in ``width`` digits the way the terminal library does."""
    out = []
    if width >= 3:
        out.append(_byte(_tdiv(value, 100) | 0x30))
        value = _tmod(value, 100)
    if width >= 2:
        out.append(_byte(_tdiv(value, 10) | 0x30))
    out.append(_byte(_tmod(value, 10) | 0x30))
    return "".join(out)


def _decimal_width(value: int) -> int:
    if value < 10:
        return 1
    if value < 100:
        return 2
    return 3


def tgoto(
    cm: str | None,
    destcol: int,
    destline: int,
    up: str | None = None,
    bc: str | None = None,
) -> str:
    """Expand a cursor-motion capability for the given column and line.

    The line is substituted first unless ``%r`` is given.  ``up`` and ``bc``
    are the terminal's cursor-up and backspace strings, used to avoid sending
    NUL, EOT and newline as literal coordinates.
    """
    if cm is None:
        raise CapabilityError("no cursor motion capability")
    result: list[str] = []
    added: list[str] = []
    oncol = False
    which = destline
    chars = iter(cm)

    def advance() -> None:
        nonlocal oncol, which
        oncol = not oncol
        which = destcol if oncol else destline

    for ch in chars:
        if ch != "%":
            result.append(ch)
            continue
        code = next(chars, None)
        if code in ("d", "2", "3"):
            width = _decimal_width(which) if code == "d" else int(code)
            result.append(_digits(which, width))
            advance()
        elif code in ("+", "."):
            if code == "+":
                which += _next_char(chars, cm)
            if which in (0, _CTRL_D, _NEWLINE) and (oncol or up is not None):
                while True:
                    if oncol:
                        added.append(bc if bc is not None else "\b")
                    else:
                        added.append(up)
                    which += 1
                    if which != _NEWLINE:
                        break
            result.append(_byte(which))
            advance()
        elif code == "r":
            oncol = True
            which = destcol
        elif code == "i":
            destcol += 1
            destline += 1
            which += 1
        elif code == "%":
            result.append("%")
        else:
            raise CapabilityError(f"cannot expand %{code or ''} in {cm!r}")
    return "".join(result) + "".join(added)


def tscroll(cap: str | None, n1: int, n2: int = 0) -> str:
    """Expand a scrolling capability with parameters ``n1`` then ``n2``."""
    if cap is None:
        raise CapabilityError("no scrolling capability")
    result: list[str] = []
    n = n1
    chars = iter(cap)
    for ch in chars:
        if ch != "%":
            result.append(ch)
            continue
        code = next(chars, None)
        if code == "n":
            n ^= 0o140
        elif code in ("d", "2", "3"):
            width = _decimal_width(n) if code == "d" else int(code)
            result.append(_digits(n, width))
            n = n2
        elif code == ">":
            threshold = _next_char(chars, cap)
            increment = _next_char(chars, cap)
            if n > threshold:
                n += increment
        elif code in ("+", "."):
            if code == "+":
                n += _next_char(chars, cap)
            result.append(_byte(n))
        elif code == "i":
            n += 1
        elif code == "%":
            result.append("%")
        elif code == "B":
            n = (_tdiv(n, 10) << 4) + _tmod(n, 10)
        elif code == "D":
            n = n - 2 * _tmod(n, 16)
        elif code == "p":
            # Terminfo-style parameter pushes are ignored.
            _next_char(chars, cap)
        else:
            raise CapabilityError(f"cannot expand %{code or ''} in {cap!r}")
    return "".join(result)