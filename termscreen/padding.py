"""Output of capability strings with delay padding."""

from __future__ import annotations

import string
import sys
from collections.abc import Callable

# Tens of milliseconds per character for each output speed code.
_TMSPC10 = (0, 2000, 1333, 909, 743, 666, 500, 333, 166, 83, 55, 41, 20, 10, 5)

_DIGITS = frozenset(string.digits)


def _parse_delay(cap: str, affcnt: int) -> tuple[int, str]:
    """Split a capability into its delay (in tenths of ms) and its body."""
    pos = 0
    size = len(cap)
    delay = 0
    while pos < size and cap[pos] in _DIGITS:
        delay = delay * 10 + int(cap[pos])
        pos += 1
    delay *= 10
    if pos < size and cap[pos] == ".":
        pos += 1
        if pos < size and cap[pos] in _DIGITS:
            delay += int(cap[pos])
        # Only one digit after the decimal point counts.
        while pos < size and cap[pos] in _DIGITS:
            pos += 1
    if pos < size and cap[pos] == "*":
        pos += 1
        delay *= affcnt
    return delay, cap[pos:]


def pad_count(cap: str | None, affcnt: int = 1, ospeed: int = 0) -> int:
    """Return how many pad characters ``cap`` needs at output speed ``ospeed``.

    No padding is produced when there is no delay or the speed code is not
    one of the known ones.
    """
    if cap is None:
        return 0
    delay, _ = _parse_delay(cap, affcnt)
    if delay == 0 or not 0 < ospeed < len(_TMSPC10):
        return 0
    mspc10 = _TMSPC10[ospeed]
    return max(0, (delay + mspc10 // 2) // mspc10)


def stdout_putchar(ch: int | str) -> None:
    """Write one character (or the low byte of an integer) to standard output."""
    if isinstance(ch, int):
        ch = chr(ch & 0xFF)
    sys.stdout.write(ch)


def tputs(
    cap: str | None,
    affcnt: int = 1,
    outc: Callable[[str], object] | None = None,
    ospeed: int = 0,
    pad: str = "\0",
) -> str:
    """Send a capability through ``outc`` one character at a time, with padding.

    A leading delay such as ``20`` or ``3.5*`` is stripped from the string and
    turned into pad characters; a ``*`` multiplies it by ``affcnt``.  Returns
    everything that was sent.
    """
    if cap is None:
        return ""
    if outc is None:
        outc = stdout_putchar
    _, body = _parse_delay(cap, affcnt)
    body = body.split("\0", 1)[0]
    output = body + pad * pad_count(cap, affcnt, ospeed)
    for ch in output:
        outc(ch)
    return output