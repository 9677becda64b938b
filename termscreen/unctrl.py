"""Printable representations of byte values."""

from __future__ import annotations


def _build_table() -> tuple[str, ...]:
    table = []
    for code in range(256):
        if code < 0x20:
            # The record separator has historically been shown as "^~".
            table.append("^~" if code == 0x1E else "^" + chr(code + 0x40))
        elif code < 0x7F:
            table.append(chr(code))
        elif code == 0x7F:
            table.append("^?")
        else:
            table.append(f"0x{code:02x}")
    return tuple(table)


_TABLE = _build_table()


def _code(ch: int | str) -> int:
    if isinstance(ch, str):
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        ch = ord(ch)
    return ch & 0xFF


def unctrl(ch: int | str) -> str:
    """Return the printable form of a byte value or single character.

    Only the low eight bits of an integer are used.
    """
    return _TABLE[_code(ch)]


def unctrl_len(ch: int | str) -> int:
    """Return the length of the printable form of ``ch``."""
    return len(_TABLE[_code(ch)])