"""Terminal capability database lookup and decoding."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_PATH = ".termcap /usr/share/misc/termcap"

_PATH_BUFFER = 512
_MAX_PATHS = 31
_ENTRY_LIMIT = 1023
_MAX_RECURSION = 32

_CONTINUATION = re.compile(r"\\\r?\n[ \t]*")
_SEPARATORS = re.compile(r"[ :]+")
_ESCAPE_PATTERN = re.compile(r"\^(.)|\\([0-7]{1,3})|\\(.)|[\^\\]\Z|(.)", re.S)
_ESCAPES = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    "e": "\x1b",
    "c": ":",
}
_HEX = "0123456789abcdef"


class TermcapError(LookupError):
    """A terminal description cannot be found or is malformed."""


def decode_string(raw: str) -> str:
    """Decode the escapes of a termcap string value.

    ``^X`` gives a control character, ``\\NNN`` an octal byte and ``\\E``,
    ``\\n``, ``\\r``, ``\\t``, ``\\b``, ``\\f``, ``\\c`` the usual characters.
    The value ends at the first ``:``; an unfinished escape is dropped.
    """
    raw = raw.split(":", 1)[0]
    out = []
    for match in _ESCAPE_PATTERN.finditer(raw):
        caret, octal, escaped, plain = match.groups()
        if caret is not None:
            out.append(chr(ord(caret) & 0o37))
        elif octal is not None:
            out.append(chr(int(octal, 8) & 0xFF))
        elif escaped is not None:
            out.append(_ESCAPES.get(escaped.lower(), escaped))
        elif plain is not None:
            out.append(plain)
    return "".join(out)


def _parse_number(value: str) -> int:
    if value[:2] in ("0x", "0X"):
        base, digits = 16, value[2:]
    elif value.startswith("0"):
        base, digits = 8, value[1:]
    else:
        base, digits = 10, value
    number = 0
    for ch in digits:
        digit = _HEX.find(ch.lower())
        if digit < 0 or digit >= base:
            break
        number = number * base + digit
    return number


@dataclass(frozen=True)
class TermcapEntry:
    """One terminal description: its names and its capability fields."""

    names: tuple[str, ...]
    capabilities: tuple[str, ...] = field(default=())

    @classmethod
    def parse(cls, text: str) -> TermcapEntry:
        """Parse an entry such as ``vt100|dec vt100:am:co#80:cl=\\E[H\\E[J:``."""
        text = _CONTINUATION.sub("", text).strip()
        if not text:
            raise TermcapError("empty termcap entry")
        head, _, rest = text.partition(":")
        names = tuple(name for name in head.split("|") if name)
        if not names:
            raise TermcapError(f"termcap entry has no names: {text!r}")
        capabilities = tuple(f for f in rest.split(":") if f.strip())
        return cls(names, capabilities)

    @property
    def name(self) -> str:
        """The primary name of the terminal."""
        return self.names[0]

    @property
    def text(self) -> str:
        """The entry written back in termcap form."""
        return ":".join(("|".join(self.names), *self.capabilities)) + ":"

    def matches(self, name: str) -> bool:
        """Whether ``name`` is one of this entry's names."""
        return name in self.names

    def _find(self, name: str, kind: str) -> str | None:
        for cap in self.capabilities:
            if not cap.startswith(name):
                continue
            rest = cap[len(name):]
            if rest.startswith("@"):
                return None
            if kind:
                if rest.startswith(kind):
                    return rest[1:]
            elif not rest:
                return ""
        return None

    def flag(self, name: str) -> bool:
        """Whether the boolean capability ``name`` is present."""
        return self._find(name, "") is not None

    def number(self, name: str) -> int | None:
        """The numeric capability ``name``, or None if absent.

        A leading ``0`` means octal and ``0x`` hexadecimal.
        """
        value = self._find(name, "#")
        return None if value is None else _parse_number(value)

    def string(self, name: str) -> str | None:
        """The decoded string capability, or None if absent.

        Only the first two characters of ``name`` are used.
        """
        value = self._find(name[:2], "=")
        return None if value is None else decode_string(value)


def search_path(environ: Mapping[str, str] | None = None) -> list[str]:
    """Return the termcap files to search, in order.

    ``TERMCAP`` naming an absolute file wins; otherwise ``TERMPATH`` is used,
    or else ``$HOME/.termcap`` followed by the system file.
    """
    env = os.environ if environ is None else environ
    termcap = env.get("TERMCAP")
    prefix = ""
    if termcap and termcap.startswith("/"):
        path = termcap
    elif (termpath := env.get("TERMPATH")) is not None:
        path = termpath
    elif (home := env.get("HOME")) is not None:
        # The home directory is taken whole, never split on separators.
        prefix = home[: _PATH_BUFFER - len(DEFAULT_PATH) - 2] + "/"
        path = DEFAULT_PATH
    else:
        path = DEFAULT_PATH
    path = path[: _PATH_BUFFER - 1 - len(prefix)]
    parts = _SEPARATORS.split(path)
    if prefix:
        parts[0] = prefix + parts[0]
    return [part for part in parts if part][:_MAX_PATHS]


def _read_entries(path: Path) -> Iterator[str]:
    try:
        text = path.read_text(encoding="latin-1")
    except OSError:
        return
    for line in _CONTINUATION.sub("", text).splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            yield stripped


class _Database:
    def __init__(self, top: TermcapEntry | None, paths: list[str]) -> None:
        self._top = top
        self._paths = paths

    def find(self, name: str) -> TermcapEntry | None:
        if self._top is not None and self._top.matches(name):
            return self._top
        for path in self._paths:
            for text in _read_entries(Path(path)):
                head = text.split(":", 1)[0]
                if name in head.split("|"):
                    return TermcapEntry.parse(text)
        return None

    def resolve(self, entry: TermcapEntry, depth: int = 0) -> list[str]:
        if depth > _MAX_RECURSION:
            raise TermcapError(f"tc= reference loop in entry {entry.name!r}")
        capabilities = []
        for cap in entry.capabilities:
            if cap.startswith("tc="):
                target = cap[3:]
                referenced = self.find(target)
                if referenced is None:
                    raise TermcapError(
                        f"entry {entry.name!r} refers to unknown entry {target!r}"
                    )
                capabilities.extend(self.resolve(referenced, depth + 1))
            else:
                capabilities.append(cap)
        return capabilities


def tgetent(name: str, environ: Mapping[str, str] | None = None) -> TermcapEntry:
    """Look up the description of terminal ``name``.

    A ``TERMCAP`` variable holding an entry is consulted first, then the
    files from :func:`search_path`.  ``tc=`` references are expanded, and the
    result is limited to 1023 characters, cut after the last whole field.
    """
    env = os.environ if environ is None else environ
    termcap = env.get("TERMCAP")
    top = None
    if termcap and not termcap.startswith("/"):
        try:
            top = TermcapEntry.parse(termcap)
        except TermcapError as exc:
            raise TermcapError("invalid entry in TERMCAP") from exc
    database = _Database(top, search_path(env))
    entry = database.find(name)
    if entry is None:
        raise TermcapError(f"unknown terminal type {name!r}")
    resolved = TermcapEntry(entry.names, tuple(database.resolve(entry)))
    text = resolved.text
    if len(text) > _ENTRY_LIMIT:
        text = text[:_ENTRY_LIMIT]
        text = text[: text.rfind(":") + 1]
        resolved = TermcapEntry.parse(text)
    return resolved