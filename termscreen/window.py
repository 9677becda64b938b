"""Windows: rectangular character buffers with change tracking."""

from __future__ import annotations

import enum
import zlib
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from termscreen.terminal import Terminal

#: Cell attribute bit for characters shown in standout mode.
STANDOUT = 0x01


class WindowFlags(enum.Flag):
    """State bits of a window."""

    NONE = 0
    ENDLINE = enum.auto()     # window reaches the right edge of the screen
    FULLWIN = enum.auto()     # window covers the whole screen
    SCROLLWIN = enum.auto()   # window reaches the bottom-right corner
    FLUSH = enum.auto()
    LEAVEOK = enum.auto()     # cursor may be left anywhere after refresh
    CLEAROK = enum.auto()     # clear the screen on the next refresh
    SCROLLOK = enum.auto()    # scrolling is allowed
    WSTANDOUT = enum.auto()   # new characters are added in standout mode


class LineFlags(enum.Flag):
    """State bits of one line of a window."""

    NONE = 0
    ISDIRTY = enum.auto()
    ISPASTEOL = enum.auto()
    FORCEPAINT = enum.auto()


@dataclass(frozen=True)
class Cell:
    """One character position: the character and its attribute bits."""

    ch: str = " "
    attr: int = 0


BLANK = Cell()


@dataclass
class _ChangeRange:
    first: int = 0
    last: int = 0


def _hash_cells(cells: Iterator[Cell]) -> int:
    crc = 0
    for cell in cells:
        crc = zlib.crc32(f"{cell.ch}\0{cell.attr}\0".encode("utf-8", "replace"), crc)
    return crc


@dataclass(eq=False)
class Line:
    """A view of ``width`` cells of a row, starting at ``offset``.

    Lines of a subwindow share their row and their changed-column range
    with the line of the window they lie in.
    """

    row: list[Cell] = field(repr=False)
    offset: int
    width: int
    changes: _ChangeRange = field(default_factory=_ChangeRange, repr=False)
    flags: LineFlags = LineFlags.NONE
    hash: int = 0

    def __post_init__(self) -> None:
        self._rehash()

    def _rehash(self) -> None:
        self.hash = _hash_cells(iter(self))

    def _check(self, x: int) -> int:
        if not 0 <= x < self.width:
            raise IndexError(f"column {x} outside line of width {self.width}")
        return self.offset + x

    def __len__(self) -> int:
        return self.width

    def __getitem__(self, x: int) -> Cell:
        return self.row[self._check(x)]

    def __setitem__(self, x: int, cell: Cell) -> None:
        self.row[self._check(x)] = cell

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.row[self.offset:self.offset + self.width])

    @property
    def firstch(self) -> int:
        """First changed column, in the coordinates of the owning window."""
        return self.changes.first

    @firstch.setter
    def firstch(self, value: int) -> None:
        self.changes.first = value

    @property
    def lastch(self) -> int:
        """Last changed column, in the coordinates of the owning window."""
        return self.changes.last

    @lastch.setter
    def lastch(self, value: int) -> None:
        self.changes.last = value


def _check_size(nlines: int, ncols: int) -> None:
    if nlines <= 0 or ncols <= 0:
        raise ValueError(f"invalid window size {nlines}x{ncols}")


@dataclass(eq=False)
class Window:
    """A window of ``maxy`` lines by ``maxx`` columns placed at ``begy, begx``."""

    maxy: int
    maxx: int
    begy: int
    begx: int
    screen_lines: int
    screen_cols: int
    lines: list[Line] = field(default_factory=list, repr=False)
    cury: int = 0
    curx: int = 0
    flags: WindowFlags = WindowFlags.NONE
    ch_off: int = 0
    parent: Window | None = field(default=None, repr=False)
    children: list[Window] = field(default_factory=list, repr=False)

    def subwin(self, nlines: int, ncols: int, begy: int, begx: int) -> Window:
        """Create a window sharing its characters with part of this one.

        A size of 0 extends the subwindow to this window's edge.  Raises
        ValueError when the subwindow does not fit inside this window.
        """
        if (
            begy < self.begy
            or begx < self.begx
            or begy + nlines > self.maxy + self.begy
            or begx + ncols > self.maxx + self.begx
        ):
            raise ValueError("subwindow does not fit inside its window")
        if nlines == 0:
            nlines = self.maxy + self.begy - begy
        if ncols == 0:
            ncols = self.maxx + self.begx - begx
        _check_size(nlines, ncols)
        win = Window(
            nlines, ncols, begy, begx, self.screen_lines, self.screen_cols,
            parent=self,
        )
        win.update_flags()
        self.children.append(win)
        win._attach()
        return win

    def _attach(self) -> None:
        """Point this subwindow's lines into its parent's rows."""
        parent = self.parent
        if parent is None:
            raise ValueError("window has no parent to attach to")
        dx = self.begx - parent.begx
        dy = self.begy - parent.begy
        self.ch_off = parent.ch_off + dx
        old = self.lines
        lines = []
        for y in range(self.maxy):
            source = parent.lines[y + dy]
            flags = old[y].flags if y < len(old) else LineFlags.NONE
            lines.append(
                Line(source.row, source.offset + dx, self.maxx, source.changes, flags)
            )
        self.lines = lines

    def update_flags(self) -> None:
        """Recompute where the window lies relative to the screen edges."""
        self.flags &= ~(
            WindowFlags.ENDLINE | WindowFlags.FULLWIN
            | WindowFlags.SCROLLWIN | WindowFlags.LEAVEOK
        )
        if self.begx + self.maxx == self.screen_cols:
            self.flags |= WindowFlags.ENDLINE
            if self.begx == 0 and self.maxy == self.screen_lines and self.begy == 0:
                self.flags |= WindowFlags.FULLWIN
            if self.begy + self.maxy == self.screen_lines:
                self.flags |= WindowFlags.SCROLLWIN

    def touchline(self, y: int, sx: int, ex: int) -> None:
        """Force columns ``sx`` to ``ex`` of line ``y`` to be repainted."""
        self.mark_changed(y, sx, ex, True)

    def touchwin(self) -> None:
        """Force the whole window to be repainted."""
        for y in range(self.maxy):
            self.mark_changed(y, 0, self.maxx - 1, True)

    def _mark_all_changed(self) -> None:
        for y in range(self.maxy):
            self.mark_changed(y, 0, self.maxx - 1, False)

    def mark_changed(self, y: int, sx: int, ex: int, force: bool = False) -> None:
        """Record that columns ``sx`` to ``ex`` of line ``y`` have changed."""
        if not 0 <= y < self.maxy:
            raise IndexError(f"line {y} outside window of {self.maxy} lines")
        line = self.lines[y]
        if force:
            line.flags |= LineFlags.FORCEPAINT
        sx += self.ch_off
        ex += self.ch_off
        if not line.flags & LineFlags.ISDIRTY:
            line.flags |= LineFlags.ISDIRTY
            line.firstch = sx
            line.lastch = ex
        else:
            line.firstch = min(line.firstch, sx)
            line.lastch = max(line.lastch, ex)

    def put(self, y: int, x: int, cell: Cell) -> None:
        """Store ``cell`` at line ``y``, column ``x`` and mark it changed."""
        if not 0 <= y < self.maxy:
            raise IndexError(f"line {y} outside window of {self.maxy} lines")
        self.lines[y][x] = cell
        self.mark_changed(y, x, x, False)

    def text(self) -> str:
        """The characters of the window, one text line per window line."""
        return "\n".join("".join(cell.ch for cell in line) for line in self.lines)

    def standout(self, terminal: Terminal) -> None:
        """Add characters in standout mode, if the terminal can show it."""
        strings = terminal.strings
        if (strings.get("so") is not None and strings.get("se") is not None) or (
            strings.get("uc") is not None
        ):
            self.flags |= WindowFlags.WSTANDOUT

    def standend(self) -> None:
        """Stop adding characters in standout mode."""
        self.flags &= ~WindowFlags.WSTANDOUT


def newwin(
    nlines: int,
    ncols: int,
    begy: int,
    begx: int,
    screen_lines: int,
    screen_cols: int,
) -> Window:
    """Create a blank window on a screen of the given size.

    A size of 0 extends the window to the screen's edge.  Raises ValueError
    for a window with no lines or columns.
    """
    if nlines == 0:
        nlines = screen_lines - begy
    if ncols == 0:
        ncols = screen_cols - begx
    _check_size(nlines, ncols)
    win = Window(nlines, ncols, begy, begx, screen_lines, screen_cols)
    win.lines = [Line([BLANK] * ncols, 0, ncols) for _ in range(nlines)]
    win.update_flags()
    return win