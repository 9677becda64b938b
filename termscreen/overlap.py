"""Copying and touching the region where two windows overlap."""

from __future__ import annotations

from typing import NamedTuple

from termscreen.window import Window

# Characters the C library's isspace() treats as white space.
_SPACES = frozenset(" \t\n\v\f\r")


class Region(NamedTuple):
    """A rectangle in screen coordinates; the end values are exclusive."""

    starty: int
    startx: int
    endy: int
    endx: int


def overlap_region(src: Window, dst: Window) -> Region | None:
    """Return the screen area covered by both windows, or None if there is none."""
    starty = max(src.begy, dst.begy)
    startx = max(src.begx, dst.begx)
    endy = min(src.maxy + src.begy, dst.maxy + dst.begy)
    endx = min(src.maxx + src.begx, dst.maxx + dst.begx)
    if starty >= endy or startx >= endx:
        return None
    return Region(starty, startx, endy, endx)


def overlay(src: Window, dst: Window) -> None:
    """Write ``src`` onto ``dst`` where they overlap, leaving blanks out.

    Every non-space character of ``src`` in the shared area replaces the
    cell under it in ``dst``; the cursor of ``dst`` is left on the last
    character written.
    """
    region = overlap_region(src, dst)
    if region is None:
        return
    for y in range(region.starty, region.endy):
        src_line = src.lines[y - src.begy]
        first = region.startx - src.begx
        cells = [src_line[x] for x in range(first, region.endx - src.begx)]
        dy = y - dst.begy
        for x, cell in enumerate(cells, start=region.startx - dst.begx):
            if cell.ch in _SPACES:
                continue
            dst.cury, dst.curx = dy, x
            dst.put(dy, x, cell)


def overwrite(src: Window, dst: Window) -> None:
    """Copy ``src`` onto ``dst`` where they overlap, blanks included."""
    region = overlap_region(src, dst)
    if region is None:
        return
    width = region.endx - region.startx
    for y in range(region.starty, region.endy):
        src_line = src.lines[y - src.begy]
        src_x = region.startx - src.begx
        cells = [src_line[src_x + i] for i in range(width)]
        dy = y - dst.begy
        dst_line = dst.lines[dy]
        dst_x = region.startx - dst.begx
        for i, cell in enumerate(cells):
            dst_line[dst_x + i] = cell
        dst.mark_changed(dy, dst_x, region.endx - dst.begx, False)


def touchoverlap(src: Window, dst: Window) -> None:
    """Mark as changed the part of ``dst`` that ``src`` overlaps."""
    region = overlap_region(src, dst)
    if region is None:
        return
    startx = region.startx - dst.begx
    endx = region.endx - dst.begx - 1
    for y in range(region.starty - dst.begy, region.endy - dst.begy):
        dst.mark_changed(y, startx, endx, False)