import pytest

from termscreen.overlap import overlap_region, overlay, overwrite, touchoverlap
from termscreen.window import STANDOUT, Cell, LineFlags, newwin

LINES, COLS = 24, 80


def make(nlines, ncols, begy, begx, rows=None):
    win = newwin(nlines, ncols, begy, begx, LINES, COLS)
    if rows is not None:
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                win.lines[y][x] = Cell(ch)
    return win


def test_disjoint_windows_have_no_region():
    a = make(2, 3, 0, 0)
    b = make(2, 3, 10, 20)
    assert overlap_region(a, b) is None
    assert overlap_region(b, a) is None


def test_identical_placement_region_is_whole_window():
    a = make(3, 4, 2, 5)
    b = make(3, 4, 2, 5)
    assert overlap_region(a, b) == (2, 5, 2 + 3, 5 + 4)


@pytest.mark.parametrize(
    "first,second",
    [((5, 10, 2, 3), (5, 10, 4, 6)), ((4, 4, 0, 0), (10, 10, 1, 1)), ((3, 8, 6, 2), (9, 4, 1, 4))],
)
def test_region_lies_inside_both_windows(first, second):
    a, b = make(*first), make(*second)
    region = overlap_region(a, b)
    assert region == overlap_region(b, a)
    for win in (a, b):
        assert win.begy <= region.starty < region.endy <= win.begy + win.maxy
        assert win.begx <= region.startx < region.endx <= win.begx + win.maxx


def test_overwrite_copies_blanks_too():
    src = make(2, 3, 0, 0, ["abc", "d f"])
    dst = make(2, 3, 0, 0, ["xxx", "xxx"])
    overwrite(src, dst)
    assert dst.text() == src.text()


def test_overlay_skips_blanks():
    src = make(2, 3, 0, 0, ["abc", "d f"])
    dst = make(2, 3, 0, 0, ["xxx", "xxx"])
    overlay(src, dst)
    assert dst.text() == "abc\ndxf"


def test_overlay_keeps_attributes():
    src = make(1, 2, 0, 0)
    src.lines[0][0] = Cell("z", STANDOUT)
    dst = make(1, 2, 0, 0)
    overlay(src, dst)
    assert dst.lines[0][0] == Cell("z", STANDOUT)
    assert dst.lines[0][1] == Cell(" ", 0)


def test_overwrite_with_offset_windows():
    src = make(2, 2, 1, 1, ["ab", "cd"])
    dst = make(4, 4, 0, 0)
    overwrite(src, dst)
    assert dst.text() == "    \n ab \n cd \n    "


def test_overwrite_marks_lines_changed_without_forcing():
    src = make(2, 2, 1, 1, ["ab", "cd"])
    dst = make(4, 4, 0, 0)
    overwrite(src, dst)
    for y in (1, 2):
        assert dst.lines[y].flags & LineFlags.ISDIRTY
        assert not dst.lines[y].flags & LineFlags.FORCEPAINT
        assert dst.lines[y].firstch == 1
    assert not dst.lines[0].flags & LineFlags.ISDIRTY
    assert not dst.lines[3].flags & LineFlags.ISDIRTY


def test_no_overlap_changes_nothing():
    src = make(2, 2, 0, 0, ["ab", "cd"])
    dst = make(2, 2, 10, 10, ["xx", "yy"])
    overwrite(src, dst)
    overlay(src, dst)
    touchoverlap(src, dst)
    assert dst.text() == "xx\nyy"
    assert all(not line.flags & LineFlags.ISDIRTY for line in dst.lines)


def test_touchoverlap_marks_only_overlapping_part():
    dst = make(5, 10, 0, 0)
    src = make(2, 3, 1, 2)
    touchoverlap(src, dst)
    for y in (1, 2):
        line = dst.lines[y]
        assert line.flags & LineFlags.ISDIRTY
        assert line.firstch == 2
        assert line.lastch == 2 + 3 - 1
    for y in (0, 3, 4):
        assert not dst.lines[y].flags & LineFlags.ISDIRTY


def test_touchoverlap_leaves_contents_alone():
    dst = make(2, 2, 0, 0, ["ab", "cd"])
    src = make(2, 2, 0, 0, ["xy", "zw"])
    touchoverlap(src, dst)
    assert dst.text() == "ab\ncd"
    assert all(not line.flags & LineFlags.FORCEPAINT for line in dst.lines)