import pytest

from termscreen.termcap import (
    TermcapEntry,
    TermcapError,
    decode_string,
    search_path,
    tgetent,
)


def test_decode_caret_and_escape():
    assert decode_string("^[") == "\x1b"
    assert decode_string("\\E[H\\E[J") == "\x1b[H\x1b[J"
    assert decode_string("^G") == "\x07"


def test_decode_octal_and_colon_escapes():
    assert decode_string("\\072") == ":"
    assert decode_string("\\c") == ":"
    assert decode_string("a\\nb\\tc") == "a\nb\tc"


def test_decode_unknown_escape_is_literal():
    assert decode_string("\\q") == "q"
    assert decode_string("\\\\") == "\\"


def test_decode_drops_unfinished_escapes():
    assert decode_string("ab\\") == "ab"
    assert decode_string("ab^") == "ab"
    assert decode_string("ab:cd") == "ab"


def test_parse_entry_names_and_capabilities():
    entry = TermcapEntry.parse("vt|vt100|dec vt100:am:co#80:cl=\\E[H:")
    assert entry.names == ("vt", "vt100", "dec vt100")
    assert entry.name == "vt"
    assert entry.matches("vt100")
    assert not entry.matches("vt220")
    assert entry.flag("am")
    assert entry.number("co") == 80
    assert entry.string("cl") == "\x1b[H"


def test_parse_handles_continuation_lines():
    entry = TermcapEntry.parse("dumb|plain:\\\n\t:co#80:\\\n\t:bs:")
    assert entry.number("co") == 80
    assert entry.flag("bs")


def test_parse_empty_raises():
    with pytest.raises(TermcapError):
        TermcapEntry.parse("   ")
    with pytest.raises(TermcapError):
        TermcapEntry.parse(":am:")


def test_absent_capabilities():
    entry = TermcapEntry.parse("t|test:am:")
    assert entry.flag("xn") is False
    assert entry.number("li") is None
    assert entry.string("cm") is None


def test_cancelled_capability_hides_later_one():
    entry = TermcapEntry.parse("t|test:am@:am:co@:co#80:")
    assert entry.flag("am") is False
    assert entry.number("co") is None


def test_kinds_do_not_mix():
    entry = TermcapEntry.parse("t|test:co#80:cl=x:")
    assert entry.flag("co") is False
    assert entry.string("co") is None
    assert entry.number("cl") is None


def test_number_bases():
    entry = TermcapEntry.parse("t|test:sg#010:ug#0x1f:li#24x:")
    assert entry.number("sg") == int("10", 8)
    assert entry.number("ug") == int("1f", 16)
    assert entry.number("li") == 24


def test_string_uses_first_two_characters():
    entry = TermcapEntry.parse("t|test:cl=\\E[2J:")
    assert entry.string("clear") == entry.string("cl")


def test_text_round_trip():
    entry = TermcapEntry.parse("t|test:am:co#80:cl=\\E[H:")
    assert TermcapEntry.parse(entry.text) == entry


def test_search_path_termpath():
    assert search_path({"TERMPATH": "a:b c"}) == ["a", "b", "c"]


def test_search_path_home_default():
    assert search_path({"HOME": "/my home"}) == [
        "/my home/.termcap",
        "/usr/share/misc/termcap",
    ]


def test_search_path_without_home():
    assert search_path({}) == [".termcap", "/usr/share/misc/termcap"]


def test_search_path_termcap_file_wins():
    env = {"TERMCAP": "/etc/termcap", "TERMPATH": "x", "HOME": "/h"}
    assert search_path(env) == ["/etc/termcap"]


def test_search_path_termcap_entry_falls_back():
    env = {"TERMCAP": "t|test:am:", "TERMPATH": "x y"}
    assert search_path(env) == ["x", "y"]


def test_search_path_is_capped():
    names = " ".join(f"f{i}" for i in range(50))
    paths = search_path({"TERMPATH": names})
    assert len(paths) < 50
    assert paths == [f"f{i}" for i in range(len(paths))]


@pytest.fixture
def database(tmp_path):
    path = tmp_path / "termcap"
    path.write_text(
        "# a comment line\n"
        "base|Base terminal:co#80:li#24:am:\\\n"
        "\t:cl=\\E[H\\E[J:\n"
        "child|Child terminal:co#132:tc=base:\n"
        "loop1|L1:tc=loop2:\n"
        "loop2|L2:tc=loop1:\n"
        "broken|B:tc=nowhere:\n"
    )
    return {"TERMPATH": str(path)}


def test_tgetent_finds_by_alias(database):
    entry = tgetent("Base terminal", database)
    assert entry.name == "base"
    assert entry.number("li") == 24
    assert entry.string("cl") == "\x1b[H\x1b[J"


def test_tgetent_expands_tc_with_precedence(database):
    entry = tgetent("child", database)
    assert entry.number("co") == 132
    assert entry.number("li") == 24
    assert entry.flag("am")


def test_tgetent_unknown_raises(database):
    with pytest.raises(TermcapError):
        tgetent("nosuch", database)


def test_tgetent_tc_loop_raises(database):
    with pytest.raises(TermcapError):
        tgetent("loop1", database)


def test_tgetent_unresolved_tc_raises(database):
    with pytest.raises(TermcapError):
        tgetent("broken", database)


def test_tgetent_missing_files_are_skipped(tmp_path):
    env = {"TERMPATH": str(tmp_path / "absent"), "TERMCAP": "solo|S:bs:"}
    assert tgetent("solo", env).flag("bs")
    with pytest.raises(TermcapError):
        tgetent("other", env)


def test_tgetent_truncates_long_entries(tmp_path):
    caps = ":".join(f"k{i:03d}#{i}" for i in range(200))
    path = tmp_path / "termcap"
    path.write_text(f"long|Long:{caps}:\n")
    entry = tgetent("long", {"TERMPATH": str(path)})
    assert len(entry.text) <= 1023
    assert entry.text.endswith(":")
    assert entry.number("k000") == 0
    assert entry.number("k199") is None