# termscreen

Building blocks for programs that draw on character terminals. The package
covers the following:

- It looks up terminal descriptions.
- It expands the parameterised capability strings.
- It sends capabilities with their delay padding.
- It switches the tty line discipline between modes.
- It keeps window buffers that track which of their columns have changed.

It needs a POSIX system, because `termscreen.tty` uses `termios`.

## Modules

### `termscreen.termcap`

Finding and reading termcap entries.

- `TermcapEntry.parse(text)` parses an entry such as
  `vt100|dec vt100:am:co#80:cl=\E[H\E[J:`.
- Reading capabilities:
  - `flag(name)` returns whether a boolean capability is present.
  - `number(name)` returns a numeric capability, or `None` when it is absent. A leading `0` means octal and a leading `0x` means hexadecimal.
  - `string(name)` returns a decoded string capability, or `None`.
  - A field that ends in `@` cancels the capability.
- Other members of `TermcapEntry`:
  - `name` is the primary name of the terminal.
  - `names` holds every name of the entry.
  - `capabilities` holds the raw fields.
  - `text` writes the entry back in termcap form.
  - `matches(name)` returns whether `name` is one of the entry's names.
- `decode_string(raw)` decodes the escapes of a string value:
  - `^X` gives a control character.
  - `\NNN` gives an octal byte.
  - `\E`/`\e`, `\n`, `\r`, `\t`, `\b`, `\f` and `\c` give their usual characters.
- `search_path(environ)` lists the files to search, in this order of precedence:
  1. `TERMCAP`, when it names an absolute file.
  2. The contents of `TERMPATH`.
  3. `$HOME/.termcap` followed by `/usr/share/misc/termcap`.
- `tgetent(name, environ)` finds an entry:
  - It looks first in a `TERMCAP` variable that holds an entry, then in the files from `search_path`.
  - It expands `tc=` references.
  - It limits the result to 1023 characters.
  - It raises `TermcapError` when the terminal is unknown, when a reference is unknown, or when references loop.

### `termscreen.terminal`

- `setterm(term_type, environ, size)` returns a `Terminal`.
  - The screen size comes from `size` as `(lines, cols)`. When `size` is `None`, the size of standard output is used. When that is unknown, the entry's `li` and `co` are used.
  - `LINES` and `COLUMNS` in the environment override all of these.
  - It raises `ValueError` when the terminal has fewer than five columns.
  - It raises `TermcapError` for an unknown type.
  - An empty type means `xx`.
- `Terminal.from_entry(entry, lines, cols)` builds a `Terminal` directly. It reads these fields:
  - `flags`: the boolean capabilities, such as `am`, `xn` and `xs`.
  - `strings`: the string capabilities, such as `cm`, `cl`, `ce`, `so`, `se`, `cs`, `SF` and `AL`.
  - `cursor_addressing`
  - `pad_char`
  - `no_quick_change`
- `Terminal.getcap(name)` returns any string capability of the entry.

### `termscreen.params`

- `tgoto(cm, destcol, destline, up, bc)` expands a cursor-motion string.
  - It supports `%d`, `%2`, `%3`, `%.`, `%+x`, `%r`, `%i` and `%%`.
  - `up` and `bc` let it avoid sending NUL, EOT and newline as coordinates.
- `tscroll(cap, n1, n2)` expands a scrolling string.
  - It also supports `%n`, `%>xy`, `%B` and `%D`.
  - It ignores `%pN`.
- Both functions raise `CapabilityError` (a `ValueError`) when a capability is `None` or holds an escape they cannot expand.

### `termscreen.padding`

- `tputs(cap, affcnt, outc, ospeed, pad)` sends a capability through `outc` one character at a time, and returns everything it sent.
  - A leading delay such as `20` or `3.5*` is removed from the string and turned into pad characters.
  - `*` multiplies the delay by `affcnt`.
  - Padding is produced only for the speed codes 1 to 14.
  - By default `outc` writes to standard output.
- `pad_count(cap, affcnt, ospeed)` returns the number of pad characters alone.
- `stdout_putchar(ch)` writes one character to standard output.

### `termscreen.tty`

- `TtyModes.from_attrs(attrs)` derives the normal, cbreak and raw attribute sets from the terminal's attributes. The attributes are in the form `termios.tcgetattr` returns.
- Each of these selects a mode, or changes every set, and returns the attributes to apply:
  - `raw()` and `noraw()`
  - `cbreak()` and `nocbreak()`
  - `echo()` and `noecho()`
  - `nl()` and `nonl()`
- `current()` returns the attributes of the selected mode.
- `Tty.open(fd)` takes over a terminal (standard input by default) and applies the normal mode. It raises `OSError` when `fd` is not a terminal.
- `apply()` sets the selected mode.
- `savetty()` and `resetty()` save the present attributes and put them back.
- `restore()` puts back the original attributes.
- `Tty` is a context manager that calls `restore()` on exit.

### `termscreen.window`

- `newwin(nlines, ncols, begy, begx, screen_lines, screen_cols)` creates a blank window.
  - A size of 0 extends the window to the screen's edge.
  - A window with no lines or no columns raises `ValueError`.
- `Window.subwin(nlines, ncols, begy, begx)` creates a window that shares its characters with part of its parent. It raises `ValueError` when the subwindow does not fit inside the parent.
- Each `Line` of a window works as follows:
  - It is indexed by column and holds `Cell(ch, attr)` values.
  - Its `firstch` and `lastch` give the changed range.
  - Its `flags` are `LineFlags` values.
- Changing a window:
  - `put(y, x, cell)` stores a cell and marks its column changed.
  - `mark_changed(y, sx, ex, force)` records a changed range.
  - `touchline(y, sx, ex)` forces a range to be repainted.
  - `touchwin()` forces the whole window to be repainted.
- Window state:
  - `update_flags()` recomputes `WindowFlags.ENDLINE`, `FULLWIN` and `SCROLLWIN` from the window's place on the screen.
  - `standout(terminal)` sets `WindowFlags.WSTANDOUT` when the terminal can show standout.
  - `standend()` clears `WindowFlags.WSTANDOUT`.
  - `text()` returns the window's characters, one text line per window line.

### `termscreen.overlap`

- `overlap_region(src, dst)` returns the screen rectangle shared by two windows as a `Region`, or `None` when they do not overlap.
- `overlay(src, dst)` copies the non-blank characters of `src` onto `dst`.
- `overwrite(src, dst)` copies every character, blanks included.
- `touchoverlap(src, dst)` marks the shared part of `dst` as changed.

### `termscreen.unctrl`

- `unctrl(ch)` gives the printable form of a byte or character, such as `^A`, `^?` or `0x80`.
- `unctrl_len(ch)` gives the length of that form.

## What it does not do

There is no screen update:
- Nothing compares windows with the screen.
- Nothing moves the cursor or writes changed characters to the terminal.

There is also none of the following:
- No keyboard input.
- No scrolling of window contents.
- No handling of stop or resize signals.

The package produces the strings and keeps the buffers, and the caller does the drawing.

## Install

```
pip install .
```

## Example

```python
from termscreen.termcap import TermcapEntry
from termscreen.params import tgoto
from termscreen.window import newwin
from termscreen.unctrl import unctrl

entry = TermcapEntry.parse("vt|test terminal:co#80:li#24:cm=\\E[%i%d;%dH:cl=\\E[H\\E[J:")
print(entry.number("co"))  # 80

print(repr(tgoto(entry.string("cm"), 4, 2, None, None)))  # '\x1b[3;5H'

win = newwin(3, 10, 0, 0, 24, 80)
print(win.text())

print(unctrl(1))  # ^A
```

## Tests

```
pip install .[test]
pytest
```