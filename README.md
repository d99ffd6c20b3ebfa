# clishell

Building blocks for interactive command line shells, in pure Python with no
third-party dependencies.

## Installation

```
pip install clishell
```

To run the test suite from a checkout:

```
pip install ".[test]"
pytest
```

## What is inside

| Module                  | Purpose                                                                  |
|-------------------------|--------------------------------------------------------------------------|
| `clishell.split`        | `split()` breaks a command line into words, honouring quotes and escapes. |
| `clishell.fromstring`   | Strict conversion of arguments to integers, bools, chars and floats.     |
| `clishell.commonprefix` | `common_prefix()`, the longest prefix shared by a group of strings.      |
| `clishell.colors`       | ANSI colour enums, `sgr()`, and the prompt and input colour profile.     |
| `clishell.interfaces`   | Abstract `Scheduler` and `HistoryStorage` base classes.                  |
| `clishell.inputdevice`  | `KeyType`, `Key` and `InputDevice`, which posts key events to a scheduler. |
| `clishell.keyboard`     | Decoders for POSIX and Windows key codes, `RawTerminal`, `KeyboardReader`. |
| `clishell.telnet`       | Telnet output encoding, connection negotiation, IAC parsing, key decoding. |

## Splitting a command line

```python
from clishell.split import split

split("  foo \t \t bar \t")          # ['foo', 'bar']
split(" first 'foo \tbar' last")     # ['first', 'foo \tbar', 'last']
split(r'"foo\"bar\'foo"')            # ['foo"bar\'foo']
split('""')                          # []
```

Single and double quotes keep blanks inside one word. A backslash escapes a
quote or another backslash; before any other character the backslash is
kept. Empty words are dropped.

## Converting arguments

```python
from clishell.fromstring import (
    BadConversion, IntegerType, from_string,
    parse_bool, parse_char, parse_float, parse_signed, parse_unsigned,
)

parse_signed("-42", 8)                    # -42
parse_unsigned("+42", 16)                 # 42
parse_bool("true"), parse_bool("0")       # (True, False)
parse_char("a")                           # 'a'
parse_float("0.1")                        # 0.1
IntegerType.UNSIGNED_CHAR.parse("200")    # 200

from_string("42", int)                    # 42 (64-bit signed)
from_string("42", IntegerType.SHORT)      # 42
from_string("x", str)                     # 'x'

parse_unsigned("-42", 8)                  # raises BadConversion
parse_signed("99999999999999999999", 32)  # raises BadConversion
```

Conversions are strict: stray characters, whitespace, or a value that does
not fit the requested width raise `BadConversion` (a `ValueError`).
`from_string` also accepts any callable as target; a `ValueError` or
`TypeError` it raises becomes `BadConversion`.

## Completion helper

```python
from clishell.commonprefix import common_prefix

common_prefix(["foobar", "foobaz"])   # 'fooba'
common_prefix([])                     # raises ValueError
```

## Colours

`set_color()` and `set_no_color()` switch the colour profile on and off;
`color_enabled()` reports it. `before_prompt()` (bold green),
`after_prompt()`, `before_input()` (bright gray) and `after_input()` return
the escape sequences to write around the prompt and the user's input, or an
empty string while colours are off. `sgr(Fg.RED)` builds a single sequence,
and `supports_color()` checks `TERM` for a colour-capable terminal.

## Key events

`InputDevice.notify()` posts each `Key` to a `Scheduler`, which then hands it
to the handler set with `register()`. A scheduler is anything implementing
`post(task)`:

```python
from clishell.interfaces import Scheduler
from clishell.keyboard import read_posix_key

class Immediate(Scheduler):
    def post(self, task):
        task()

read_posix_key(iter(b"\x1b[A").__next__)   # Key(kind=KeyType.UP, char=' ')
```

`KeyboardReader(scheduler)` reads keys on a background thread from standard
input (put into raw mode with `RawTerminal` on POSIX) until `stop()` or an
end-of-input key; a custom `getch` and decoder may be passed instead.

## Telnet

```python
from clishell.telnet import TelnetKeyDecoder, TelnetParser, encode, negotiation

keys = []
decoder = TelnetKeyDecoder(Immediate())
decoder.register(keys.append)
parser = TelnetParser(decoder.output)
parser.feed(b"a\xff\xfb\x01\r\x00")
# keys == [Key(KeyType.ASCII, 'a'), Key(KeyType.RET, ' ')]

encode("line\n")   # 'line\r\n'
negotiation()      # bytes to send when a client connects
```

## What this package does not do

There is no command menu, no session that runs typed commands, no concrete
scheduler and no history storage: `Scheduler` and `HistoryStorage` are
abstract interfaces only. The telnet module works on bytes you give it; it
opens no sockets and runs no server. The package installs no command.