"""Split a command line into words, honouring quotes and backslash escapes."""

from __future__ import annotations

from enum import Enum, auto

__all__ = ["split"]

_BLANKS = " \t\n"
_QUOTES = "\"'"
_ESCAPABLE = "\"'\\"


class _State(Enum):
    SPACE = auto()
    WORD = auto()
    SENTENCE = auto()
    ESCAPE = auto()


def split(text: str) -> list[str]:
    """Split ``text`` on blanks, keeping quoted sentences together.

    Single or double quotes delimit a sentence that may contain blanks.
    A backslash escapes a following quote or backslash; before any other
    character the backslash is kept. Empty entries are dropped.
    """
    parts: list[list[str]] = []
    state = _State.SPACE
    resume = _State.SPACE
    quote = '"'

    for char in text:
        if state is _State.SPACE:
            if char in _BLANKS:
                continue
            if char in _QUOTES:
                state, quote = _State.SENTENCE, char
                parts.append([])
            elif char == "\\":
                # the first character of a word is escaped
                resume, state = _State.WORD, _State.ESCAPE
                parts.append([])
            else:
                state = _State.WORD
                parts.append([char])
        elif state is _State.WORD:
            if char in _BLANKS:
                state = _State.SPACE
            elif char in _QUOTES:
                state, quote = _State.SENTENCE, char
                parts.append([])
            elif char == "\\":
                resume, state = _State.WORD, _State.ESCAPE
            else:
                parts[-1].append(char)
        elif state is _State.SENTENCE:
            if char == quote:
                state = _State.SPACE
            elif char == "\\":
                resume, state = _State.SENTENCE, _State.ESCAPE
            else:
                parts[-1].append(char)
        else:  # escape
            if char not in _ESCAPABLE:
                parts[-1].append("\\")
            parts[-1].append(char)
            state = resume

    return [word for word in ("".join(chars) for chars in parts) if word]