"""ANSI colour codes and the colour profile used around prompts and input."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from enum import IntEnum

__all__ = [
    "Style",
    "Fg",
    "Bg",
    "FgB",
    "BgB",
    "sgr",
    "supports_color",
    "set_color",
    "set_no_color",
    "color_enabled",
    "before_prompt",
    "after_prompt",
    "before_input",
    "after_input",
]

_COLOR_TERMS = (
    "ansi", "color", "console", "cygwin", "gnome", "konsole", "kterm",
    "linux", "msys", "putty", "rxvt", "screen", "vt100", "xterm",
)


class Style(IntEnum):
    """Text attributes."""

    RESET = 0
    BOLD = 1
    DIM = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    RBLINK = 6
    REVERSED = 7
    CONCEAL = 8
    CROSSED = 9


class Fg(IntEnum):
    """Foreground colours."""

    BLACK = 30
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36
    GRAY = 37
    RESET = 39


class Bg(IntEnum):
    """Background colours."""

    BLACK = 40
    RED = 41
    GREEN = 42
    YELLOW = 43
    BLUE = 44
    MAGENTA = 45
    CYAN = 46
    GRAY = 47
    RESET = 49


class FgB(IntEnum):
    """Bright foreground colours."""

    BLACK = 90
    RED = 91
    GREEN = 92
    YELLOW = 93
    BLUE = 94
    MAGENTA = 95
    CYAN = 96
    GRAY = 97


class BgB(IntEnum):
    """Bright background colours."""

    BLACK = 100
    RED = 101
    GREEN = 102
    YELLOW = 103
    BLUE = 104
    MAGENTA = 105
    CYAN = 106
    GRAY = 107


def sgr(value: int) -> str:
    """Return the ANSI select-graphic-rendition sequence for ``value``."""
    return f"\033[{int(value)}m"


def supports_color(environ: Mapping[str, str] | None = None) -> bool:
    """Tell whether the terminal described by ``environ`` understands colours."""
    if sys.platform.startswith("win"):
        return True
    env = os.environ if environ is None else environ
    term = env.get("TERM")
    if term is None:
        return False
    return any(name in term for name in _COLOR_TERMS)


_enabled = False


def set_color() -> None:
    """Turn colours on for prompts and input."""
    global _enabled
    _enabled = True


def set_no_color() -> None:
    """Turn colours off for prompts and input."""
    global _enabled
    _enabled = False


def color_enabled() -> bool:
    """Tell whether colours are currently on."""
    return _enabled


def before_prompt() -> str:
    """Sequence written before the prompt: bold green when colours are on."""
    return sgr(Fg.GREEN) + sgr(Style.BOLD) if _enabled else ""


def after_prompt() -> str:
    """Sequence written after the prompt: a reset when colours are on."""
    return sgr(Style.RESET) if _enabled else ""


def before_input() -> str:
    """Sequence written before echoed input: bright gray when colours are on."""
    return sgr(FgB.GRAY) if _enabled else ""


def after_input() -> str:
    """Sequence written after echoed input: a reset when colours are on."""
    return sgr(Style.RESET) if _enabled else ""