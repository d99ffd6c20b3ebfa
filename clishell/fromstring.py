"""Strict conversion of command arguments from text to typed values."""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Callable

__all__ = [
    "BadConversion",
    "IntegerType",
    "parse_unsigned",
    "parse_signed",
    "parse_bool",
    "parse_char",
    "parse_float",
    "from_string",
]

_DIGITS = frozenset("0123456789")

_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEXADECIMAL = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?"
)
_INFINITY = re.compile(r"[+-]?(?:inf|infinity)", re.IGNORECASE)
_NAN = re.compile(r"([+-]?)nan(?:\([0-9A-Za-z_]*\))?", re.IGNORECASE)


class BadConversion(ValueError):
    """Raised when a string cannot be interpreted as the requested type."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "bad from_string conversion: "
            "source string value could not be interpreted as target"
        )


class IntegerType(Enum):
    """Fixed-width integer types an argument can be converted to."""

    SIGNED_CHAR = ("signed char", 8, True)
    SHORT = ("short", 16, True)
    INT = ("int", 32, True)
    LONG = ("long", 64, True)
    LONG_LONG = ("long long", 64, True)
    UNSIGNED_CHAR = ("unsigned char", 8, False)
    UNSIGNED_SHORT = ("unsigned short", 16, False)
    UNSIGNED_INT = ("unsigned int", 32, False)
    UNSIGNED_LONG = ("unsigned long", 64, False)
    UNSIGNED_LONG_LONG = ("unsigned long long", 64, False)

    def __init__(self, label: str, bits: int, signed: bool) -> None:
        self.label = label
        self.bits = bits
        self.signed = signed

    def parse(self, text: str) -> int:
        """Convert ``text`` to an integer in this type's range."""
        if self.signed:
            return parse_signed(text, self.bits)
        return parse_unsigned(text, self.bits)


def _digits(text: str, bits: int) -> int:
    if not text or not all(char in _DIGITS for char in text):
        raise BadConversion()
    value = int(text)
    if value >= 1 << bits:
        raise BadConversion()
    return value


def parse_unsigned(text: str, bits: int) -> int:
    """Parse an unsigned integer of ``bits`` width; one leading '+' is allowed."""
    if not text:
        raise BadConversion()
    if text[0] == "+":
        text = text[1:]
    return _digits(text, bits)


def parse_signed(text: str, bits: int) -> int:
    """Parse a two's-complement integer of ``bits`` width with an optional sign."""
    if not text:
        raise BadConversion()
    limit = 1 << (bits - 1)
    if text[0] == "-":
        value = _digits(text[1:], bits)
        if value > limit:
            raise BadConversion()
        return -value
    if text[0] == "+":
        text = text[1:]
    value = _digits(text, bits)
    if value > limit - 1:
        raise BadConversion()
    return value


def parse_bool(text: str) -> bool:
    """Parse ``true``/``false`` or the integers 1 and 0."""
    if text == "true":
        return True
    if text == "false":
        return False
    value = parse_signed(text, 64)
    if value == 1:
        return True
    if value == 0:
        return False
    raise BadConversion()


def parse_char(text: str) -> str:
    """Accept exactly one character."""
    if len(text) != 1:
        raise BadConversion()
    return text


def _mantissa_is_zero(text: str) -> bool:
    body = text.lstrip("+-")
    if body[:2].lower() == "0x":
        mantissa = re.split(r"[pP]", body[2:])[0]
    else:
        mantissa = re.split(r"[eE]", body)[0]
    return all(char in "0." for char in mantissa)


def parse_float(text: str) -> float:
    """Parse a floating point number, rejecting blanks, trailing junk and overflow."""
    if any(char.isspace() for char in text):
        raise BadConversion()
    if _INFINITY.fullmatch(text):
        return -math.inf if text.startswith("-") else math.inf
    nan = _NAN.fullmatch(text)
    if nan:
        return -math.nan if nan.group(1) == "-" else math.nan
    try:
        if _DECIMAL.fullmatch(text):
            value = float(text)
        elif _HEXADECIMAL.fullmatch(text):
            value = float.fromhex(text)
        else:
            raise BadConversion()
    except OverflowError as error:
        raise BadConversion() from error
    if math.isinf(value):
        raise BadConversion()
    if value == 0.0 and not _mantissa_is_zero(text):
        raise BadConversion()
    return value


def from_string(text: str, target: Any) -> Any:
    """Convert ``text`` to ``target``.

    ``target`` may be ``str``, ``None``, ``bool``, ``int`` (a 64-bit signed
    integer), ``float``, an :class:`IntegerType`, or any callable taking the
    text; a callable that raises ``ValueError`` or ``TypeError`` yields
    :class:`BadConversion`.
    """
    if target is str:
        return text
    if target is None or target is type(None):
        return None
    if target is bool:
        return parse_bool(text)
    if target is int:
        return IntegerType.LONG_LONG.parse(text)
    if target is float:
        return parse_float(text)
    if isinstance(target, IntegerType):
        return target.parse(text)
    if callable(target):
        converter: Callable[[str], Any] = target
        try:
            return converter(text)
        except (ValueError, TypeError) as error:
            raise BadConversion() from error
    raise TypeError(f"unsupported conversion target: {target!r}")