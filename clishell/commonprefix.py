"""Longest common prefix of a group of strings."""

from __future__ import annotations

from collections.abc import Sequence

__all__ = ["common_prefix"]


def common_prefix(strings: Sequence[str]) -> str:
    """Return the longest prefix shared by every string in ``strings``.

    Raises ``ValueError`` if ``strings`` is empty.
    """
    if not strings:
        raise ValueError("common_prefix() needs at least one string")
    shortest = min(strings, key=len)
    for index, char in enumerate(shortest):
        if any(other[index] != char for other in strings):
            return shortest[:index]
    return shortest