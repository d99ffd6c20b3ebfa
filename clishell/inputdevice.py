"""Key events and the device that delivers them through a scheduler."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from clishell.interfaces import Scheduler

__all__ = ["KeyType", "Key", "InputDevice"]


class KeyType(Enum):
    """Kinds of key an input device can report."""

    ASCII = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    BACKSPACE = auto()
    CANC = auto()
    HOME = auto()
    END = auto()
    RET = auto()
    EOF = auto()
    IGNORED = auto()


@dataclass(frozen=True)
class Key:
    """A key press: its kind and, for ``ASCII`` keys, the character."""

    kind: KeyType
    char: str = " "


class InputDevice:
    """Source of key events, delivered to a handler on the scheduler."""

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._handler: Callable[[Key], object] | None = None

    def register(self, handler: Callable[[Key], object] | None) -> None:
        """Set the handler that receives key events."""
        self._handler = handler

    def notify(self, key: Key) -> None:
        """Post delivery of ``key`` to the handler registered when it runs."""

        def deliver() -> None:
            handler = self._handler
            if handler is not None:
                handler(key)

        self._scheduler.post(deliver)