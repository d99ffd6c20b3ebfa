"""Abstract interfaces for task schedulers and command history storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

__all__ = ["Scheduler", "HistoryStorage"]


class Scheduler(ABC):
    """An engine that runs submitted tasks.

    ``post`` may be called from any thread; the task runs as soon as
    possible, but always after ``post`` has returned.
    """

    @abstractmethod
    def post(self, task: Callable[[], object]) -> None:
        """Submit ``task`` for execution."""


class HistoryStorage(ABC):
    """Persistent store for the commands typed in sessions."""

    @abstractmethod
    def store(self, commands: Sequence[str]) -> None:
        """Add ``commands`` to the storage."""

    @abstractmethod
    def commands(self) -> list[str]:
        """Return every command stored."""

    @abstractmethod
    def clear(self) -> None:
        """Remove everything; ``commands()`` then returns an empty list."""