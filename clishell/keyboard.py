"""Reading key presses from the local terminal."""

from __future__ import annotations

import os
import sys
import threading
from collections.abc import Callable
from typing import Any

from clishell.inputdevice import InputDevice, Key, KeyType
from clishell.interfaces import Scheduler

try:
    import termios as _termios
except ImportError:  # not a POSIX system
    _termios = None

try:
    import msvcrt as _msvcrt
except ImportError:  # not a Windows system
    _msvcrt = None

__all__ = ["read_posix_key", "read_windows_key", "RawTerminal", "KeyboardReader"]

EOF = -1
"""Value a ``getch`` callable returns when the input has ended."""

Getch = Callable[[], int]
Decoder = Callable[[Getch], Key]

_POSIX_ARROWS = {
    65: KeyType.UP,
    66: KeyType.DOWN,
    68: KeyType.LEFT,
    67: KeyType.RIGHT,
    70: KeyType.END,
    72: KeyType.HOME,
}

_WINDOWS_SYMBOLS = {
    72: KeyType.UP,
    80: KeyType.DOWN,
    75: KeyType.LEFT,
    77: KeyType.RIGHT,
    71: KeyType.HOME,
    79: KeyType.END,
    83: KeyType.CANC,
}

_WINDOWS_EOF = frozenset({EOF, 4, 26, 3})  # EOF, Ctrl-D, Ctrl-Z, Ctrl-C


def read_posix_key(getch: Getch) -> Key:
    """Read one key from a POSIX terminal through ``getch``.

    ``getch`` returns the next byte as an int, or ``-1`` at end of input.
    Escape sequences for arrows, home, end and delete are decoded.
    """
    code = getch()
    if code in (EOF, 4):
        return Key(KeyType.EOF)
    if code == 127:
        return Key(KeyType.BACKSPACE)
    if code == 10:
        return Key(KeyType.RET)
    if code != 27:
        return Key(KeyType.ASCII, chr(code))
    if getch() != 91:
        return Key(KeyType.IGNORED)
    code = getch()
    if code == 51:
        return Key(KeyType.CANC) if getch() == 126 else Key(KeyType.IGNORED)
    return Key(_POSIX_ARROWS.get(code, KeyType.IGNORED))


def read_windows_key(getch: Getch) -> Key:
    """Read one key from a Windows console through ``getch``.

    ``getch`` returns the next code as an int, or ``-1`` at end of input.
    Ctrl-C, Ctrl-D and Ctrl-Z end the input.
    """
    code = getch()
    if code in _WINDOWS_EOF:
        return Key(KeyType.EOF)
    if code == 224:
        return Key(_WINDOWS_SYMBOLS.get(getch(), KeyType.IGNORED))
    if code == 8:
        return Key(KeyType.BACKSPACE, chr(code))
    if code == 13:
        return Key(KeyType.RET, chr(code))
    return Key(KeyType.ASCII, chr(code))


class RawTerminal:
    """Context manager that turns off line buffering and echo on a terminal.

    Where ``fd`` is not a terminal, or the platform has no terminal
    attributes, entering and leaving change nothing.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self.active = False
        self._saved: Any = None

    def __enter__(self) -> RawTerminal:
        if _termios is not None and os.isatty(self.fd):
            self._saved = _termios.tcgetattr(self.fd)
            raw = list(self._saved)
            raw[3] = raw[3] & ~(_termios.ICANON | _termios.ECHO)
            _termios.tcsetattr(self.fd, _termios.TCSANOW, raw)
            self.active = True
        return self

    def __exit__(self, *args: object) -> None:
        if self.active and _termios is not None:
            _termios.tcsetattr(self.fd, _termios.TCSANOW, self._saved)
        self.active = False
        self._saved = None


def _stdin_getch() -> int:
    if _msvcrt is not None:
        data = _msvcrt.getch()
    else:
        data = os.read(sys.stdin.fileno(), 1)
    return data[0] if data else EOF


def _default_decoder() -> Decoder:
    return read_windows_key if _msvcrt is not None else read_posix_key


class KeyboardReader(InputDevice):
    """Input device that reads keys on a background thread.

    Each key is decoded with ``decode(getch)`` and posted to the
    scheduler. Reading ends on :meth:`stop` or after an end-of-input key.
    With no ``getch`` the process's standard input is read, switched to
    raw mode while the reader runs.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        getch: Getch | None = None,
        decode: Decoder | None = None,
    ) -> None:
        super().__init__(scheduler)
        self._uses_stdin = getch is None
        self._getch: Getch = getch if getch is not None else _stdin_getch
        self._decode: Decoder = decode if decode is not None else _default_decoder()
        self._running = threading.Event()
        self._thread: threading.Thread | None = None
        self._terminal: RawTerminal | None = None

    def start(self) -> None:
        """Begin reading keys; calling it while running does nothing."""
        if self._running.is_set():
            return
        if self._uses_stdin and _msvcrt is None:
            self._terminal = RawTerminal(sys.stdin.fileno())
            self._terminal.__enter__()
        self._running.set()
        self._thread = threading.Thread(target=self._read, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop reading keys and restore the terminal."""
        self._running.clear()
        if self._terminal is not None:
            self._terminal.__exit__(None, None, None)
            self._terminal = None

    def _read(self) -> None:
        while self._running.is_set():
            key = self._decode(self._getch)
            if not self._running.is_set():
                break
            self.notify(key)
            # further reads would only report the end again
            if key.kind is KeyType.EOF:
                self._running.clear()