"""Telnet protocol handling for remote command-line sessions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum, IntEnum, auto

from clishell.inputdevice import InputDevice, Key, KeyType
from clishell.interfaces import Scheduler

__all__ = [
    "TelnetCommand",
    "TelnetState",
    "encode",
    "negotiation",
    "TelnetParser",
    "TelnetKeyDecoder",
]

_log = logging.getLogger(__name__)

_OPTION_ECHO = 0x01
_OPTION_LINEMODE = 0x22


class TelnetCommand(IntEnum):
    """Telnet command bytes that may follow an IAC."""

    SE = 0xF0  # end of subnegotiation parameters
    NOP = 0xF1
    DATA_MARK = 0xF2
    BREAK = 0xF3
    INTERRUPT_PROCESS = 0xF4
    ABORT_OUTPUT = 0xF5
    ARE_YOU_THERE = 0xF6
    ERASE_CHARACTER = 0xF7
    ERASE_LINE = 0xF8
    GO_AHEAD = 0xF9
    SB = 0xFA  # start of subnegotiation
    WILL = 0xFB
    WONT = 0xFC
    DO = 0xFD
    DONT = 0xFE
    IAC = 0xFF


class TelnetState(Enum):
    """Where the parser is in the incoming byte stream."""

    DATA = auto()
    SUB = auto()
    WAIT_WILL = auto()
    WAIT_WONT = auto()
    WAIT_DO = auto()
    WAIT_DONT = auto()


_WAIT_STATES = {
    TelnetCommand.WILL: TelnetState.WAIT_WILL,
    TelnetCommand.WONT: TelnetState.WAIT_WONT,
    TelnetCommand.DO: TelnetState.WAIT_DO,
    TelnetCommand.DONT: TelnetState.WAIT_DONT,
}


def encode(text: str) -> str:
    """Prepare ``text`` for a telnet client: every newline becomes CR LF."""
    return text.replace("\n", "\r\n")


def negotiation() -> bytes:
    """Bytes the server sends on connection.

    Asks the client to use line mode with all mode bits cleared (so keys
    arrive one at a time) and announces that the server will echo.
    """
    iac = TelnetCommand.IAC
    return bytes(
        [
            iac, TelnetCommand.DO, _OPTION_LINEMODE,
            iac, TelnetCommand.SB, _OPTION_LINEMODE, 0x01, 0x00, iac, TelnetCommand.SE,
            iac, TelnetCommand.WILL, _OPTION_ECHO,
        ]
    )


class TelnetParser:
    """Separates user data from telnet commands in a received byte stream.

    Each data byte is passed to ``on_data``; option negotiations and
    subnegotiations are consumed silently.
    """

    def __init__(self, on_data: Callable[[int], object]) -> None:
        self._on_data = on_data
        self._state = TelnetState.DATA
        self._escape = False

    @property
    def state(self) -> TelnetState:
        """The current parsing state."""
        return self._state

    def feed(self, data: bytes | bytearray | Iterable[int]) -> None:
        """Process received bytes; state carries over between calls."""
        for byte in bytes(data):
            self._consume(byte)

    def _consume(self, byte: int) -> None:
        if self._escape:
            self._escape = False
            if byte == TelnetCommand.IAC:
                self._data(byte)
            else:
                self._command(byte)
        elif byte == TelnetCommand.IAC:
            self._escape = True
        else:
            self._data(byte)

    def _data(self, byte: int) -> None:
        if self._state is TelnetState.DATA:
            self._on_data(byte)
        elif self._state is not TelnetState.SUB:
            # the option byte of WILL/WONT/DO/DONT: nothing to do with it
            self._state = TelnetState.DATA

    def _command(self, byte: int) -> None:
        try:
            command = TelnetCommand(byte)
        except ValueError:
            return
        if command is TelnetCommand.SE:
            if self._state is TelnetState.SUB:
                self._state = TelnetState.DATA
            else:
                _log.warning("received SE when not in sub state")
        elif command is TelnetCommand.SB:
            if self._state is not TelnetState.SUB:
                self._state = TelnetState.SUB
            else:
                _log.warning("received SB when already in sub state")
        elif command in _WAIT_STATES:
            self._state = _WAIT_STATES[command]
        else:
            self._state = TelnetState.DATA


_ARROWS = {
    65: KeyType.UP,
    66: KeyType.DOWN,
    68: KeyType.LEFT,
    67: KeyType.RIGHT,
    70: KeyType.END,
    72: KeyType.HOME,
}


class _Step(Enum):
    FIRST = auto()
    AFTER_ESC = auto()
    AFTER_BRACKET = auto()
    AFTER_CODE = auto()
    AFTER_CR = auto()


class TelnetKeyDecoder(InputDevice):
    """Turns the data bytes of a telnet session into key events.

    Feed it with :meth:`output`, typically as the ``on_data`` callback of
    a :class:`TelnetParser`; decoded keys are posted to the scheduler.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        super().__init__(scheduler)
        self._step = _Step.FIRST

    def output(self, byte: int) -> None:
        """Process one data byte."""
        step = self._step
        if step is _Step.FIRST:
            # 0xFF is the end-of-file marker as well as an escaped IAC
            if byte in (0xFF, 4):
                self.notify(Key(KeyType.EOF))
            elif byte in (8, 127):
                self.notify(Key(KeyType.BACKSPACE))
            elif byte == 27:
                self._step = _Step.AFTER_ESC
            elif byte == 13:
                self._step = _Step.AFTER_CR
            else:
                self.notify(Key(KeyType.ASCII, chr(byte)))
        elif step is _Step.AFTER_ESC:
            if byte == 91:
                self._step = _Step.AFTER_BRACKET
            else:
                self._step = _Step.FIRST
                self.notify(Key(KeyType.IGNORED))
        elif step is _Step.AFTER_BRACKET:
            kind = _ARROWS.get(byte)
            if kind is None:
                self._step = _Step.AFTER_CODE
            else:
                self._step = _Step.FIRST
                self.notify(Key(kind))
        elif step is _Step.AFTER_CODE:
            self._step = _Step.FIRST
            self.notify(Key(KeyType.CANC if byte == 126 else KeyType.IGNORED))
        else:
            self._step = _Step.FIRST
            # CR NUL on Linux clients, CR LF on Windows ones
            self.notify(Key(KeyType.RET if byte in (0, 10) else KeyType.IGNORED))