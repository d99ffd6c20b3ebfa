import threading
import time
from unittest import mock

import pytest

from clishell.inputdevice import Key, KeyType
from clishell.interfaces import Scheduler
from clishell.keyboard import (
    KeyboardReader,
    RawTerminal,
    read_posix_key,
    read_windows_key,
)


def feeder(*codes):
    it = iter(codes)
    return lambda: next(it, -1)


class ImmediateScheduler(Scheduler):
    def __init__(self):
        self.lock = threading.Lock()
        self.posted = 0

    def post(self, task):
        with self.lock:
            self.posted += 1
            task()


@pytest.mark.parametrize(
    "codes, expected",
    [
        ((-1,), Key(KeyType.EOF)),
        ((4,), Key(KeyType.EOF)),
        ((127,), Key(KeyType.BACKSPACE)),
        ((10,), Key(KeyType.RET)),
        ((97,), Key(KeyType.ASCII, "a")),
        ((27, 91, 65), Key(KeyType.UP)),
        ((27, 91, 66), Key(KeyType.DOWN)),
        ((27, 91, 68), Key(KeyType.LEFT)),
        ((27, 91, 67), Key(KeyType.RIGHT)),
        ((27, 91, 70), Key(KeyType.END)),
        ((27, 91, 72), Key(KeyType.HOME)),
        ((27, 91, 51, 126), Key(KeyType.CANC)),
        ((27, 91, 51, 97), Key(KeyType.IGNORED)),
        ((27, 91, 99), Key(KeyType.IGNORED)),
        ((27, 79), Key(KeyType.IGNORED)),
    ],
)
def test_posix_keys(codes, expected):
    assert read_posix_key(feeder(*codes)) == expected


def test_posix_consumes_only_one_key():
    getch = feeder(27, 91, 65, 98)
    assert read_posix_key(getch) == Key(KeyType.UP)
    assert read_posix_key(getch) == Key(KeyType.ASCII, "b")


@pytest.mark.parametrize(
    "codes, expected",
    [
        ((-1,), Key(KeyType.EOF)),
        ((4,), Key(KeyType.EOF)),
        ((26,), Key(KeyType.EOF)),
        ((3,), Key(KeyType.EOF)),
        ((224, 72), Key(KeyType.UP)),
        ((224, 80), Key(KeyType.DOWN)),
        ((224, 75), Key(KeyType.LEFT)),
        ((224, 77), Key(KeyType.RIGHT)),
        ((224, 71), Key(KeyType.HOME)),
        ((224, 79), Key(KeyType.END)),
        ((224, 83), Key(KeyType.CANC)),
        ((224, 1), Key(KeyType.IGNORED)),
        ((8,), Key(KeyType.BACKSPACE, "\b")),
        ((13,), Key(KeyType.RET, "\r")),
        ((120,), Key(KeyType.ASCII, "x")),
    ],
)
def test_windows_keys(codes, expected):
    assert read_windows_key(feeder(*codes)) == expected


def test_raw_terminal_on_pipe_is_inactive():
    import os

    read_fd, write_fd = os.pipe()
    try:
        with RawTerminal(read_fd) as terminal:
            assert terminal.active is False
        assert terminal.active is False
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_raw_terminal_clears_canonical_and_echo_then_restores():
    fake = mock.Mock()
    fake.ICANON = 2
    fake.ECHO = 8
    fake.TCSANOW = 0
    original = [0, 0, 0, 0xFF, 0, 0, []]
    fake.tcgetattr.return_value = original
    with mock.patch("clishell.keyboard._termios", fake), mock.patch(
        "clishell.keyboard.os.isatty", return_value=True
    ):
        with RawTerminal(7) as terminal:
            assert terminal.active is True
            fd, when, attrs = fake.tcsetattr.call_args.args
            assert fd == 7
            assert attrs[3] & (fake.ICANON | fake.ECHO) == 0
            assert attrs[3] | fake.ICANON | fake.ECHO == 0xFF
        assert fake.tcsetattr.call_args.args == (7, 0, original)
        assert terminal.active is False


def test_reader_delivers_keys_until_eof():
    received = []
    done = threading.Event()

    def handler(key):
        received.append(key)
        if key.kind is KeyType.EOF:
            done.set()

    reader = KeyboardReader(
        ImmediateScheduler(), feeder(104, 105, 27, 91, 65, 10), read_posix_key
    )
    reader.register(handler)
    reader.start()
    assert done.wait(2)
    reader.stop()
    assert received == [
        Key(KeyType.ASCII, "h"),
        Key(KeyType.ASCII, "i"),
        Key(KeyType.UP),
        Key(KeyType.RET),
        Key(KeyType.EOF),
    ]


def test_reader_stops_reading_after_stop():
    calls = []
    seen = threading.Event()

    def getch():
        calls.append(1)
        time.sleep(0.001)
        return 97

    reader = KeyboardReader(ImmediateScheduler(), getch, read_posix_key)
    reader.register(lambda key: seen.set())
    reader.start()
    assert seen.wait(2)
    reader.stop()
    time.sleep(0.05)
    count = len(calls)
    time.sleep(0.05)
    assert len(calls) == count


def test_reader_without_handler_reads_silently():
    done = threading.Event()
    calls = []
    decoded = []

    def getch():
        calls.append(1)
        if len(calls) > 2:
            return -1
        return 97

    def decode(source):
        key = read_windows_key(source)
        decoded.append(key)
        if key.kind is KeyType.EOF:
            done.set()
        return key

    scheduler = ImmediateScheduler()
    reader = KeyboardReader(scheduler, getch, decode)
    reader.start()
    assert done.wait(2)
    time.sleep(0.05)
    reader.stop()
    assert decoded == [
        Key(KeyType.ASCII, "a"),
        Key(KeyType.ASCII, "a"),
        Key(KeyType.EOF),
    ]
    assert scheduler.posted == 3