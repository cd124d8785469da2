"""Key events consumed by the menus, and the terminal input adapter."""

import codecs
import os
import select
import sys
import termios
import tty
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

import readchar

# Seconds to wait for the rest of an escape sequence after ESC
ESCAPE_TIMEOUT = 0.05

# Characters that continue an escape sequence, by position after ESC
_SEQUENCE_CONTINUES = ("O[", "12356", "01345789")


class Key(Enum):
    """Symbolic keys understood by the menu state machines."""

    CHAR = "char"
    BACKSPACE = "backspace"
    DELETE = "delete"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    TAB = "tab"
    ENTER = "enter"
    ESCAPE = "escape"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press.

    ``char`` is only set for ``Key.CHAR`` (printable input, including the
    ``j``/``k``/``q`` aliases).
    """

    key: Key
    char: str = ""

    @classmethod
    def printable(cls, char: str) -> "KeyEvent":
        return cls(Key.CHAR, char)

    def is_char(self, *chars: str) -> bool:
        """True if this is a printable key matching one of ``chars``."""
        return self.key is Key.CHAR and self.char in chars


def _build_keymap() -> dict[str, Key]:
    keymap = {
        readchar.key.UP: Key.UP,
        readchar.key.DOWN: Key.DOWN,
        readchar.key.LEFT: Key.LEFT,
        readchar.key.RIGHT: Key.RIGHT,
        readchar.key.HOME: Key.HOME,
        readchar.key.END: Key.END,
        readchar.key.DELETE: Key.DELETE,
        readchar.key.BACKSPACE: Key.BACKSPACE,
        readchar.key.TAB: Key.TAB,
        readchar.key.ESC: Key.ESCAPE,
        readchar.key.CR: Key.ENTER,
        readchar.key.LF: Key.ENTER,
        "\x08": Key.BACKSPACE,
        # Alternate home/end sequences sent by some terminals
        "\x1b[1~": Key.HOME,
        "\x1b[4~": Key.END,
        "\x1bOH": Key.HOME,
        "\x1bOF": Key.END,
    }
    return keymap


KEYMAP = _build_keymap()


def translate_key(raw: str) -> Optional[KeyEvent]:
    """Map a raw key string to a KeyEvent.

    Returns None for keys the menus do not handle (function keys, etc.).
    """
    if raw in KEYMAP:
        return KeyEvent(KEYMAP[raw])
    if len(raw) == 1 and raw.isprintable():
        return KeyEvent.printable(raw)
    return None


class TerminalKeyReader:
    """Blocking key reader for a POSIX terminal.

    Input is read unbuffered from the file descriptor so a lone Escape can
    be told apart from the start of an escape sequence: after ESC the
    reader waits ``escape_timeout`` seconds for more bytes. Ctrl+C is
    reported as Escape and so asks for exit confirmation.

    Args:
        fd: File descriptor to read from (default: stdin)
        escape_timeout: Seconds to wait for the rest of a sequence
    """

    def __init__(self, fd: Optional[int] = None, escape_timeout: float = ESCAPE_TIMEOUT):
        self.fd = sys.stdin.fileno() if fd is None else fd
        self.escape_timeout = escape_timeout
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pushback = ""

    def read(self) -> KeyEvent:
        """Wait for the next key the menus understand."""
        while True:
            try:
                with self._cbreak():
                    raw = self._read_key()
            except KeyboardInterrupt:
                return KeyEvent(Key.ESCAPE)
            event = translate_key(raw)
            if event is not None:
                return event

    @contextmanager
    def _cbreak(self) -> Iterator[None]:
        """Disable echo and line buffering while reading, if on a tty."""
        if not os.isatty(self.fd):
            yield
            return
        saved = termios.tcgetattr(self.fd)
        try:
            tty.setcbreak(self.fd, termios.TCSANOW)
            yield
        finally:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, saved)

    def _read_key(self) -> str:
        ch = self._read_char()
        if ch != readchar.key.ESC or not self._input_pending():
            return ch

        nxt = self._read_char()
        if nxt not in _SEQUENCE_CONTINUES[0]:
            # Escape pressed right before another key
            self._pushback = nxt
            return ch

        seq = ch + nxt
        for continues in _SEQUENCE_CONTINUES[1:]:
            seq += self._read_char()
            if seq[-1] not in continues:
                return seq
        return seq + self._read_char()

    def _read_char(self) -> str:
        if self._pushback:
            ch, self._pushback = self._pushback, ""
            return ch
        while True:
            data = os.read(self.fd, 1)
            if not data:
                raise EOFError("input closed")
            ch = self._decoder.decode(data)
            if ch:
                return ch

    def _input_pending(self) -> bool:
        if self._pushback:
            return True
        ready, _, _ = select.select([self.fd], [], [], self.escape_timeout)
        return bool(ready)
