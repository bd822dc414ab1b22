"""Console output with optional ANSI colour and a colour-stripping writer."""

from __future__ import annotations

import re
import sys
from enum import IntEnum
from typing import TextIO


class MessageType(IntEnum):
    """Kind of status message, which decides its colour."""

    SUCCESS = 0
    ERROR = 1
    DEBUG = 2
    INFO = 3
    WARN = 4


_COLOURS = {
    MessageType.SUCCESS: "32",
    MessageType.ERROR: "31",
    MessageType.DEBUG: "90",
    MessageType.INFO: "92",
    MessageType.WARN: "33",
}
_UNDERLINE = "4"
_RESET = "\x1b[0m"

_ANSI_PATTERNS = (
    re.compile(r"\x1B\[(\d+;?)+m"),
    re.compile(r"\[\??\d+[AKlh]"),
    re.compile(r"[\r\n] +"),
)


def strip_ansi(text: str) -> str:
    """Remove colour codes, cursor controls and line breaks followed by padding."""
    for pattern in _ANSI_PATTERNS:
        text = pattern.sub("", text)
    return text


class NonAnsiWriter:
    """Writes text without ANSI sequences, dropping repeats and blank output."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._last_out = ""

    def write(self, text: str) -> int:
        """Write ``text`` stripped of ANSI sequences; return the number of characters handled."""
        if text == self._last_out:
            return len(text)
        self._last_out = text
        output = strip_ansi(text)
        if not output.strip():
            return len(text)
        stream = sys.stdout if self._stream is None else self._stream
        stream.write(output)
        return len(output)


class CustomAnsiConsole:
    """A console that writes markup and coloured status messages."""

    def __init__(
        self,
        force_ansi: bool = False,
        no_ansi_color: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self.force_ansi = force_ansi
        self.colored = not no_ansi_color
        self._stream = stream
        self._filter = NonAnsiWriter(stream) if no_ansi_color else None

    def _write(self, text: str) -> None:
        if self._filter is not None:
            self._filter.write(text)
        else:
            (sys.stdout if self._stream is None else self._stream).write(text)

    def markup(self, value: str) -> None:
        """Write ``value`` as is."""
        self._write(value)

    def markup_line(self, value: str) -> None:
        """Write ``value`` followed by a newline."""
        self._write(value + "\n")

    def print_message(self, message_type: MessageType, message: str) -> None:
        """Write ``message`` on its own line in the colour of ``message_type``, underlined."""
        if self.colored:
            codes = f"{_COLOURS[MessageType(message_type)]};{_UNDERLINE}"
            message = f"\x1b[{codes}m{message}{_RESET}"
        self._write(message + "\n")

    def success(self, message: str) -> None:
        """Write a success message."""
        self.print_message(MessageType.SUCCESS, message)

    def error(self, message: str) -> None:
        """Write an error message."""
        self.print_message(MessageType.ERROR, message)

    def debug(self, message: str) -> None:
        """Write a debug message."""
        self.print_message(MessageType.DEBUG, message)

    def info(self, message: str) -> None:
        """Write an informational message."""
        self.print_message(MessageType.INFO, message)

    def warn(self, message: str) -> None:
        """Write a warning message."""
        self.print_message(MessageType.WARN, message)