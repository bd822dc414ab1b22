"""Log levels, log file creation and log line output."""

from __future__ import annotations

import re
import sys
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Iterable, TextIO

from streamkit.console import CustomAnsiConsole
from streamkit.stream_spec import _escape


class LogLevel(IntEnum):
    """Verbosity of logging, from silent to most detailed."""

    OFF = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4


def get_command_line(argv: list[str] | None = None) -> str:
    """The program name followed by its arguments, separated by spaces."""
    args = sys.argv if argv is None else argv
    program = args[0] if args else ""
    return f"{program} {' '.join(args[1:])}"


def _millis(moment: datetime) -> str:
    return f"{moment.microsecond // 1000:03d}"


@dataclass
class Logger:
    """Writes log lines to the console and, optionally, to a log file."""

    log_level: LogLevel = LogLevel.OFF
    is_write_file: bool = False
    log_file_path: Path | None = None
    vars_rep_regex: re.Pattern[str] = field(default_factory=lambda: re.compile(r"\{\}"))
    stream: TextIO | None = None
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def init_log_file(self, log_dir: str | Path | None = None) -> Path | None:
        """Create a new timestamped log file with a header; return its path.

        Nothing is created when file logging is off. Without ``log_dir`` the
        file goes to a ``Logs`` directory next to the running program.
        """
        if not self.is_write_file:
            return None
        directory = (
            Path(log_dir)
            if log_dir is not None
            else Path(sys.argv[0]).resolve().parent / "Logs"
        )
        directory.mkdir(parents=True, exist_ok=True)

        now = datetime.now()
        stem = f"{now:%Y-%m-%d_%H-%M-%S}"
        header = (
            f"LOG {stem}-{_millis(now)}\n"
            f"Save Path: {directory}\n"
            f"Task Start: {now:%Y/%m/%d %H:%M:%S}\n"
            f"Task Commandline: {get_command_line()}\n\n"
        )
        path = directory / f"{stem}.log"
        index = 1
        while path.exists():
            path = directory / f"{stem}-{index}.log"
            index += 1
        path.write_text(header, encoding="utf-8")
        self.log_file_path = path
        return path

    def current_time(self) -> str:
        """The local time as ``HH:MM:SS.mmm``."""
        now = datetime.now()
        return f"{now:%H:%M:%S}.{_millis(now)}"

    def handle_log(self, write: str, sub_write: str = "") -> None:
        """Print a log line and its continuation, and append both to the log file."""
        console = CustomAnsiConsole(force_ansi=True, no_ansi_color=False, stream=self.stream)
        console.markup_line(write)
        if write:
            print(sub_write, file=self.stream)

        path = self.log_file_path
        if self.is_write_file and path is not None and Path(path).exists():
            plain = _escape(write) + _escape(sub_write)
            with self._lock, open(path, "a", encoding="utf-8") as handle:
                handle.write(plain + "\n")

    def replace_vars(self, data: str, values: Iterable[object]) -> str:
        """Replace placeholder matches in ``data`` with each value in turn."""
        for value in values:
            replacement = str(value)
            data = self.vars_rep_regex.sub(lambda _match: replacement, data)
        return data