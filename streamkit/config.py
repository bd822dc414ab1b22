"""Plain configuration records for the parser and the progress display."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ParserConfig:
    """Where a manifest came from and how to request it."""

    url: str = ""
    original_url: str = ""
    base_url: str = ""
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class DownloadSpeedColumn:
    """State of the download-speed column of the progress display."""

    stop_speed: int = 0
    date_time_string_dic: dict[int, str] = field(default_factory=dict)
    no_wrap: bool = False