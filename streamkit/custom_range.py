"""A user-requested range of a stream, by time or by segment index."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CustomRange:
    """Range selection parsed from user input."""

    input_str: str = ""
    start_sec: float | None = None
    end_sec: float | None = None
    start_seg_index: int | None = None
    end_seg_index: int | None = None

    def __str__(self) -> str:
        return (
            f"StartSec: {self.start_sec or 0.0:.2f}, "
            f"EndSec: {self.end_sec or 0.0:.2f}, "
            f"StartSegIndex: {self.start_seg_index or 0}, "
            f"EndSegIndex: {self.end_seg_index or 0}"
        )