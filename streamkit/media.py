"""Media segments, parts, playlists and their encryption info."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from streamkit.enums import EncryptMethod

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK64 = 0xFFFFFFFFFFFFFFFF


def _fnv1a_64(data: bytes) -> int:
    value = _FNV_OFFSET
    for byte in data:
        value ^= byte
        value = (value * _FNV_PRIME) & _MASK64
    return value


def _to_signed64(value: int) -> int:
    return value - (1 << 64) if value & (1 << 63) else value


def _format_float(value: float) -> str:
    """Shortest decimal form of ``value`` without an exponent."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return format(Decimal(repr(value)).normalize(), "f")


def _optional_text(value: object) -> str:
    return "nil" if value is None else str(value)


def parse_method(method: str | None) -> EncryptMethod:
    """Parse an encryption method name such as ``AES-128``; unmatched names give UNKNOWN."""
    if method:
        name = method.replace("-", "_").upper()
        if name in EncryptMethod.__members__ and name != EncryptMethod.UNKNOWN.name:
            return EncryptMethod[name]
    return EncryptMethod.UNKNOWN


@dataclass
class EncryptInfo:
    """How a segment is encrypted."""

    method: EncryptMethod = EncryptMethod.NONE
    key: bytes | None = None
    iv: bytes | None = None

    @classmethod
    def from_method(cls, method: str | None) -> "EncryptInfo":
        """Build an EncryptInfo whose method is parsed from ``method``."""
        return cls(method=parse_method(method))


@dataclass(eq=False)
class MediaSegment:
    """One downloadable piece of a stream."""

    index: int = 0
    duration: float = 0.0
    title: str | None = None
    date_time: datetime | None = None
    start_range: int | None = None
    stop_range: int | None = None
    expect_length: int | None = None
    encrypt_info: EncryptInfo = field(default_factory=EncryptInfo)
    url: str = ""
    name_from_var: str | None = None

    def calculate_stop_range(self) -> int | None:
        """Last byte offset of the segment, if its start and length are known."""
        if self.start_range is not None and self.expect_length is not None:
            return self.start_range + self.expect_length - 1
        return None

    def _identity(self) -> tuple:
        return (
            self.index,
            self.duration,
            self.url,
            self.title,
            self.start_range,
            self.stop_range,
            self.expect_length,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaSegment):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        text = "".join(
            (
                str(self.index),
                _format_float(self.duration),
                _optional_text(self.title),
                _optional_text(self.start_range),
                _optional_text(self.stop_range),
                _optional_text(self.expect_length),
                self.url,
            )
        )
        return _to_signed64(_fnv1a_64(text.encode("utf-8")))


@dataclass
class MediaPart:
    """A run of consecutive segments."""

    media_segments: list[MediaSegment] = field(default_factory=list)

    def sum(self) -> float:
        """Total duration of the segments in this part."""
        return sum(segment.duration for segment in self.media_segments)


@dataclass
class MSSData:
    """Smooth Streaming track parameters."""

    four_cc: str = ""
    codec_private_data: str = ""
    type: str = ""
    timescale: int = 0
    sampling_rate: int = 0
    channels: int = 0
    bits_per_sample: int = 0
    nal_unit_length_field: int = 0
    duration: int = 0
    is_protection: bool = False
    protection_system_id: str = ""
    protection_data: str = ""


@dataclass
class Playlist:
    """A media playlist made of parts of segments."""

    url: str = ""
    is_live: bool = False
    refresh_interval_ms: float = 15000.0
    total_duration: float = 0.0
    target_duration: float | None = None
    media_init: MediaSegment | None = None
    media_parts: list[MediaPart] = field(default_factory=list)

    def compute_total_duration(self) -> float:
        """Sum the durations of all parts, store it in ``total_duration`` and return it."""
        self.total_duration = sum(part.sum() for part in self.media_parts)
        return self.total_duration