"""WebVTT subtitle parsing and conversion to VTT and SRT text."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import timedelta

from streamkit.media import _fnv1a_64, _to_signed64

_TS_MAP = re.compile(r"X-TIMESTAMP-MAP.*")
_TS_VALUE = re.compile(r"MPEGTS:(\d+)", re.ASCII)
_SPLIT = re.compile(r"[\t\n\f\r ]")
_CLASS_TAG = re.compile(r"<c\..*?>([\\s\\S]*?)</c>")
_INT = re.compile(r"[+-]?[0-9]+")

_NS_PER_MS = 10**6
_NS_PER_SECOND = 10**9
_MASK64 = 0xFFFFFFFFFFFFFFFF
_INT64_MAX = (1 << 63) - 1


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def _trunc_mod(a: int, b: int) -> int:
    return a - _trunc_div(a, b) * b


def _nanoseconds(delta: timedelta) -> int:
    return (delta.days * 86400 + delta.seconds) * _NS_PER_SECOND + delta.microseconds * 1000


def _milliseconds(delta: timedelta) -> int:
    return _trunc_div(_nanoseconds(delta), _NS_PER_MS)


def _parse_int(text: str) -> int:
    return int(text) if _INT.fullmatch(text) else 0


def _clock(delta: timedelta, separator: str) -> str:
    ns = _nanoseconds(delta)
    hours = _trunc_div(ns, 3600 * _NS_PER_SECOND)
    minutes = _trunc_mod(_trunc_div(ns, 60 * _NS_PER_SECOND), 60)
    seconds = _trunc_mod(_trunc_div(ns, _NS_PER_SECOND), 60)
    millis = _trunc_mod(_trunc_div(ns, _NS_PER_MS), 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}{separator}{millis:03d}"


def _convert_to_ts(text: str) -> timedelta:
    """Convert a cue timestamp such as ``01:02.500`` or ``3.5s`` to a timedelta."""
    text = text.strip()
    if text.endswith("s"):
        try:
            seconds = float(text[:-1])
        except ValueError:
            pass
        else:
            if math.isfinite(seconds):
                return timedelta(seconds=seconds)

    parts = text.replace(",", ".").split(".")
    millis = _parse_int(parts[1]) if len(parts) > 1 else 0

    time_parts = parts[0].split(":")
    total_seconds = sum(
        _parse_int(value) * 60**power for power, value in enumerate(reversed(time_parts))
    )
    return timedelta(seconds=total_seconds, milliseconds=millis)


def _remove_class_tag(text: str) -> str:
    matches = list(_CLASS_TAG.finditer(text))
    if not matches:
        return text
    return "".join(match.group(1) + " " for match in matches).strip()


@dataclass(eq=False)
class SubCue:
    """One timed subtitle cue."""

    start_time: timedelta = field(default_factory=timedelta)
    end_time: timedelta = field(default_factory=timedelta)
    payload: str = ""
    settings: str = ""

    def _identity(self) -> tuple:
        return (self.settings, self.payload, self.start_time, self.end_time)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubCue):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        data = b"".join(
            (
                (_nanoseconds(self.start_time) & _MASK64).to_bytes(8, "big"),
                (_nanoseconds(self.end_time) & _MASK64).to_bytes(8, "big"),
                self.settings.encode("utf-8"),
                self.payload.encode("utf-8"),
            )
        )
        return _to_signed64(_fnv1a_64(data))


@dataclass
class WebVttSub:
    """A parsed WebVTT document."""

    cues: list[SubCue] = field(default_factory=list)
    mpegts_timestamp: int = 0

    @classmethod
    def parse(cls, text: str, base_timestamp: int = 0) -> "WebVttSub":
        """Parse WebVTT text; cue times are shifted back by ``base_timestamp`` milliseconds."""
        if not text.strip().startswith("WEBVTT"):
            raise ValueError("bad vtt")

        sub = cls()
        map_match = _TS_MAP.search(text)
        if map_match:
            value_match = _TS_VALUE.search(map_match.group(0))
            if value_match:
                timestamp = int(value_match.group(1))
                if timestamp <= _INT64_MAX:
                    sub.mpegts_timestamp = timestamp

        need_payload = False
        time_line = ""
        payloads: list[str] = []

        for line in text.split("\n"):
            if " --> " in line:
                need_payload = True
                time_line = line.strip()
                continue
            if not need_payload:
                continue
            if line.strip():
                payloads.append(line.strip())
                continue

            if not "\n".join(payloads).strip():
                payloads = []
                continue

            components = [c for c in _SPLIT.split(time_line.replace("-->", "")) if c]
            if len(components) >= 2:
                sub.cues.append(
                    SubCue(
                        start_time=_convert_to_ts(components[0]),
                        end_time=_convert_to_ts(components[1]),
                        payload=_remove_class_tag("".join(payloads)),
                        settings=" ".join(components[2:]),
                    )
                )
            payloads = []
            need_payload = False

        if base_timestamp != 0:
            for cue in sub.cues:
                start_ms = _milliseconds(cue.start_time)
                if start_ms - base_timestamp < 0:
                    break
                cue.start_time = timedelta(milliseconds=start_ms - base_timestamp)
                cue.end_time = timedelta(
                    milliseconds=_milliseconds(cue.end_time) - base_timestamp
                )

        return sub

    def _visible_cues(self) -> list[SubCue]:
        return [cue for cue in self.cues if cue.payload]

    def __str__(self) -> str:
        return "".join(
            f"{_clock(cue.start_time, '.')} --> {_clock(cue.end_time, '.')} {cue.settings}\n"
            f"{cue.payload}\n\n"
            for cue in self._visible_cues()
        )

    def to_vtt(self) -> str:
        """Render as a WebVTT document."""
        return "WEBVTT\n\n" + str(self)

    def to_srt(self) -> str:
        """Render as SubRip text; an empty document yields a single placeholder cue."""
        srt = "".join(
            f"{number}\n"
            f"{_clock(cue.start_time, ',')} --> {_clock(cue.end_time, ',')}\n"
            f"{cue.payload}\n\n"
            for number, cue in enumerate(self._visible_cues(), start=1)
        )
        if not srt.strip():
            return "1\n00:00:00,000 --> 00:00:01,000"
        return srt