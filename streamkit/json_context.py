"""JSON encoding of stream specs, media segments and string maps."""

from __future__ import annotations

import base64
import dataclasses
import json
import math
import re
import types
import typing
from datetime import datetime
from enum import Enum
from functools import lru_cache
from typing import Any, Union

from streamkit.enums import Choice, EncryptMethod, ExtractorType, MediaType, RoleType
from streamkit.media import EncryptInfo, MediaPart, MediaSegment, MSSData, Playlist
from streamkit.stream_spec import StreamSpec

_NAME_OVERRIDES = {
    "iv": "IV",
    "is_live": "Islive",
    "four_cc": "FourCC",
    "timescale": "Timesacle",
    "protection_system_id": "ProtectionSystemID",
    "mss_data": "MSSData",
}

_HTML_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)

_KNOWN_TYPES: dict[str, Any] = {
    "None": type(None),
    "NoneType": type(None),
    "Any": Any,
    "int": int,
    "float": float,
    "str": str,
    "bool": bool,
    "bytes": bytes,
    "datetime": datetime,
    "Choice": Choice,
    "EncryptMethod": EncryptMethod,
    "ExtractorType": ExtractorType,
    "MediaType": MediaType,
    "RoleType": RoleType,
    "EncryptInfo": EncryptInfo,
    "MediaPart": MediaPart,
    "MediaSegment": MediaSegment,
    "MSSData": MSSData,
    "Playlist": Playlist,
    "StreamSpec": StreamSpec,
}

_TOKEN_RE = re.compile(r"\s*([A-Za-z_][\w.]*|[\[\],|])")


def _json_name(field_name: str) -> str:
    override = _NAME_OVERRIDES.get(field_name)
    if override is not None:
        return override
    return "".join(part.capitalize() for part in field_name.split("_"))


def _encode_float(value: float) -> float | int:
    if not math.isfinite(value):
        raise ValueError(f"unsupported float value: {value!r}")
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


def _encode_datetime(value: datetime) -> str:
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


def _encode(value: Any) -> Any:
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, (EncryptMethod, MediaType)):
        return value.label
    if isinstance(value, Enum):
        return int(value.value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return _encode_float(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, datetime):
        return _encode_datetime(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            _json_name(f.name): _encode(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _encode(item) for key, item in value.items()}
    raise TypeError(f"cannot encode value of type {type(value).__name__}")


def dumps(value: Any) -> str:
    """Encode ``value`` as indented JSON, escaping HTML-sensitive characters."""
    text = json.dumps(_encode(value), indent=2, ensure_ascii=False, allow_nan=False)
    return text.translate(_HTML_ESCAPES)


class _HintParser:
    """Resolves annotation strings built from the known model types."""

    def __init__(self, text: str) -> None:
        self._tokens = self._tokenize(text)
        self._pos = 0

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        tokens: list[str] = []
        pos = 0
        stripped = text.strip()
        while pos < len(stripped):
            match = _TOKEN_RE.match(stripped, pos)
            if match is None:
                raise ValueError(f"cannot resolve annotation {text!r}")
            tokens.append(match.group(1))
            pos = match.end()
        return tokens

    def parse(self) -> Any:
        hint = self._union()
        if self._pos != len(self._tokens):
            raise ValueError(f"unexpected text in annotation: {self._tokens[self._pos:]}")
        return hint

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _take(self) -> str:
        token = self._peek()
        if token is None:
            raise ValueError("annotation ended early")
        self._pos += 1
        return token

    def _union(self) -> Any:
        members = [self._atom()]
        while self._peek() == "|":
            self._take()
            members.append(self._atom())
        if len(members) == 1:
            return members[0]
        return Union[tuple(members)]

    def _atom(self) -> Any:
        name = self._take()
        for prefix in ("typing.", "datetime.", "streamkit.enums.", "streamkit.media."):
            if name.startswith(prefix):
                name = name[len(prefix):]
        args: list[Any] = []
        if self._peek() == "[":
            self._take()
            args.append(self._union())
            while self._peek() == ",":
                self._take()
                args.append(self._union())
            if self._take() != "]":
                raise ValueError("unbalanced brackets in annotation")
        if name in ("list", "List"):
            return list[args[0]] if args else list
        if name in ("dict", "Dict"):
            return dict[args[0], args[1]] if args else dict
        if name == "Optional":
            return Union[args[0], None]
        if name == "Union":
            return Union[tuple(args)]
        try:
            return _KNOWN_TYPES[name]
        except KeyError:
            raise ValueError(f"unknown type in annotation: {name}") from None


def _resolve_hint(hint: Any) -> Any:
    if isinstance(hint, str):
        return _HintParser(hint).parse()
    return hint


@lru_cache(maxsize=None)
def _field_hints(cls: type) -> dict[str, Any]:
    return {f.name: _resolve_hint(f.type) for f in dataclasses.fields(cls)}


def _is_optional(hint: Any) -> bool:
    return get_origin_union(hint) and type(None) in typing.get_args(hint)


def get_origin_union(hint: Any) -> bool:
    return typing.get_origin(hint) in (Union, types.UnionType)


def _zero(hint: Any) -> Any:
    origin = typing.get_origin(hint)
    if origin is list:
        return []
    if origin is dict:
        return {}
    if isinstance(hint, type):
        if dataclasses.is_dataclass(hint):
            return hint()
        if issubclass(hint, Enum):
            return hint(0)
        if hint in (int, float, str, bool):
            return hint()
    return None


def _decode_datetime(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"expected a timestamp string, got {value!r}")
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    return datetime.fromisoformat(text)


def _decode_dataclass(cls: type, value: Any) -> Any:
    if not isinstance(value, dict):
        raise ValueError(f"expected an object for {cls.__name__}, got {value!r}")
    hints = _field_hints(cls)
    exact = {_json_name(f.name): f.name for f in dataclasses.fields(cls) if f.init}
    folded = {name.lower(): attr for name, attr in exact.items()}
    kwargs: dict[str, Any] = {}
    for key, item in value.items():
        attr = exact.get(key) or folded.get(key.lower())
        if attr is None:
            continue
        hint = hints[attr]
        if item is None and not _is_optional(hint):
            continue
        kwargs[attr] = _decode(item, hint)
    return cls(**kwargs)


def _decode(value: Any, hint: Any) -> Any:
    if get_origin_union(hint):
        if value is None:
            return None
        inner = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        return _decode(value, inner[0])
    if value is None:
        return _zero(hint)

    origin = typing.get_origin(hint)
    if origin is list:
        if not isinstance(value, list):
            raise ValueError(f"expected an array, got {value!r}")
        (item_hint,) = typing.get_args(hint)
        return [_decode(item, item_hint) for item in value]
    if origin is dict:
        if not isinstance(value, dict):
            raise ValueError(f"expected an object, got {value!r}")
        _, item_hint = typing.get_args(hint)
        return {key: _decode(item, item_hint) for key, item in value.items()}

    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return _decode_dataclass(hint, value)
    if hint is EncryptMethod:
        if not isinstance(value, str):
            raise ValueError(f"expected an encryption method label, got {value!r}")
        return EncryptMethod.from_label(value)
    if hint is MediaType:
        if not isinstance(value, str):
            raise ValueError(f"expected a media type label, got {value!r}")
        media_type = MediaType.from_label(value)
        return MediaType.AUDIO if media_type is None else media_type
    if isinstance(hint, type) and issubclass(hint, Enum):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected an integer for {hint.__name__}, got {value!r}")
        return hint(value)
    if hint is datetime:
        return _decode_datetime(value)
    if hint is bytes:
        if not isinstance(value, str):
            raise ValueError(f"expected a base64 string, got {value!r}")
        return base64.b64decode(value, validate=True)
    if hint is bool:
        if not isinstance(value, bool):
            raise ValueError(f"expected a boolean, got {value!r}")
        return value
    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"expected an integer, got {value!r}")
        return value
    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"expected a number, got {value!r}")
        return float(value)
    if hint is str:
        if not isinstance(value, str):
            raise ValueError(f"expected a string, got {value!r}")
        return value
    if hint is Any:
        return value
    raise ValueError(f"cannot decode into {hint!r}")


def dump_stream_specs(specs: list[StreamSpec]) -> str:
    """Encode a list of stream specs as JSON."""
    return dumps(list(specs))


def load_stream_specs(data: str | bytes) -> list[StreamSpec]:
    """Decode a JSON array of stream specs."""
    return _decode(json.loads(data), list[StreamSpec])


def dump_media_segments(segments: list[MediaSegment]) -> str:
    """Encode a list of media segments as JSON."""
    return dumps(list(segments))


def load_media_segments(data: str | bytes) -> list[MediaSegment]:
    """Decode a JSON array of media segments."""
    return _decode(json.loads(data), list[MediaSegment])


def dump_string_dict(mapping: dict[str, str]) -> str:
    """Encode a string-to-string mapping as JSON."""
    return dumps(dict(mapping))


def load_string_dict(data: str | bytes) -> dict[str, str]:
    """Decode a JSON object of strings."""
    return _decode(json.loads(data), dict[str, str])