"""Enumerations shared by the stream and segment models."""

from __future__ import annotations

from enum import IntEnum


class Choice(IntEnum):
    """A yes/no attribute value, as found in playlist attributes."""

    YES = 0
    NO = 1


class EncryptMethod(IntEnum):
    """Encryption scheme applied to a media segment."""

    NONE = 0
    AES_128 = 1
    AES_128_ECB = 2
    SAMPLE_AES = 3
    SAMPLE_AES_CTR = 4
    CENC = 5
    CHACHA20 = 6
    UNKNOWN = 7

    @property
    def label(self) -> str:
        """The display and serialisation label of the method."""
        if self is EncryptMethod.AES_128:
            return "AES-128"
        if self is EncryptMethod.AES_128_ECB:
            return "AES-128_ECB"
        return self.name

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_label(cls, label: str) -> "EncryptMethod":
        """Return the method whose label is ``label``, or UNKNOWN."""
        for method in cls:
            if method.label == label:
                return method
        return cls.UNKNOWN


class ExtractorType(IntEnum):
    """Kind of manifest a stream was extracted from."""

    MPEG_DASH = 0
    HLS = 1
    HTTP_LIVE = 2
    MSS = 3


class MediaType(IntEnum):
    """Kind of media a stream carries."""

    AUDIO = 0
    VIDEO = 1
    SUBTITLES = 2
    CLOSED_CAPTIONS = 3

    @property
    def label(self) -> str:
        """The display and serialisation label of the media type."""
        return self.name

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_label(cls, label: str) -> "MediaType | None":
        """Return the media type whose label is ``label``, or None if none matches."""
        for media_type in cls:
            if media_type.label == label:
                return media_type
        return None


class RoleType(IntEnum):
    """Role of a stream within a presentation."""

    SUBTITLE = 0
    MAIN = 1
    ALTERNATE = 2
    SUPPLEMENTARY = 3
    COMMENTARY = 4
    DUB = 5
    DESCRIPTION = 6
    SIGN = 7
    METADATA = 8

    @property
    def label(self) -> str:
        """The display label of the role, e.g. ``Main``."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.label