"""Stream and playlist models, WebVTT subtitles, JSON encoding, console logging and command-line options for a media downloader."""

__version__ = "0.0.1"