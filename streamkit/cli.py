"""Command-line options and the program entry point."""

from __future__ import annotations

import argparse
import os
import re
from dataclasses import dataclass, field

from streamkit.console import CustomAnsiConsole

_SPEED = re.compile(r"([0-9.]+)(M|K)")

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_STRING_FLAGS = (
    ("input", "input", "", "Input URL or file"),
    ("tmp-dir", "tmp_dir", "", "Set directory for temporary files"),
    ("save-dir", "save_dir", "", "Set output directory"),
    ("save-pattern", "save_pattern", "", "Set the save name pattern"),
    ("ui-language", "ui_language", "", "Set the interface language"),
    ("urlprocessor-args", "urlprocessor_args", "", "Arguments for the URL processor"),
    ("key-text-file", "key_text_file", "", "File holding decryption keys"),
    ("log-level", "log_level", "INFO", "Set log level"),
    ("sub-format", "sub_format", "SRT", "Subtitle output format"),
    ("decryption-binary-path", "decryption_binary_path", "", "Path for decryption-binary"),
    ("ffmpeg-binary-path", "ffmpeg_binary_path", "", "Path for FFmpeg-binary"),
    ("base-url", "base_url", "", "Base URL for the operation"),
)

_BOOL_FLAGS = (
    ("auto-select", "auto_select", False, ""),
    ("sub-only", "sub_only", False, ""),
    ("skip-merge", "skip_merge", False, ""),
    ("skip-download", "skip_download", False, ""),
    ("no-date-info", "no_date_info", False, ""),
    ("binary-merge", "binary_merge", False, ""),
    ("use-ffmpeg-concat-demuxer", "use_ffmpeg_concat_demuxer", False, ""),
    ("del-after-done", "del_after_done", True, ""),
    ("auto-subtitle-fix", "auto_subtitle_fix", True, ""),
    ("check-segments-count", "check_segments_count", True, ""),
    ("write-meta-json", "write_meta_json", True, ""),
    ("append-url-params", "append_url_params", False, "Append URL parameters"),
    ("mp4-real-time-decryption", "mp4_real_time_decryption", False, "Decrypt MP4 in real time"),
    ("use-shaka-packager", "use_shaka_packager", False, "Decrypt with shaka-packager"),
    ("force-ansi-console", "force_ansi_console", False, "Force ANSI console output"),
    ("no-ansi-color", "no_ansi_color", False, "Disable ANSI colours"),
    ("concurrent-download", "concurrent_download", False, "Enable concurrent downloads"),
    ("no-log", "no_log", False, "Disable logging"),
    ("use-system-proxy", "use_system_proxy", True, ""),
)


def _cpu_count() -> int:
    return os.cpu_count() or 1


@dataclass
class Options:
    """Settings chosen on the command line."""

    input: str = ""
    tmp_dir: str = ""
    save_dir: str = ""
    save_name: str = ""
    save_pattern: str = ""
    ui_language: str = ""
    urlprocessor_args: str = ""
    keys: list[str] = field(default_factory=list)
    key_text_file: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    log_level: str = "INFO"
    sub_format: str = "SRT"
    auto_select: bool = False
    sub_only: bool = False
    thread_count: int = field(default_factory=_cpu_count)
    download_retry_count: int = 3
    skip_merge: bool = False
    skip_download: bool = False
    no_date_info: bool = False
    binary_merge: bool = False
    use_ffmpeg_concat_demuxer: bool = False
    del_after_done: bool = True
    auto_subtitle_fix: bool = True
    check_segments_count: bool = True
    write_meta_json: bool = True
    append_url_params: bool = False
    mp4_real_time_decryption: bool = False
    use_shaka_packager: bool = False
    force_ansi_console: bool = False
    no_ansi_color: bool = False
    decryption_binary_path: str = ""
    ffmpeg_binary_path: str = ""
    base_url: str = ""
    concurrent_download: bool = False
    no_log: bool = False
    ad_keywords: list[str] = field(default_factory=list)
    max_speed: int = 0
    use_system_proxy: bool = True


def parse_speed_limit(value: str) -> int:
    """Parse a speed such as ``1.5M`` or ``800K`` into bytes per second."""
    text = value.upper()
    match = _SPEED.search(text)
    if match is None:
        raise ValueError(f"invalid speed limit format: {text}")
    try:
        number = float(match.group(1))
    except ValueError:
        raise ValueError(f"invalid number in speed limit: {match.group(1)}") from None
    factor = 1024 * 1024 if match.group(2) == "M" else 1024
    return int(number * factor)


def parse_header(value: str) -> tuple[str, str]:
    """Split a ``key:value`` header into its stripped name and value."""
    key, separator, val = value.partition(":")
    if not separator:
        raise ValueError(f"invalid header format, expecting key:value, got: {value}")
    return key.strip(), val.strip()


def _bool_arg(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {text}")


def _int_arg(text: str) -> int:
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {text}") from None


def _speed_arg(text: str) -> int:
    try:
        return parse_speed_limit(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


class _HeaderAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        try:
            key, val = parse_header(values)
        except ValueError as exc:
            raise argparse.ArgumentError(self, str(exc)) from None
        headers = dict(getattr(namespace, self.dest) or {})
        headers[key] = val
        setattr(namespace, self.dest, headers)


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for all command-line options."""
    parser = argparse.ArgumentParser(prog="streamkit", allow_abbrev=False)
    for name, dest, default, help_text in _STRING_FLAGS:
        parser.add_argument(f"--{name}", dest=dest, default=default, help=help_text)
    for name, dest, default, help_text in _BOOL_FLAGS:
        parser.add_argument(
            f"--{name}",
            dest=dest,
            type=_bool_arg,
            nargs="?",
            const=True,
            default=default,
            metavar="BOOL",
            help=help_text,
        )
    parser.add_argument(
        "--thread-count", dest="thread_count", type=_int_arg, default=_cpu_count()
    )
    parser.add_argument(
        "--download-retry-count", dest="download_retry_count", type=_int_arg, default=3
    )
    parser.add_argument(
        "--key",
        dest="keys",
        action="append",
        default=None,
        help="Pass decryption key(s), format: --key KID1:KEY1 --key KID2:KEY2",
    )
    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action=_HeaderAction,
        default=None,
        help="Specify headers in the format key:value",
    )
    parser.add_argument(
        "--ad-keyword",
        dest="ad_keywords",
        action="append",
        default=None,
        help="Ad keywords (can specify multiple)",
    )
    parser.add_argument(
        "-R",
        "--max-speed",
        dest="max_speed",
        type=_speed_arg,
        default=0,
        help="Max download speed, e.g. 15M or 100K",
    )
    return parser


def parse_options(argv: list[str] | None = None) -> Options:
    """Parse command-line arguments into Options."""
    values = vars(build_parser().parse_args(argv))
    values["keys"] = values["keys"] or []
    values["ad_keywords"] = values["ad_keywords"] or []
    values["headers"] = values["headers"] or {}
    return Options(**values)


def main(argv: list[str] | None = None) -> int:
    """Parse options, report the keys and greet."""
    options = parse_options(argv)
    print(f"Keys: [{' '.join(options.keys)}]")
    console = CustomAnsiConsole(force_ansi=False, no_ansi_color=True)
    console.success("Hear me subjects of Ymir")
    return 0