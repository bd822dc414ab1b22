# streamkit

Building blocks for a streaming media downloader. The package models streams,
playlists and media segments and renders their display strings, parses WebVTT
subtitles and converts them to VTT or SRT text, encodes and decodes its models
as JSON, writes coloured or plain console messages, keeps a log file, and
reads the downloader's command-line options.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package provides the `streamkit` command. It reads the
options, prints the decryption keys it was given, and writes a success
message to the console.

```
streamkit --input https://media.example.com/index.m3u8 -H "User-Agent: streamkit" --max-speed 2.5M
```

Among the options:

- `--input` – input URL or file
- `--tmp-dir`, `--save-dir`, `--save-pattern` – where and how output is written
- `--key` – a decryption key in the form `KID:KEY`; may be given several times
- `-H` / `--header` – a request header in the form `key:value`; may be given several times
- `-R` / `--max-speed` – speed limit such as `500K` or `2.5M`, stored in bytes per second
- `--ad-keyword` – a keyword marking ad segments; may be given several times
- `--log-level` (default `INFO`), `--sub-format` (default `SRT`)
- `--thread-count` (defaults to the number of CPUs), `--download-retry-count` (default 3)
- boolean switches such as `--skip-merge`, `--binary-merge` or `--no-log`; each
  may be given alone (meaning true) or with a value, e.g. `--del-after-done=false`

The same parsing is available as `streamkit.cli.parse_options(argv)`, which
returns an `Options` dataclass; `parse_speed_limit` and `parse_header` parse
single values and raise `ValueError` on bad input.

## Library use

### Subtitles

```python
from streamkit.webvtt import WebVttSub

text = """WEBVTT

00:00:01.000 --> 00:00:02.500
Hello there

"""
sub = WebVttSub.parse(text, 0)
print(sub.to_srt())
print(sub.to_vtt())
```

`WebVttSub.parse` raises `ValueError` when the text does not start with
`WEBVTT`. A non-zero base timestamp (in milliseconds) is subtracted from the
cue times. `to_srt` gives a single placeholder cue when there are no cues with
text.

### Streams and playlists

```python
from streamkit.enums import MediaType
from streamkit.media import MediaPart, MediaSegment, Playlist
from streamkit.stream_spec import StreamSpec, format_time

segments = [MediaSegment(index=i, duration=6.0, url=f"seg{i}.ts") for i in range(3)]
playlist = Playlist(media_parts=[MediaPart(media_segments=segments)])
playlist.compute_total_duration()

spec = StreamSpec(media_type=MediaType.VIDEO, resolution="1920x1080",
                  bandwidth=5_000_000, playlist=playlist)
spec.compute_segments_count()
print(spec.to_short_string())
print(str(spec))
print(format_time(125))   # 2:05
```

Encryption methods are read with `streamkit.media.parse_method` or
`EncryptInfo.from_method`; unrecognised names become `EncryptMethod.UNKNOWN`.
`CustomRange` in `streamkit.custom_range` holds a time or segment-index range,
and `streamkit.config` holds `ParserConfig` and `DownloadSpeedColumn`.

### JSON

`streamkit.json_context` offers `dumps`, `dump_stream_specs` /
`load_stream_specs`, `dump_media_segments` / `load_media_segments` and
`dump_string_dict` / `load_string_dict`. Output is indented JSON with
CamelCase field names; encryption methods and media types are written as
their labels, other enums as integers, and bytes as base64.

### Console and logging

```python
from streamkit.console import CustomAnsiConsole, strip_ansi

console = CustomAnsiConsole(force_ansi=False, no_ansi_color=True)
console.success("Download finished")
console.warn("Retrying segment 12")
```

With colours turned off, output passes through `NonAnsiWriter`, which drops
ANSI escape sequences, repeated writes and blank output. `streamkit.logger`
has `LogLevel` and `Logger`: `init_log_file` creates a timestamped log file
with a header, `handle_log` prints a line and appends it to that file, and
`replace_vars` fills `{}` placeholders in turn.

## What it does not do

The package does not fetch or parse HLS, DASH or Smooth Streaming manifests,
download or decrypt segments, or merge output files. The `streamkit` command
only reads its options and reports them; it does not download anything.