[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "streamkit"
version = "0.0.1"
description = "Building blocks for a streaming media downloader: stream descriptions, playlists, WebVTT subtitles, JSON encoding, console logging and command-line options."
requires-python = ">=3.10"
dependencies = []
keywords = ["hls", "dash", "m3u8", "webvtt", "srt", "subtitles", "streaming"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
streamkit = "streamkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["streamkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
