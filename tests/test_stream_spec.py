import pytest

from streamkit.enums import EncryptMethod, MediaType, RoleType
from streamkit.media import EncryptInfo, MediaPart, MediaSegment, Playlist
from streamkit.stream_spec import StreamSpec, format_time


def _playlist(*counts, method=EncryptMethod.NONE):
    return Playlist(
        media_parts=[
            MediaPart(
                [MediaSegment(index=i, encrypt_info=EncryptInfo(method)) for i in range(n)]
            )
            for n in counts
        ]
    )


def test_format_time():
    assert format_time(125) == "2:05"


def test_short_string_without_media_type_is_empty():
    assert StreamSpec().to_short_string() == ""


def test_short_string_audio():
    spec = StreamSpec(
        media_type=MediaType.AUDIO,
        group_id="aud",
        bandwidth=128000,
        name="English",
        codecs="mp4a",
        language="en",
        channels="2",
        role=RoleType.MAIN,
    )
    assert spec.to_short_string() == (
        "[deepskyblue3]Aud[/] aud | 128 Kbps | English | mp4a | en | 2 CH | Main"
    )


def test_short_string_escapes_html():
    spec = StreamSpec(media_type=MediaType.AUDIO, name="A&B")
    result = spec.to_short_string()
    assert "A&amp;B" in result
    assert "A&B" not in result


def test_short_string_collapses_empty_fields():
    spec = StreamSpec(media_type=MediaType.SUBTITLES, language="en", codecs="wvtt")
    result = spec.to_short_string()
    assert result.startswith("[deepskyblue3_1]Sub[/]")
    assert "| |" not in result
    assert "en" in result and "wvtt" in result


def test_short_short_string_video_defaults_bandwidth():
    spec = StreamSpec(media_type=MediaType.VIDEO, resolution="1920x1080")
    result = spec.to_short_short_string()
    assert result.startswith("[aqua]Vid[/] 1920x1080")
    assert "0 Kbps" in result


def test_short_short_string_requires_media_type():
    with pytest.raises(ValueError):
        StreamSpec().to_short_short_string()


def test_str_requires_media_type():
    with pytest.raises(ValueError):
        str(StreamSpec())


def test_compute_segments_count():
    spec = StreamSpec(playlist=_playlist(2, 1))
    assert spec.compute_segments_count() == 3
    assert spec.segments_count == 3
    assert StreamSpec().compute_segments_count() == 0


def test_str_reports_segments_and_duration():
    playlist = _playlist(2, 1)
    playlist.total_duration = 125.7
    spec = StreamSpec(media_type=MediaType.VIDEO, playlist=playlist)
    spec.compute_segments_count()
    result = str(spec)
    assert "3 Segments" in result
    assert result.endswith(" | ~" + format_time(125))


def test_str_single_segment_label():
    spec = StreamSpec(media_type=MediaType.SUBTITLES, segments_count=1, language="en")
    result = str(spec)
    assert "1 Segment" in result
    assert "Segments" not in result
    assert "~" not in result
    assert "[red]" not in result


def test_str_shows_encryption_method():
    spec = StreamSpec(
        media_type=MediaType.AUDIO,
        playlist=_playlist(2, method=EncryptMethod.AES_128),
    )
    result = str(spec)
    assert result.startswith("[deepskyblue3]Aud[/] [red]*")
    assert EncryptMethod.AES_128.label in result