from datetime import timedelta

import pytest

from streamkit.webvtt import SubCue, WebVttSub

SAMPLE = (
    "WEBVTT\n"
    "X-TIMESTAMP-MAP=MPEGTS:900000,LOCAL:00:00:00.000\n"
    "\n"
    "00:00:01.000 --> 00:00:03.500 align:start\n"
    "Hello\n"
    "world\n"
    "\n"
    "00:01:02.500 --> 00:01:04.000\n"
    "Second\n"
    "\n"
)


def test_parse_reads_cues_and_timestamp_map():
    sub = WebVttSub.parse(SAMPLE)
    assert sub.mpegts_timestamp == 900000
    assert len(sub.cues) == 2
    assert sub.cues[0].payload == "Hello" + "world"
    assert sub.cues[0].settings == "align:start"
    assert sub.cues[1].settings == ""
    assert sub.cues[1].start_time == timedelta(minutes=1, seconds=2, milliseconds=500)


def test_parse_rejects_text_without_header():
    with pytest.raises(ValueError):
        WebVttSub.parse("00:00:01.000 --> 00:00:02.000\nHi\n\n")


def test_last_cue_needs_trailing_blank_line():
    complete = WebVttSub.parse(SAMPLE)
    truncated = WebVttSub.parse(SAMPLE.rstrip("\n"))
    assert len(truncated.cues) == len(complete.cues) - 1


def test_blank_lines_before_payload_are_skipped():
    text = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n\n\nText\n\n"
    sub = WebVttSub.parse(text)
    assert [cue.payload for cue in sub.cues] == ["Text"]


def test_seconds_suffix_timestamps():
    sub = WebVttSub.parse("WEBVTT\n\n1.5s --> 3s\nHi\n\n")
    assert sub.cues[0].start_time == timedelta(seconds=1.5)
    assert sub.cues[0].end_time == timedelta(seconds=3)


def test_base_timestamp_shifts_cues():
    original = WebVttSub.parse(SAMPLE)
    shifted = WebVttSub.parse(SAMPLE, 1000)
    for before, after in zip(original.cues, shifted.cues):
        assert after.start_time == before.start_time - timedelta(milliseconds=1000)
        assert after.end_time == before.end_time - timedelta(milliseconds=1000)


def test_base_timestamp_after_first_cue_leaves_cues_alone():
    original = WebVttSub.parse(SAMPLE)
    shifted = WebVttSub.parse(SAMPLE, 5000)
    assert shifted.cues == original.cues


def test_class_tag_is_removed():
    text = "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\n<c.yellow>sss</c>\n\n"
    assert WebVttSub.parse(text).cues[0].payload == "sss"


def test_vtt_round_trip():
    sub = WebVttSub.parse(SAMPLE)
    again = WebVttSub.parse(sub.to_vtt())
    assert again.cues == sub.cues


def test_to_vtt_prefixes_header():
    sub = WebVttSub.parse(SAMPLE)
    assert sub.to_vtt() == "WEBVTT\n\n" + str(sub)


def test_srt_numbers_cues_and_uses_commas():
    sub = WebVttSub.parse(SAMPLE)
    blocks = [block for block in sub.to_srt().split("\n\n") if block]
    vtt_lines = [line for line in str(sub).split("\n") if "-->" in line]
    assert [block.split("\n")[0] for block in blocks] == ["1", "2"]
    for block, vtt_line, cue in zip(blocks, vtt_lines, sub.cues):
        number, time_line, payload = block.split("\n")
        assert time_line == vtt_line.strip().rsplit(" ", 1)[0].replace(".", ",") or (
            time_line == vtt_line.strip().replace(".", ",")
        )
        assert payload == cue.payload


def test_srt_of_empty_document():
    assert WebVttSub().to_srt() == "1\n00:00:00,000 --> 00:00:01,000"


def test_cues_without_payload_are_not_rendered():
    sub = WebVttSub(cues=[SubCue(end_time=timedelta(seconds=1), payload="")])
    assert sub.to_vtt() == "WEBVTT\n\n"


def test_clock_format_with_hours():
    cue = SubCue(
        start_time=timedelta(hours=2, minutes=3, seconds=4, milliseconds=5),
        end_time=timedelta(hours=2, minutes=3, seconds=5),
        payload="x",
    )
    assert str(WebVttSub(cues=[cue])).startswith("02:03:04.005 --> ")


def test_subcue_equality_and_hash():
    first = SubCue(timedelta(seconds=1), timedelta(seconds=2), "hi", "line:0")
    second = SubCue(timedelta(seconds=1), timedelta(seconds=2), "hi", "line:0")
    other = SubCue(timedelta(seconds=1), timedelta(seconds=2), "bye", "line:0")
    assert first == second
    assert hash(first) == hash(second)
    assert first != other
    assert len({first, second, other}) == 2