import math

import pytest

from sessiontrace.captions import (
    parse_caption_file,
    parse_caption_json,
    parse_captions,
    parse_srt,
    parse_vtt,
)
from sessiontrace.errors import CaptionDecodeError
from sessiontrace.models import Caption, CaptionFormat


def test_parse_vtt_single_cue():
    content = "WEBVTT\n\n1\n00:00:01.000 --> 00:00:05.000\nHello\n\n"
    assert parse_vtt(content) == [Caption(start=1.0, end=5.0, text="Hello")]


def test_parse_vtt_multiple_cues_in_file_order():
    content = (
        "WEBVTT\n\n"
        "00:00:10.000 --> 00:00:12.000\nsecond in time\n\n"
        "00:00:01.000 --> 00:00:03.000\nfirst\nline two\n\n"
        "00:01.000 --> 00:02.500\nshort form\n"
    )
    captions = parse_vtt(content)
    assert [c.text for c in captions] == ["second in time", "first line two", "short form"]
    assert captions[2].start == 1.0
    assert captions[2].end == 2.5


def test_parse_vtt_short_form_timing_with_settings():
    captions = parse_vtt("WEBVTT\n\n00:01.000 --> 00:04.000 line:0\nHi\n")
    assert captions == [Caption(start=1.0, end=4.0, text="Hi")]


def test_parse_vtt_flushes_dangling_cue():
    captions = parse_vtt("WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nlast words")
    assert len(captions) == 1
    assert captions[0].text == "last words"


def test_parse_vtt_drops_empty_cues_and_skips_index_lines():
    content = (
        "WEBVTT\n\n"
        "1\n00:00:01.000 --> 00:00:02.000\n\n"
        "2\n00:00:03.000 --> 00:00:04.000\n42\nkept\n\n"
    )
    captions = parse_vtt(content)
    assert captions == [Caption(start=3.0, end=4.0, text="kept")]


def test_parse_vtt_handles_crlf():
    content = "WEBVTT\r\n\r\n00:00:01.000 --> 00:00:02.000\r\nHi\r\n\r\n"
    assert parse_vtt(content) == [Caption(start=1.0, end=2.0, text="Hi")]


def test_parse_vtt_malformed_timestamp_degrades_to_nan():
    captions = parse_vtt("WEBVTT\n\nxx:yy.zzz --> 00:00:02.000\nodd\n")
    assert len(captions) == 1
    assert math.isnan(captions[0].start)
    assert captions[0].end == 2.0


def test_parse_srt_joins_lines():
    content = "1\n00:00:00,500 --> 00:00:02,000\nLine one\nLine two\n"
    assert parse_srt(content) == [Caption(start=0.5, end=2.0, text="Line one Line two")]


def test_parse_srt_crlf_matches_lf():
    content = (
        "1\n00:00:01,000 --> 00:00:02,000\nHello\n\n"
        "2\n00:00:03,000 --> 00:00:04,000\nWorld\nagain\n"
    )
    assert parse_srt(content.replace("\n", "\r\n")) == parse_srt(content)
    assert len(parse_srt(content)) == 2


def test_parse_srt_skips_malformed_blocks():
    content = (
        "1\n00:00:01,000 --> 00:00:02,000\n\n"
        "2\nno timing here\ntext\n\n"
        "3\n00:00:05,000 --> 00:00:06,000\nvalid\n"
    )
    assert parse_srt(content) == [Caption(start=5.0, end=6.0, text="valid")]


def test_parse_caption_json():
    content = '[{"start": 1, "end": 5, "text": "Birds"}, {"start": 10, "end": 15, "text": "Rabbit"}]'
    assert parse_caption_json(content) == [
        Caption(start=1.0, end=5.0, text="Birds"),
        Caption(start=10.0, end=15.0, text="Rabbit"),
    ]


@pytest.mark.parametrize("content", [
    "not json",
    '{"start": 1, "end": 2, "text": "object"}',
    '[{"start": 1, "text": "no end"}]',
    '[1, 2, 3]',
])
def test_parse_caption_json_rejects_bad_input(content):
    with pytest.raises(CaptionDecodeError):
        parse_caption_json(content, source="captions.json")


def test_parse_captions_dispatches_on_format():
    srt = "1\n00:00:01,000 --> 00:00:02,000\nHi\n"
    assert parse_captions(srt, CaptionFormat.SRT) == [Caption(start=1.0, end=2.0, text="Hi")]
    assert parse_captions("[]", CaptionFormat.JSON) == []


def test_caption_format_from_filename():
    assert CaptionFormat.from_filename("talk.VTT") is CaptionFormat.VTT
    assert CaptionFormat.from_filename("talk.srt") is CaptionFormat.SRT
    assert CaptionFormat.from_filename("talk.json") is CaptionFormat.JSON
    assert CaptionFormat.from_filename("talk.txt") is CaptionFormat.JSON


def test_parse_caption_file(tmp_path):
    path = tmp_path / "captions.srt"
    path.write_text("1\n00:00:01,000 --> 00:00:02,000\nfrom disk\n", encoding="utf-8")
    assert parse_caption_file(str(path)) == [Caption(start=1.0, end=2.0, text="from disk")]
