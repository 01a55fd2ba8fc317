import math

from sessiontrace.utils import (
    epoch_ms_to_iso,
    format_playback_time,
    parse_srt_time,
    parse_vtt_time,
)


def test_parse_vtt_time_with_hours():
    assert parse_vtt_time("01:02:03.500") == 3723.5


def test_parse_vtt_time_without_hours():
    assert parse_vtt_time("01:05.250") == 65.25


def test_parse_vtt_time_ignores_cue_settings():
    assert parse_vtt_time(" 00:00:05.000 align:start position:10%") == 5.0


def test_parse_vtt_time_short_form_with_cue_settings():
    assert parse_vtt_time("00:05.000 line:0") == 5.0
    assert parse_vtt_time(" 00:05.000 align:start position:10%") == 5.0


def test_parse_vtt_time_non_numeric_is_nan():
    assert math.isnan(parse_vtt_time("aa:bb:cc"))


def test_parse_vtt_time_beyond_a_day_does_not_wrap():
    assert parse_vtt_time("25:00:00.000") == 90000.0


def test_parse_srt_time():
    assert parse_srt_time("00:00:02,500") == 2.5
    assert parse_srt_time(" 01:00:00,500 ") == 3600.5


def test_parse_srt_time_rejects_other_grammars():
    assert parse_srt_time("00:00:02.500") == 0.0
    assert parse_srt_time("0:0:2,5") == 0.0
    assert parse_srt_time("garbage") == 0.0


def test_format_playback_time():
    assert format_playback_time(0) == "0:00"
    assert format_playback_time(75.9) == "1:15"
    assert format_playback_time(605) == "10:05"


def test_epoch_ms_to_iso():
    assert epoch_ms_to_iso(0) == "1970-01-01T00:00:00.000Z"
    assert epoch_ms_to_iso(1700000000123) == "2023-11-14T22:13:20.123Z"
