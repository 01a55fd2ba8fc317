from sessiontrace.captions import CaptionTrack
from sessiontrace.models import Caption


def test_query_returns_active_caption():
    track = CaptionTrack([Caption(1.0, 5.0, "a"), Caption(10.0, 15.0, "b")])
    assert track.query(3.0).text == "a"
    assert track.query(10.0).text == "b"
    assert track.query(15.0).text == "b"
    assert track.query(7.0) is None


def test_query_first_match_wins_for_overlaps():
    track = CaptionTrack([Caption(5.0, 10.0, "later start"), Caption(0.0, 20.0, "wide")])
    assert track.query(6.0).text == "later start"
    assert track.query(2.0).text == "wide"


def test_disabled_track_returns_none():
    track = CaptionTrack([Caption(0.0, 10.0, "x")])
    assert track.enabled
    assert track.toggle() is False
    assert track.query(5.0) is None
    assert track.toggle() is True
    assert track.query(5.0).text == "x"


def test_empty_track_cannot_be_enabled():
    track = CaptionTrack.empty()
    assert track.is_empty
    assert not track.enabled
    assert track.set_enabled(True) is False
    assert track.query(0.0) is None


def test_from_source_uses_suffix():
    track = CaptionTrack.from_source("WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHi\n", "clip.vtt")
    assert len(track) == 1
    assert track.enabled
    assert list(track) == [Caption(1.0, 2.0, "Hi")]


def test_from_source_falls_back_on_bad_json():
    track = CaptionTrack.from_source("{broken", "clip.json")
    assert track.is_empty
    assert not track.enabled


def test_from_source_without_file():
    assert CaptionTrack.from_source(None).is_empty
