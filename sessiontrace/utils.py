"""
Shared utility functions for SessionTrace.

Provides the timestamp codec used by the caption parsers (WebVTT and SRT
grammars to elapsed seconds) and the epoch-millisecond helpers used by the
clickstream exporter.
"""

import math
import re
import time
from datetime import datetime, timedelta, timezone

# Leading numeric prefix, as a browser parseFloat() would read it
_FLOAT_PREFIX_PATTERN = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_SRT_TIME_PATTERN = re.compile(r'^(\d{2}):(\d{2}):(\d{2}),(\d{3})')

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _parse_float_prefix(text: str) -> float:
    """
    Parse the leading float of a string, ignoring trailing characters.

    Returns NaN when the string has no numeric prefix.
    """
    match = _FLOAT_PREFIX_PATTERN.match(text.strip())
    if not match:
        return math.nan
    return float(match.group(0))


def parse_vtt_time(text: str) -> float:
    """
    Convert a WebVTT timestamp to elapsed seconds.

    Accepts HH:MM:SS.mmm or MM:SS.mmm. Parsing is permissive: missing
    components count as 0 and a non-numeric field yields NaN instead of
    raising, so callers must tolerate NaN.

    Args:
        text: Timestamp text, optionally followed by cue settings

    Returns:
        Time in seconds as float (may be NaN)

    Example:
        >>> parse_vtt_time("00:01:30.500")
        90.5
        >>> parse_vtt_time("01:05.000")
        65.0
    """
    # Cue settings (line:0, align:start) follow the timestamp and carry colons
    tokens = text.split()
    parts = (tokens[0] if tokens else '').split(':')
    if len(parts) >= 3:
        hours, minutes, seconds = parts[0], parts[1], parts[2]
    elif len(parts) == 2:
        hours, minutes, seconds = '0', parts[0], parts[1]
    else:
        hours, minutes, seconds = '0', '0', parts[0]

    return (
        _parse_float_prefix(hours) * 3600
        + _parse_float_prefix(minutes) * 60
        + _parse_float_prefix(seconds)
    )


def parse_srt_time(text: str) -> float:
    """
    Convert a SubRip timestamp (HH:MM:SS,mmm) to elapsed seconds.

    The grammar is strict: anything that does not match yields 0.0, meaning
    "no reliable timestamp" rather than an error.

    Example:
        >>> parse_srt_time("00:00:02,500")
        2.5
        >>> parse_srt_time("0:0:2.5")
        0.0
    """
    match = _SRT_TIME_PATTERN.match(text.strip())
    if not match:
        return 0.0
    hours, minutes, seconds, millis = (int(group) for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds + millis / 1000.0


def format_playback_time(seconds: float) -> str:
    """
    Format seconds as M:SS for display (minutes are not zero padded).

    Example:
        >>> format_playback_time(75.9)
        '1:15'
    """
    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes}:{secs:02d}"


def epoch_ms_to_iso(timestamp_ms: int) -> str:
    """
    Render epoch milliseconds as an ISO-8601 UTC string.

    Args:
        timestamp_ms: Milliseconds since the Unix epoch

    Returns:
        String in YYYY-MM-DDTHH:MM:SS.mmmZ format

    Example:
        >>> epoch_ms_to_iso(0)
        '1970-01-01T00:00:00.000Z'
    """
    moment = _EPOCH + timedelta(milliseconds=int(timestamp_ms))
    return moment.strftime('%Y-%m-%dT%H:%M:%S.') + f"{moment.microsecond // 1000:03d}Z"


def now_ms() -> int:
    """Current time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)
