"""
SessionTrace - Caption Ingestion and Clickstream Event Logging

Instruments a video-viewing session: loads captions from WebVTT, SRT or
structured JSON files, resolves the caption active at a playback position,
and records user interactions as a process-mining-ready CSV event log.

Features:
- Parse WebVTT, SubRip and JSON caption arrays into one caption model
- First-match-wins caption lookup by playback time
- Append-only clickstream event log per viewing session
- CSV export with Case ID / Activity / Timestamp columns

Example usage:
    >>> from sessiontrace import ViewingSession, EventType
    >>>
    >>> session = ViewingSession()
    >>> session.register("alice", caption_text=vtt_text, caption_filename="talk.vtt")
    >>> session.current_caption(2.0)
    >>> session.log_event(EventType.PLAY, {"time": 0.0})
    >>> session.finish()
    >>> csv_text = session.export_csv()
"""

import logging

__version__ = "0.1.0"
__author__ = "SessionTrace Contributors"
__license__ = "MIT"

# Add NullHandler to prevent "No handler found" warnings
# Users should configure logging in their application if they want to see logs
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Timestamp codec
from .utils import (
    parse_vtt_time,
    parse_srt_time,
    format_playback_time,
    epoch_ms_to_iso,
    now_ms,
)

# Caption parsing and lookup
from .captions import (
    parse_vtt,
    parse_srt,
    parse_caption_json,
    parse_captions,
    parse_caption_file,
    CaptionTrack,
)

# Clickstream logging and export
from .clickstream import (
    EventLog,
    EventLogExporter,
    escape_csv_field,
    events_to_csv,
)

# Session
from .session import ViewingSession

# Data models
from .models import (
    Caption,
    CaptionFormat,
    ClickstreamEvent,
    EventType,
    Page,
    User,
    Bookmark,
    ExportConfig,
)

from .errors import SessionTraceError, CaptionDecodeError

__all__ = [
    # Version info
    "__version__",
    "__author__",
    "__license__",

    # Timestamp codec
    "parse_vtt_time",
    "parse_srt_time",
    "format_playback_time",
    "epoch_ms_to_iso",
    "now_ms",

    # Caption parsing
    "parse_vtt",
    "parse_srt",
    "parse_caption_json",
    "parse_captions",
    "parse_caption_file",
    "CaptionTrack",

    # Clickstream
    "EventLog",
    "EventLogExporter",
    "escape_csv_field",
    "events_to_csv",
    "ViewingSession",

    # Models
    "Caption",
    "CaptionFormat",
    "ClickstreamEvent",
    "EventType",
    "Page",
    "User",
    "Bookmark",
    "ExportConfig",

    # Errors
    "SessionTraceError",
    "CaptionDecodeError",
]
