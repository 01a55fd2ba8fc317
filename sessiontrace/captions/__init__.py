"""
Caption ingestion package.

Provides the WebVTT, SRT and structured JSON parsers and the session caption
track used for playback-time lookup.
"""

from .parsers import (
    parse_vtt,
    parse_srt,
    parse_caption_json,
    parse_captions,
    parse_caption_file,
)

from .track import CaptionTrack

__all__ = [
    # Parsers
    "parse_vtt",
    "parse_srt",
    "parse_caption_json",
    "parse_captions",
    "parse_caption_file",

    # Track
    "CaptionTrack",
]
