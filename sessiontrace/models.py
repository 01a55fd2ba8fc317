"""
Data models for SessionTrace.

Defines the caption and clickstream records shared across the package.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class Caption:
    """A single timed caption (cue) with its display text."""
    start: float  # seconds
    end: float    # seconds
    text: str


class CaptionFormat(str, Enum):
    """Caption source formats, selected by file name suffix."""
    VTT = "vtt"
    SRT = "srt"
    JSON = "json"

    @classmethod
    def from_filename(cls, filename: str) -> "CaptionFormat":
        """Pick the format from a file name; unknown suffixes are treated as JSON."""
        suffix = os.path.splitext(filename)[1].lower()
        if suffix == ".vtt":
            return cls.VTT
        if suffix == ".srt":
            return cls.SRT
        return cls.JSON


class Page(str, Enum):
    """UI context an event was emitted from."""
    REGISTRATION = "registration"
    PLAYER = "player"
    EXPORT = "export"


class EventType:
    """Known activity tags. The vocabulary is open: any string is accepted."""
    SESSION_START = "SESSION_START"
    PLAY = "PLAY"
    PAUSE = "PAUSE"
    SEEK = "SEEK"
    SPEED_CHANGE = "SPEED_CHANGE"
    MUTE_TOGGLE = "MUTE_TOGGLE"
    BOOKMARK_ADD = "BOOKMARK_ADD"
    BOOKMARK_DELETE = "BOOKMARK_DELETE"
    BOOKMARK_JUMP = "BOOKMARK_JUMP"
    CAPTION_TOGGLE = "CAPTION_TOGGLE"
    FULLSCREEN_ENTER = "FULLSCREEN_ENTER"
    FULLSCREEN_EXIT = "FULLSCREEN_EXIT"
    QUIZ_ANSWER_SELECTED = "QUIZ_ANSWER_SELECTED"
    QUIZ_ANSWER_REMOVED = "QUIZ_ANSWER_REMOVED"
    QUIZ_COMPLETED = "QUIZ_COMPLETED"
    SESSION_END_REQUEST = "SESSION_END_REQUEST"


class ClickstreamEvent(BaseModel):
    """One recorded user interaction. Immutable once created."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="unique event id")
    user_id: str = Field(..., alias="userId", description="username of the session owner")
    session_id: str = Field(..., alias="sessionId", description="case id, fixed per session")
    timestamp: int = Field(..., description="epoch milliseconds")
    event_type: str = Field(..., alias="eventType", description="activity tag e.g. PLAY/SEEK")
    details: Dict[str, Any] = Field(default_factory=dict)
    page: Page


@dataclass
class User:
    """Registered viewer of the active session."""
    username: str
    session_id: str


@dataclass
class Bookmark:
    """A user bookmark at a playback position."""
    id: str
    time: float  # seconds
    note: str


@dataclass
class ExportConfig:
    """Configuration for event log export."""
    filename_prefix: str = "event_log"
    output_dir: str = "."
    encoding: str = "utf-8"
