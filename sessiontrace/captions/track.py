"""
Caption track for a viewing session.

Holds the normalised captions of one session and answers which caption is
active at a playback position.
"""

import logging
from typing import Iterable, Iterator, Optional, Tuple

from ..errors import CaptionDecodeError
from ..models import Caption, CaptionFormat
from .parsers import parse_captions

logger = logging.getLogger(__name__)


class CaptionTrack:
    """
    Ordered, immutable caption collection with an on/off switch.

    Lookup is first-match-wins in storage (parser emission) order: when cues
    overlap, the one stored first is returned.
    """

    def __init__(self, captions: Iterable[Caption] = (), enabled: Optional[bool] = None):
        """
        Initialize caption track.

        Args:
            captions: Captions in parser emission order
            enabled: Initial display state (default: on when captions exist)
        """
        self._captions: Tuple[Caption, ...] = tuple(captions)
        self._enabled = False
        self.set_enabled(bool(self._captions) if enabled is None else enabled)

    @classmethod
    def empty(cls) -> "CaptionTrack":
        """Track with no captions (always disabled)."""
        return cls(())

    @classmethod
    def from_source(cls, raw_text: Optional[str], filename: Optional[str] = None) -> "CaptionTrack":
        """
        Build a track from raw caption file content.

        The parser is chosen from the file name suffix. Undecodable structured
        captions fall back to an empty track.

        Args:
            raw_text: Caption file content, or None when no file was supplied
            filename: Caption file name (drives format selection)

        Returns:
            CaptionTrack instance
        """
        if raw_text is None:
            return cls.empty()

        caption_format = CaptionFormat.from_filename(filename or "")
        try:
            captions = parse_captions(raw_text, caption_format, source=filename)
        except CaptionDecodeError as e:
            logger.warning(f"Failed to load captions, continuing without: {e.detail}")
            return cls.empty()

        logger.info(f"Loaded {len(captions)} captions from {filename or 'text'} ({caption_format.value})")
        return cls(captions)

    @property
    def captions(self) -> Tuple[Caption, ...]:
        return self._captions

    @property
    def is_empty(self) -> bool:
        return not self._captions

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> bool:
        """
        Switch caption display on or off.

        Enabling an empty track is refused.

        Returns:
            The resulting enabled state
        """
        self._enabled = bool(enabled) and not self.is_empty
        return self._enabled

    def toggle(self) -> bool:
        """Flip caption display and return the new state."""
        return self.set_enabled(not self._enabled)

    def query(self, current_time: float) -> Optional[Caption]:
        """
        Find the caption active at a playback position.

        Args:
            current_time: Playback position in seconds

        Returns:
            First stored caption with start <= current_time <= end, or None
            when none qualifies or the track is disabled
        """
        if not self._enabled:
            return None
        for caption in self._captions:
            if caption.start <= current_time <= caption.end:
                return caption
        return None

    def __len__(self) -> int:
        return len(self._captions)

    def __iter__(self) -> Iterator[Caption]:
        return iter(self._captions)
