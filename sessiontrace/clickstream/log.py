"""
Append-only event log for one viewing session.
"""

import logging
from typing import Any, List, Mapping, Union

from ..models import ClickstreamEvent

logger = logging.getLogger(__name__)


class EventLog:
    """
    In-memory, append-only record of a session's clickstream events.

    Events are kept in append order. Individual events are never removed;
    clear() discards the whole log at logout.
    """

    def __init__(self):
        """Initialize an empty event log."""
        self._events: List[ClickstreamEvent] = []

    def append(self, event: Union[ClickstreamEvent, Mapping[str, Any]]) -> None:
        """
        Record one event.

        Args:
            event: ClickstreamEvent, or a mapping with its fields (camelCase
                or snake_case keys)
        """
        if not isinstance(event, ClickstreamEvent):
            event = ClickstreamEvent.model_validate(event)
        self._events.append(event)
        logger.debug(f"Log: {event.event_type} @ {event.timestamp} ({event.page.value})")

    def snapshot(self) -> List[ClickstreamEvent]:
        """Copy of the recorded events in append order."""
        return list(self._events)

    def clear(self) -> None:
        """Discard all recorded events."""
        self._events = []

    def __len__(self) -> int:
        return len(self._events)
