"""
CSV export of clickstream event logs.

Serialises a session's events into a process-mining event log: one row per
event, grouped by session (Case ID) and ordered chronologically, with the
details payload encoded as compact JSON.
"""

import json
import logging
import math
import os
from typing import Any, Iterable, List, Optional

from ..models import ClickstreamEvent, ExportConfig
from ..utils import epoch_ms_to_iso, now_ms

logger = logging.getLogger(__name__)

CSV_HEADERS = ["Case ID", "Activity", "Timestamp", "Page", "Details"]


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats with None, as JSON has no NaN or Infinity."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    return value


def escape_csv_field(value: Any) -> str:
    """
    Render a value as a CSV field.

    Mappings and lists are encoded as compact JSON, with NaN and infinities
    written as null. The field is quoted, with inner quotes doubled, when it
    contains a comma, a double quote or a newline.

    Example:
        >>> escape_csv_field({"note": "a,b"})
        '"{""note"":""a,b""}"'
        >>> escape_csv_field("PLAY")
        'PLAY'
    """
    if isinstance(value, (dict, list)):
        text = json.dumps(_json_safe(value), separators=(',', ':'), ensure_ascii=False, default=str)
    else:
        text = str(value)

    if ',' in text or '"' in text or '\n' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def format_event_row(event: ClickstreamEvent) -> str:
    """Format one event as a CSV row (no line terminator)."""
    return ','.join([
        escape_csv_field(event.session_id),
        escape_csv_field(event.event_type),
        escape_csv_field(epoch_ms_to_iso(event.timestamp)),
        escape_csv_field(event.page.value),
        escape_csv_field(event.details),
    ])


def events_to_csv(events: Iterable[ClickstreamEvent]) -> str:
    """
    Serialise events as a process-mining CSV document.

    Events are stably sorted by timestamp, so events sharing a millisecond
    keep their append order.

    Args:
        events: Events in append order

    Returns:
        CSV text: header line followed by one row per event, newline-joined

    Example:
        >>> events_to_csv([])
        'Case ID,Activity,Timestamp,Page,Details'
    """
    ordered = sorted(events, key=lambda event: event.timestamp)
    lines: List[str] = [','.join(CSV_HEADERS)]
    lines.extend(format_event_row(event) for event in ordered)
    return '\n'.join(lines)


class EventLogExporter:
    """
    Exporter producing downloadable CSV event logs.

    Wraps events_to_csv with file naming and saving.
    """

    def __init__(self, config: Optional[ExportConfig] = None):
        """
        Initialize exporter.

        Args:
            config: Export configuration (default: ExportConfig())
        """
        self.config = config or ExportConfig()

    def to_csv(self, events: Iterable[ClickstreamEvent]) -> str:
        """Serialise events to CSV text."""
        return events_to_csv(events)

    def default_filename(self, timestamp_ms: Optional[int] = None) -> str:
        """
        Build the download name for an export made at the given moment.

        Example:
            >>> EventLogExporter().default_filename(1700000000000)
            'event_log_1700000000000.csv'
        """
        if timestamp_ms is None:
            timestamp_ms = now_ms()
        return f"{self.config.filename_prefix}_{timestamp_ms}.csv"

    def save(
        self,
        events: Iterable[ClickstreamEvent],
        output_dir: Optional[str] = None,
        filename: Optional[str] = None
    ) -> str:
        """
        Write the CSV export to disk.

        Args:
            events: Events to export
            output_dir: Target directory (default: config.output_dir)
            filename: File name (default: default_filename())

        Returns:
            Path of the written file
        """
        output_dir = output_dir or self.config.output_dir
        os.makedirs(output_dir, exist_ok=True)
        path = os.path.join(output_dir, filename or self.default_filename())

        events = list(events)
        content = self.to_csv(events)
        with open(path, 'w', encoding=self.config.encoding, newline='') as f:
            f.write(content)

        logger.info(f"Saved event log with {len(events)} events to {path}")
        return path
