"""
Clickstream package.

Provides the session event log and its process-mining CSV exporter.
"""

from .log import EventLog

from .exporter import (
    CSV_HEADERS,
    escape_csv_field,
    format_event_row,
    events_to_csv,
    EventLogExporter,
)

__all__ = [
    "EventLog",
    "CSV_HEADERS",
    "escape_csv_field",
    "format_event_row",
    "events_to_csv",
    "EventLogExporter",
]
