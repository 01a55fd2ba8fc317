from typing import Optional


class SessionTraceError(Exception):
    """Base class for all SessionTrace errors."""


class CaptionDecodeError(SessionTraceError, ValueError):
    def __init__(self, detail: str, source: Optional[str] = None) -> None:
        name = f" '{source}'" if source else ""
        super().__init__(
            f"Cannot decode structured captions{name}.\n"
            f"  Cause: {detail}\n"
            f"  Check: Is the file a JSON array of {{start, end, text}} objects?"
        )
        self.detail = detail
        self.source = source
