"""
Viewing session state for SessionTrace.

A ViewingSession owns everything scoped to one registered viewer: the user,
the current page, the caption track, bookmarks and the clickstream event log.
Callers (the player UI) create one per session instead of sharing globals.
"""

import copy
import logging
import uuid
from typing import Any, Callable, Dict, List, Optional

from .captions import CaptionTrack
from .clickstream import EventLog, EventLogExporter
from .models import Bookmark, Caption, ClickstreamEvent, EventType, Page, User
from .utils import format_playback_time, now_ms

logger = logging.getLogger(__name__)


class ViewingSession:
    """
    Session-scoped owner of the caption track and clickstream log.

    Events are only recorded while a user is registered; after logout the
    log, bookmarks, quiz answers and captions are discarded.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        exporter: Optional[EventLogExporter] = None,
        quiz_size: int = 0
    ):
        """
        Initialize an idle (logged out) session.

        Args:
            clock: Callable returning epoch milliseconds (default: now_ms)
            exporter: Exporter used by export_csv (default: EventLogExporter())
            quiz_size: Number of quiz questions that must be answered before
                the session can finish (default: 0, no quiz)
        """
        self.clock = clock or now_ms
        self.exporter = exporter or EventLogExporter()
        self.quiz_size = quiz_size
        self.user: Optional[User] = None
        self.page = Page.REGISTRATION
        self.captions = CaptionTrack.empty()
        self.bookmarks: List[Bookmark] = []
        self.log = EventLog()
        self.answers: Dict[int, int] = {}

    def register(
        self,
        username: str,
        custom_video: bool = False,
        caption_text: Optional[str] = None,
        caption_filename: Optional[str] = None
    ) -> User:
        """
        Start a session for a viewer.

        Loads the caption track (falling back to no captions if the file
        cannot be decoded), starts a fresh event log with SESSION_START and
        moves to the player page.

        Args:
            username: Viewer name, must not be blank
            custom_video: Whether the viewer supplied their own video
            caption_text: Raw caption file content, if any
            caption_filename: Caption file name, selects the parser

        Returns:
            The registered User
        """
        username = username.strip()
        if not username:
            raise ValueError("Username cannot be empty")

        self.user = User(username=username, session_id=str(uuid.uuid4()))
        self.captions = CaptionTrack.from_source(caption_text, caption_filename)
        self.bookmarks = []
        self.answers = {}
        self.log.clear()
        self._record(EventType.SESSION_START, {"customVideo": bool(custom_video)}, Page.REGISTRATION)
        self.page = Page.PLAYER

        logger.info(f"Session {self.user.session_id} started for {username}")
        return self.user

    def log_event(self, event_type: str, details: Optional[Dict[str, Any]] = None) -> Optional[ClickstreamEvent]:
        """
        Record a user action on the current page.

        Args:
            event_type: Activity tag (see EventType)
            details: Event-specific payload

        Returns:
            The recorded event, or None when no user is registered
        """
        if self.user is None:
            logger.debug(f"Ignoring {event_type}: no active session")
            return None
        return self._record(event_type, details or {}, self.page)

    def _record(self, event_type: str, details: Dict[str, Any], page: Page) -> ClickstreamEvent:
        event = ClickstreamEvent(
            id=str(uuid.uuid4()),
            user_id=self.user.username,
            session_id=self.user.session_id,
            timestamp=self.clock(),
            event_type=event_type,
            details=copy.deepcopy(details),
            page=page,
        )
        self.log.append(event)
        return event

    def current_caption(self, current_time: float) -> Optional[Caption]:
        """Caption to display at the playback position, if any."""
        return self.captions.query(current_time)

    def toggle_captions(self) -> bool:
        """
        Flip caption display.

        Nothing is logged when the state does not change (empty track).

        Returns:
            The new enabled state
        """
        previous = self.captions.enabled
        active = self.captions.toggle()
        if active != previous:
            self.log_event(EventType.CAPTION_TOGGLE, {"active": active})
        return active

    def add_bookmark(self, time: float, note: Optional[str] = None) -> Bookmark:
        bookmark = Bookmark(
            id=str(uuid.uuid4()),
            time=time,
            note=note if note is not None else f"Bookmark at {format_playback_time(time)}",
        )
        self.bookmarks.append(bookmark)
        self.log_event(EventType.BOOKMARK_ADD, {"time": time})
        return bookmark

    def delete_bookmark(self, bookmark_id: str) -> None:
        bookmark = self._find_bookmark(bookmark_id)
        self.bookmarks.remove(bookmark)
        self.log_event(EventType.BOOKMARK_DELETE, {"bookmarkId": bookmark_id})

    def jump_to_bookmark(self, bookmark_id: str) -> float:
        """Log a jump to a bookmark and return its playback position."""
        bookmark = self._find_bookmark(bookmark_id)
        self.log_event(EventType.BOOKMARK_JUMP, {"time": bookmark.time})
        return bookmark.time

    def _find_bookmark(self, bookmark_id: str) -> Bookmark:
        for bookmark in self.bookmarks:
            if bookmark.id == bookmark_id:
                return bookmark
        raise KeyError(bookmark_id)

    def select_answer(self, question_id: int, option_index: int) -> Optional[int]:
        """
        Select a quiz answer, or remove it when the same option is picked again.

        Args:
            question_id: Quiz question identifier
            option_index: Index of the chosen option

        Returns:
            The answer now stored for the question, or None if it was removed
        """
        if self.answers.get(question_id) == option_index:
            del self.answers[question_id]
            self.log_event(EventType.QUIZ_ANSWER_REMOVED, {"questionId": question_id})
            return None
        self.answers[question_id] = option_index
        self.log_event(EventType.QUIZ_ANSWER_SELECTED, {"questionId": question_id, "optionIndex": option_index})
        return option_index

    def is_quiz_complete(self) -> bool:
        return len(self.answers) >= self.quiz_size

    def finish(self) -> bool:
        """
        Request the end of viewing and move to the export page.

        Refused while no user is registered or quiz questions are unanswered.

        Returns:
            True if the session moved to the export page
        """
        if self.user is None:
            logger.debug("Ignoring finish: no active session")
            return False
        if not self.is_quiz_complete():
            logger.debug(f"Cannot finish: {len(self.answers)}/{self.quiz_size} quiz answers given")
            return False
        self.log_event(EventType.SESSION_END_REQUEST, {})
        self.page = Page.EXPORT
        logger.info(f"Session finished with {len(self.log)} events recorded")
        return True

    def export_csv(self) -> str:
        """Current event log as process-mining CSV text."""
        return self.exporter.to_csv(self.log.snapshot())

    def logout(self) -> None:
        """Discard the user, bookmarks, quiz answers, captions and event log."""
        if self.user is not None:
            logger.info(f"Session {self.user.session_id} closed")
        self.user = None
        self.bookmarks = []
        self.answers = {}
        self.captions = CaptionTrack.empty()
        self.log.clear()
        self.page = Page.REGISTRATION
