"""
Session Controller - UI state and orchestration for one browser session

Holds the pasted text, loading flag, error banner, extracted contacts,
selected detail format and theme. Extraction moves the session through
idle -> loading -> success | error; clear returns it to idle.
"""

import logging
import time
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from contact_extractor.models.contact import Contact, DetailFormat, Theme
from contact_extractor.services.llm_service import ExtractionClient, ExtractionError
from contact_extractor.services.preference_service import PreferenceStore, resolve_theme
from contact_extractor.utils.clipboard_writer import ClipboardWriter, CopyAcknowledgement
from contact_extractor.utils.contact_formatter import (
    DetailView,
    TableRow,
    labeled_detail_format,
    recipient_format,
    simple_detail_format,
    table_rows,
)

logger = logging.getLogger(__name__)

ERROR_NO_CONTACTS = "No contacts could be extracted from the provided text."
ERROR_GENERIC = "An error occurred while parsing the text. Please check your API key and input."
CREDENTIALS_ADVICE = "Please check your API key and connection."


class CopyTarget(str, Enum):
    RECIPIENTS = "recipients"
    DETAILS = "details"


COPY_LABELS = {
    CopyTarget.RECIPIENTS: "Copy for Email",
    CopyTarget.DETAILS: "Copy Details",
}


@dataclass
class SessionState:
    """Everything the page shows for one session"""

    input_text: str = ""
    is_loading: bool = False
    contacts: List[Contact] = field(default_factory=list)
    error_message: Optional[str] = None
    selected_format: DetailFormat = DetailFormat.SIMPLE
    theme: Theme = Theme.LIGHT


@dataclass(frozen=True)
class RenderedViews:
    recipients: str
    simple_details: str
    details: DetailView
    rows: List[TableRow]


class SessionController:
    """
    Application controller for a single browser session

    Examples:
        controller = SessionController(client, MemoryPreferenceStore(), ClipboardWriter())
        controller.set_input("From: Jane Doe <jane@x.com>")
        await controller.extract()
        controller.views.recipients   # "Jane Doe <jane@x.com>; "
    """

    def __init__(
        self,
        client: ExtractionClient,
        preferences: PreferenceStore,
        clipboard: ClipboardWriter,
        system_theme: Optional[Theme] = None,
        copy_ack_seconds: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.preferences = preferences
        self.clipboard = clipboard
        self.state = SessionState(theme=resolve_theme(preferences.load(), system_theme))
        # Bumped by clear(); responses from an older generation are dropped
        self._generation = 0
        self._acks: Dict[CopyTarget, CopyAcknowledgement] = {
            target: CopyAcknowledgement(copy_ack_seconds, clock) for target in CopyTarget
        }

    # ── Input ────────────────────────────────────────────────────────────────

    def set_input(self, text: str) -> None:
        self.state.input_text = text

    @property
    def can_extract(self) -> bool:
        return not self.state.is_loading and self.state.input_text.strip() != ""

    # ── Extraction ───────────────────────────────────────────────────────────

    async def extract(self) -> bool:
        """
        Run one extraction for the current input

        Ignored while another extraction is in flight or when the input is
        blank. Any outcome other than success leaves the contact list empty.

        Returns:
            True if at least one contact was extracted
        """
        if not self.can_extract:
            logger.debug("Extract ignored: input is blank or a request is in flight")
            return False

        generation = self._generation
        self.state.is_loading = True
        self.state.error_message = None

        contacts: List[Contact] = []
        error: Optional[str] = None
        try:
            result = await self.client.extract(self.state.input_text)
            contacts = list(result.contacts)
            if not contacts:
                error = ERROR_NO_CONTACTS
        except ExtractionError as e:
            logger.warning(f"Extraction failed ({e.kind}): {e.message}")
            error = f"{e.message} {CREDENTIALS_ADVICE}" if e.message else ERROR_GENERIC
        except Exception as e:
            logger.error(f"Unexpected extraction failure: {e}", exc_info=True)
            error = ERROR_GENERIC
        finally:
            self.state.is_loading = False

        if generation != self._generation:
            logger.info("Discarding extraction result that finished after the session was cleared")
            return False

        self.state.contacts = contacts
        self.state.error_message = error
        return error is None

    def clear(self) -> None:
        """Reset input, contacts and error together"""
        self._generation += 1
        self.state.input_text = ""
        self.state.contacts = []
        self.state.error_message = None

    # ── Display ──────────────────────────────────────────────────────────────

    def select_format(self, detail_format: DetailFormat) -> None:
        self.state.selected_format = DetailFormat(detail_format)

    @property
    def views(self) -> RenderedViews:
        contacts = self.state.contacts
        return RenderedViews(
            recipients=recipient_format(contacts),
            simple_details=simple_detail_format(contacts),
            details=labeled_detail_format(contacts, self.state.selected_format),
            rows=table_rows(contacts),
        )

    # ── Theme ────────────────────────────────────────────────────────────────

    def toggle_theme(self) -> Theme:
        new_theme = Theme.DARK if self.state.theme is Theme.LIGHT else Theme.LIGHT
        self.state.theme = new_theme
        try:
            self.preferences.save(new_theme)
        except OSError as e:
            logger.error(f"Could not persist theme preference: {e}")
        return new_theme

    # ── Clipboard ────────────────────────────────────────────────────────────

    def copy(self, target: CopyTarget) -> bool:
        """
        Copy one of the views to the clipboard

        Args:
            target: recipients (plain text) or details (plain text + HTML)

        Returns:
            True if the clipboard was written
        """
        target = CopyTarget(target)
        if not self.state.contacts:
            return False

        views = self.views
        if target is CopyTarget.RECIPIENTS:
            copied = self.clipboard.copy(views.recipients)
        else:
            copied = self.clipboard.copy(views.details.plain, views.details.html)

        if copied:
            self._acks[target].acknowledge()
        return copied

    def copy_label(self, target: CopyTarget) -> str:
        target = CopyTarget(target)
        return self._acks[target].label(COPY_LABELS[target])

    def copy_remaining(self, target: CopyTarget) -> float:
        return self._acks[CopyTarget(target)].remaining()


class SessionRegistry:
    """
    Maps session ids (from the session cookie) to controllers

    Holds at most max_sessions controllers; the least recently used
    session is dropped when a new one would exceed the limit.
    """

    def __init__(
        self,
        factory: Callable[[Optional[Theme]], SessionController],
        max_sessions: int = 100,
    ):
        self._factory = factory
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, SessionController]" = OrderedDict()

    def get_or_create(
        self,
        session_id: Optional[str],
        system_theme: Optional[Theme] = None,
    ) -> Tuple[str, SessionController]:
        if session_id and session_id in self._sessions:
            self._sessions.move_to_end(session_id)
            return session_id, self._sessions[session_id]

        new_id = uuid.uuid4().hex
        self._sessions[new_id] = self._factory(system_theme)
        logger.info(f"Started session {new_id[:8]}")

        while len(self._sessions) > self.max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info(f"Evicted idle session {evicted_id[:8]}")
        return new_id, self._sessions[new_id]

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
