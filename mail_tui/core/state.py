"""Application state machine: the single owner and mutator of UI state."""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from mail_tui.core.email import EmailClient
from mail_tui.core.models.email import Email
from mail_tui.core.modes import (
    HANDLERS,
    ApplyFilter,
    Command,
    Direction,
    EditSearch,
    KeyContext,
    KeyPress,
    Mode,
    Navigate,
    Quit,
    SearchEdit,
    SetFocus,
    SetStatus,
    Transition,
)
from mail_tui.core.search import SearchFilter, SearchResult
from mail_tui.core.selection import Focus, SelectionTracker
from mail_tui.core.status import StatusChannel
from mail_tui.core.store import MessageStore
from mail_tui.utils.errors import ErrorHandler, FetchTimeoutError, format_error_message
from mail_tui.utils.logging import get_logger

logger = get_logger(__name__)

LOADING_MESSAGE = "Loading emails..."
REFRESH_SUCCESS_MESSAGE = "Emails refreshed successfully"


@dataclass(frozen=True)
class AppSnapshot:
    """Read-only view of the state handed to the renderer for one draw."""

    mode: Mode
    focus: Focus
    emails: tuple[Email, ...]
    filtered: tuple[int, ...]
    cursor: int
    status_message: Optional[str]
    loading: bool
    search_input: str

    @property
    def filtered_emails(self) -> list[Email]:
        return [self.emails[i] for i in self.filtered]

    @property
    def selected_email(self) -> Optional[Email]:
        if not 0 <= self.cursor < len(self.filtered):
            return None
        return self.emails[self.filtered[self.cursor]]


class AppState:
    """Interprets key presses according to the current mode.

    Owns the message store, selection tracker, search filter and status
    channel; nothing else mutates them.
    """

    def __init__(
        self,
        email_client: Optional[EmailClient] = None,
        status_timeout: float = 5.0,
        fetch_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.email_client = email_client
        self.status_timeout = status_timeout
        self.fetch_timeout = fetch_timeout
        self.clock = clock

        self.store = MessageStore()
        self.selection = SelectionTracker(self.store)
        self.search_filter = SearchFilter(self.store)
        self.status = StatusChannel(clock)

        self.mode = Mode.NORMAL
        self.search_input = ""
        self.should_quit = False

    ## Queries

    @property
    def focus(self) -> Focus:
        return self.selection.focus

    @property
    def cursor(self) -> int:
        return self.selection.cursor

    @property
    def loading(self) -> bool:
        return self.status.loading

    @property
    def status_message(self) -> Optional[str]:
        return self.status.message

    def selected_email(self) -> Optional[Email]:
        return self.selection.selected_email

    def snapshot(self) -> AppSnapshot:
        return AppSnapshot(
            mode=self.mode,
            focus=self.selection.focus,
            emails=tuple(self.store.emails),
            filtered=tuple(self.store.filtered),
            cursor=self.selection.cursor,
            status_message=self.status.message,
            loading=self.status.loading,
            search_input=self.search_input,
        )

    ## Mutations

    def set_status_message(self, text: str) -> None:
        self.status.set(text)

    def replace_emails(self, emails: Iterable[Email]) -> None:
        """Install a fetch result, show all of it and keep the cursor in range."""
        self.store.replace_all(emails)
        self.selection.clamp()

    def search(self, query: str) -> SearchResult:
        """Filter the list by ``query``; an empty query restores everything."""
        result = self.search_filter.apply(query)
        if not result.is_empty:
            self.selection.reset()
        if result.status is not None:
            self.set_status_message(result.status)
        logger.debug(f"Search for {query!r} matched {len(result.indices)} emails")
        return result

    def tick(self, now: Optional[float] = None) -> bool:
        """Per-tick housekeeping; returns True when the status was cleared."""
        return self.status.expire_if_stale(now, self.status_timeout)

    ## Input

    def handle_key(self, key: KeyPress) -> Transition:
        """Route one key press through the handler for the current mode."""
        ctx = KeyContext(
            has_results=self.store.filtered_count > 0,
            search_input=self.search_input,
        )
        transition = HANDLERS[self.mode](key, ctx)
        if transition.mode is not self.mode:
            logger.debug(f"Mode {self.mode.value} -> {transition.mode.value} on {key.key!r}")
        self.mode = transition.mode
        for command in transition.commands:
            self._execute(command)
        return transition

    def _execute(self, command: Command) -> None:
        match command:
            case Quit():
                self.should_quit = True
            case Navigate(direction=Direction.NEXT):
                self.selection.move_next()
            case Navigate(direction=Direction.PREVIOUS):
                self.selection.move_previous()
            case Navigate(direction=Direction.FIRST):
                self.selection.jump_first()
            case Navigate(direction=Direction.LAST):
                self.selection.jump_last()
            case SetFocus(panel=panel):
                self.selection.set_focus(panel)
            case SetStatus(text=text):
                self.set_status_message(text)
            case ApplyFilter(query=query):
                self.search(query)
            case EditSearch(action=SearchEdit.CLEAR):
                self.search_input = ""
            case EditSearch(action=SearchEdit.APPEND, text=text):
                self.search_input += text
            case EditSearch(action=SearchEdit.DELETE):
                self.search_input = self.search_input[:-1]

    ## Fetch

    async def refresh_emails(self) -> bool:
        """Fetch the current quarter's emails once, converting any failure
        into a status message. Returns True on success.
        """
        self.status.start_loading(LOADING_MESSAGE)

        if self.email_client is None:
            self.set_status_message("Failed to fetch emails: no mail client configured")
            return False

        try:
            fetch = self.email_client.fetch_current_quarter_emails()
            if self.fetch_timeout is not None:
                try:
                    emails = await asyncio.wait_for(fetch, timeout=self.fetch_timeout)
                except asyncio.TimeoutError as e:
                    raise FetchTimeoutError(
                        f"Timed out after {self.fetch_timeout:g}s while fetching emails"
                    ) from e
            else:
                emails = await fetch
            self.replace_emails(emails)
        except Exception as e:
            ErrorHandler.handle(e, "Failed to fetch emails")
            self.set_status_message(f"Failed to fetch emails: {format_error_message(e)}")
            return False

        self.set_status_message(REFRESH_SUCCESS_MESSAGE)
        logger.info(f"Loaded {len(self.store)} emails")
        return True
