"""Selection cursor and panel focus."""

from enum import Enum
from typing import Optional

from mail_tui.core.models.email import Email
from mail_tui.core.store import MessageStore


class Focus(Enum):
    """Which panel is highlighted."""

    EMAIL_LIST = "email_list"
    EMAIL_CONTENT = "email_content"


class SelectionTracker:
    """Cursor into the store's filtered list, plus panel focus.

    All movement is a no-op while the filtered list is empty.
    """

    def __init__(self, store: MessageStore):
        self.store = store
        self.cursor = 0
        self.focus = Focus.EMAIL_LIST

    @property
    def _length(self) -> int:
        return self.store.filtered_count

    def move_next(self) -> None:
        if self._length:
            self.cursor = (self.cursor + 1) % self._length

    def move_previous(self) -> None:
        if self._length:
            self.cursor = self.cursor - 1 if self.cursor > 0 else self._length - 1

    def jump_first(self) -> None:
        if self._length:
            self.cursor = 0

    def jump_last(self) -> None:
        if self._length:
            self.cursor = self._length - 1

    def reset(self) -> None:
        """Back to the top after a non-empty search."""
        if self._length:
            self.cursor = 0

    def clamp(self) -> None:
        """Keep the cursor inside the filtered list after the store changes."""
        if self._length:
            self.cursor = min(self.cursor, self._length - 1)
        else:
            self.cursor = 0

    def set_focus(self, panel: Focus) -> None:
        self.focus = panel

    @property
    def selected_email(self) -> Optional[Email]:
        return self.store.get(self.cursor)
