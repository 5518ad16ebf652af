"""Message store: the fetched emails plus the filtered index list."""

from typing import Iterable, Optional, Sequence

from mail_tui.core.models.email import Email


class MessageStore:
    """Owns the fetched emails and the current view onto them.

    ``filtered`` holds positions into ``emails`` in store order. Searching
    swaps this list only; emails are never copied or removed.
    """

    def __init__(self, emails: Iterable[Email] = ()):
        self._emails: list[Email] = list(emails)
        self._filtered: list[int] = list(range(len(self._emails)))

    def __len__(self) -> int:
        return len(self._emails)

    @property
    def emails(self) -> Sequence[Email]:
        return tuple(self._emails)

    @property
    def filtered(self) -> Sequence[int]:
        return tuple(self._filtered)

    @property
    def filtered_count(self) -> int:
        return len(self._filtered)

    def replace_all(self, emails: Iterable[Email]) -> None:
        """Install a new fetch result and show all of it."""
        self._emails = list(emails)
        self.reset_filter()

    def reset_filter(self) -> None:
        self._filtered = list(range(len(self._emails)))

    def set_filtered(self, indices: Iterable[int]) -> None:
        indices = list(indices)
        if len(indices) > len(self._emails) or any(
            not 0 <= i < len(self._emails) for i in indices
        ):
            raise IndexError("filtered index out of range for the message store")
        self._filtered = indices

    def get(self, position: int) -> Optional[Email]:
        """Email at ``position`` in the filtered list, or None."""
        if not 0 <= position < len(self._filtered):
            return None
        return self._emails[self._filtered[position]]
