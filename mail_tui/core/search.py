"""Search filter: case-insensitive substring matching over the store."""

from dataclasses import dataclass
from typing import Optional, Sequence

from mail_tui.core.models.email import Email
from mail_tui.core.store import MessageStore


@dataclass(frozen=True)
class SearchResult:
    """Outcome of applying a query to the store."""

    query: str
    indices: tuple[int, ...]
    status: Optional[str]

    @property
    def is_empty(self) -> bool:
        return not self.indices


def filter_indices(emails: Sequence[Email], query: str) -> list[int]:
    """Positions of the emails matching ``query``, in store order.

    An empty query matches everything.
    """
    if not query:
        return list(range(len(emails)))

    query_lower = query.lower()
    return [idx for idx, email in enumerate(emails) if email.matches(query_lower)]


def search_status(query: str, count: int) -> Optional[str]:
    """Status line for a search; None for an empty (clearing) query."""
    if not query:
        return None
    if count == 0:
        return f"No emails found matching '{query}'"
    return f"Found {count} emails matching '{query}'"


class SearchFilter:
    """Applies queries to a message store."""

    def __init__(self, store: MessageStore):
        self.store = store

    def apply(self, query: str) -> SearchResult:
        """Replace the store's filtered list with the matches for ``query``."""
        indices = filter_indices(self.store.emails, query)
        self.store.set_filtered(indices)
        return SearchResult(
            query=query,
            indices=tuple(indices),
            status=search_status(query, len(indices)),
        )
