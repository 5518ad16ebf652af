"""Email domain model"""

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Email:
    """A fetched message. Immutable; replaced wholesale on every fetch."""

    id: str
    subject: str
    sender: str
    date: datetime
    body: str

    def __post_init__(self):
        if self.date.tzinfo is None:
            object.__setattr__(self, "date", self.date.replace(tzinfo=timezone.utc))
        else:
            object.__setattr__(self, "date", self.date.astimezone(timezone.utc))

    def matches(self, query_lower: str) -> bool:
        """Case-insensitive substring match on subject, sender and body.

        ``query_lower`` must already be lower-cased.
        """
        return (
            query_lower in self.subject.lower()
            or query_lower in self.sender.lower()
            or query_lower in self.body.lower()
        )

    def body_lines(self) -> list[str]:
        return self.body.splitlines()
