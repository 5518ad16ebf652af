"""Exchange mail client"""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from mail_tui.core.models.email import Email
from mail_tui.utils.config_manager import ExchangeConfig
from mail_tui.utils.errors import MissingCredentialsError
from mail_tui.utils.logging import async_log_call, get_logger

logger = get_logger(__name__)


def calculate_quarter_date_range(now: datetime) -> tuple[datetime, datetime]:
    """Return the UTC start and end of the calendar quarter containing ``now``.

    The quarter is taken from ``now``'s own calendar date (local time for the
    caller), and the bounds are the first day at 00:00:00 and the last day at
    23:59:59.
    """
    quarter = (now.month - 1) // 3 + 1
    start_month = (quarter - 1) * 3 + 1
    end_month = start_month + 2
    last_day = calendar.monthrange(now.year, end_month)[1]

    start = datetime(now.year, start_month, 1, 0, 0, 0, tzinfo=timezone.utc)
    end = datetime(now.year, end_month, last_day, 23, 59, 59, tzinfo=timezone.utc)
    return start, end


def sample_mailbox(now: datetime) -> list[Email]:
    """The demo mailbox served until the Exchange query is implemented."""
    return [
        Email(
            id="1",
            subject="Project Update - Q2",
            sender="manager@company.com",
            date=now - timedelta(days=7),
            body=(
                "Here's the latest update on our project progress...\n\n"
                "We've completed the initial phase of development and are moving into "
                "testing. Please review the attached documents and provide feedback by "
                "the end of the week.\n\n"
                "Thanks,\nProject Manager"
            ),
        ),
        Email(
            id="2",
            subject="Team Meeting - Tomorrow",
            sender="team-lead@company.com",
            date=now - timedelta(days=1),
            body=(
                "Reminder: We have a team meeting scheduled for tomorrow at 10 AM.\n\n"
                "Agenda:\n1. Project status updates\n2. Upcoming deadlines\n"
                "3. Resource allocation\n4. Open discussion\n\n"
                "Please come prepared with your updates.\n\n"
                "Regards,\nTeam Lead"
            ),
        ),
        Email(
            id="3",
            subject="Vacation Request",
            sender="hr@company.com",
            date=now - timedelta(days=2),
            body=(
                "Your vacation request has been approved.\n\n"
                "Dates: June 15-22, 2023\nTotal days: 5 business days\n"
                "Remaining PTO: 15 days\n\n"
                "Please ensure all your tasks are properly handed over before your "
                "departure.\n\n"
                "Best regards,\nHR Department"
            ),
        ),
        Email(
            id="4",
            subject="System Maintenance Notice",
            sender="it-support@company.com",
            date=now,
            body=(
                "Dear Team,\n\n"
                "Please be informed that we will be performing system maintenance this "
                "weekend. The following systems will be unavailable from Saturday 8 PM "
                "to Sunday 2 AM:\n\n"
                "- Email servers\n- Internal documentation\n- Project management tools\n\n"
                "Please plan your work accordingly.\n\n"
                "IT Support Team"
            ),
        ),
    ]


class ExchangeClient:
    """Read-only client for an Office 365 / Exchange mailbox."""

    def __init__(
        self,
        config: ExchangeConfig,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self._clock = clock or (lambda: datetime.now().astimezone())

    @classmethod
    async def create(cls, config: ExchangeConfig) -> "ExchangeClient":
        """Validate the account settings and build a client."""
        if not config.has_credentials():
            raise MissingCredentialsError(
                "Exchange email and password must be set in the config file "
                "or via MAIL_TUI_EXCHANGE__EMAIL / MAIL_TUI_EXCHANGE__PASSWORD"
            )
        logger.info(f"Using Exchange server {config.server}")
        return cls(config)

    def get_quarter_date_range(self) -> tuple[datetime, datetime]:
        return calculate_quarter_date_range(self._clock())

    @async_log_call
    async def fetch_current_quarter_emails(self) -> list[Email]:
        """Fetch every email received in the current calendar quarter."""
        start, end = self.get_quarter_date_range()
        logger.info(
            "Fetching emails",
            extra={"context": {"server": self.config.server, "start": start, "end": end}},
        )

        # TODO: query the Exchange server for the [start, end] window instead of
        # serving the sample mailbox.
        emails = sample_mailbox(datetime.now(timezone.utc))

        logger.info(f"Fetched {len(emails)} emails")
        return emails
