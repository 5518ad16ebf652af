"""Mail backend interface and factory."""

from typing import Protocol, runtime_checkable

from mail_tui.core.models.email import Email
from mail_tui.utils.config_manager import AppConfig

from .exchange import ExchangeClient


@runtime_checkable
class EmailClient(Protocol):
    """Anything that can fetch the current quarter's emails."""

    async def fetch_current_quarter_emails(self) -> list[Email]:
        ...


async def create_client(config: AppConfig) -> EmailClient:
    """Create the mail client for the configured account."""
    return await ExchangeClient.create(config.exchange)


__all__ = ["EmailClient", "ExchangeClient", "create_client"]
