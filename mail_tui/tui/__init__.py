"""Textual front end."""

from .app import MailTuiApp

__all__ = ["MailTuiApp"]
