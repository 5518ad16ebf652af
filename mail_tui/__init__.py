"""mail-tui - terminal UI for browsing Office Exchange emails."""

__version__ = "0.1.0"
