"""Centralized path definitions for mail-tui.

This module provides a single source of truth for all application paths,
preventing duplication and making path configuration easier to maintain.
"""

from pathlib import Path

# Base application directories
CONFIG_DIR = Path.home() / ".config" / "mail-tui"
DATA_DIR = Path.home() / ".mail-tui"

# Subdirectories
LOGS_DIR = DATA_DIR / "logs"

# Specific files
CONFIG_FILE_NAME = "config.toml"
USER_CONFIG_PATH = CONFIG_DIR / CONFIG_FILE_NAME
LOCAL_CONFIG_PATH = Path(CONFIG_FILE_NAME)
