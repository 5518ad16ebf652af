"""Command-line interface for mail-tui - argument parsing and app start-up"""

import argparse
import asyncio
from pathlib import Path
from typing import Optional, Sequence

from mail_tui import __version__
from mail_tui.core.email import create_client
from mail_tui.core.state import AppState
from mail_tui.tui.app import MailTuiApp
from mail_tui.utils.config_manager import AppConfig, load_config
from mail_tui.utils.console import print_error
from mail_tui.utils.errors import MailTuiError, format_error_message
from mail_tui.utils.logging import get_logger, init_logging

logger = get_logger(__name__)


def setup_argument_parser() -> argparse.ArgumentParser:
    """Configure and return the argument parser"""
    parser = argparse.ArgumentParser(
        prog="mail-tui",
        description="Terminal UI for Office Exchange emails",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        metavar="FILE",
        help="Path to config file",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override the configured log level",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_app(config: AppConfig) -> MailTuiApp:
    """Create the mail client and wire it into a ready-to-run app."""
    client = asyncio.run(create_client(config))
    state = AppState(
        client,
        status_timeout=config.ui.status_timeout,
        fetch_timeout=config.ui.fetch_timeout,
    )
    return MailTuiApp(state, tick_interval=config.ui.tick_seconds)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = setup_argument_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        init_logging(
            args.log_level or config.logging.log_level,
            log_dir=Path(config.logging.log_dir),
            max_bytes=config.logging.max_file_size,
            backup_count=config.logging.backup_count,
        )
        app = build_app(config)
    except MailTuiError as e:
        logger.error(f"Start-up failed: {e.message}")
        print_error(f"Error: {format_error_message(e)}")
        return 1

    logger.info(f"Starting mail-tui {__version__}")
    app.run()
    logger.info("mail-tui exited")
    return 0
