"""Textual application hosting the render/input loop."""

from textual import events, work
from textual.app import App, ComposeResult
from textual.containers import Horizontal

from mail_tui.core.modes import KeyPress
from mail_tui.core.state import AppState
from mail_tui.utils.logging import get_logger

from .widgets import EmailContentView, EmailListView, ModalOverlay, StatusBar

logger = get_logger(__name__)

DEFAULT_TICK_RATE = 0.25


class MailTuiApp(App, inherit_bindings=False):
    """Draws the state each tick and feeds key presses into it.

    Textual owns the terminal (raw mode, alternate screen, mouse) for the
    lifetime of ``run()`` and restores it on every exit path. Textual's own
    bindings are dropped so every key, ctrl+q included, goes through the
    state machine.
    """

    CSS_PATH = "styles.tcss"
    TITLE = "mail-tui - Terminal UI for Office Exchange emails"
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, app_state: AppState, tick_interval: float = DEFAULT_TICK_RATE):
        super().__init__()
        self.app_state = app_state
        self.tick_interval = tick_interval
        self.email_list = EmailListView()
        self.email_content = EmailContentView()
        self.status_bar = StatusBar()
        self.modal_overlay = ModalOverlay()

    def compose(self) -> ComposeResult:
        yield Horizontal(self.email_list, self.email_content, id="panels")
        yield self.status_bar
        yield self.modal_overlay

    # --- Render loop ---
    def on_mount(self) -> None:
        self.refresh_view()
        self.set_interval(self.tick_interval, self.on_tick)
        self.load_emails()

    def refresh_view(self) -> None:
        """Hand one snapshot to every widget."""
        snapshot = self.app_state.snapshot()
        self.email_list.update_snapshot(snapshot)
        self.email_content.update_snapshot(snapshot)
        self.status_bar.update_snapshot(snapshot)
        self.modal_overlay.update_snapshot(snapshot)

    def on_tick(self) -> None:
        self.app_state.tick()
        self.refresh_view()

    @work(exclusive=True, group="fetch")
    async def load_emails(self) -> None:
        """Startup fetch; runs on the app's event loop, so the result is
        applied before the next draw.
        """
        await self.app_state.refresh_emails()
        self.refresh_view()

    # --- Event Handlers ---
    async def on_key(self, event: events.Key) -> None:
        event.stop()
        self.app_state.handle_key(KeyPress(key=event.key, character=event.character))
        if self.app_state.should_quit:
            logger.info("Quit requested")
            self.exit()
            return
        self.refresh_view()
