from typing import Optional

from rich.console import RenderableType
from textual.containers import Container
from textual.widgets import Static

from mail_tui.core.state import AppSnapshot
from mail_tui.tui import view


class ModalOverlay(Container):
    """Full-screen backdrop with a centred dialog for Help and Search."""

    def __init__(self):
        super().__init__(id="modal-overlay")
        self.dialog = Static(id="modal-dialog")

    def compose(self):
        yield self.dialog

    def on_mount(self) -> None:
        self.display = False

    def update_snapshot(self, snapshot: AppSnapshot) -> None:
        renderable: Optional[RenderableType] = view.overlay_for(snapshot)
        if renderable is None:
            self.display = False
            return
        self.dialog.update(renderable)
        self.display = True
