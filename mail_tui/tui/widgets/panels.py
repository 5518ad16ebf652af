from typing import Optional

from rich.console import RenderableType
from textual.widget import Widget

from mail_tui.core.state import AppSnapshot
from mail_tui.tui import view


class SnapshotView(Widget):
    """A widget that draws one part of the latest AppSnapshot."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.snapshot: Optional[AppSnapshot] = None

    def update_snapshot(self, snapshot: AppSnapshot) -> None:
        self.snapshot = snapshot
        self.refresh()


class EmailListView(SnapshotView):
    """Left panel listing the filtered emails."""

    def __init__(self):
        super().__init__(id="email-list")

    def render(self) -> RenderableType:
        if self.snapshot is None:
            return ""
        return view.render_email_list(self.snapshot, self.size.height)


class EmailContentView(SnapshotView):
    """Right panel with the selected email."""

    def __init__(self):
        super().__init__(id="email-content")

    def render(self) -> RenderableType:
        if self.snapshot is None:
            return ""
        return view.render_email_content(self.snapshot, self.size.height)


class StatusBar(SnapshotView):
    """Displays loading progress, status messages or mode hints."""

    def __init__(self):
        super().__init__(id="status-bar")

    def render(self) -> RenderableType:
        if self.snapshot is None:
            return ""
        return view.status_text(self.snapshot)
