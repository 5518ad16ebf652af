"""Render projection: turns an AppSnapshot into rich renderables.

Nothing here mutates state; every function takes the snapshot it draws.
"""

import time
from typing import Optional

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from mail_tui.core.modes import Mode
from mail_tui.core.selection import Focus
from mail_tui.core.state import AppSnapshot
from mail_tui.core.models.email import Email

SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
FOCUSED_BORDER = "yellow"
UNFOCUSED_BORDER = "white"
HIGHLIGHT_SYMBOL = ">> "
HIGHLIGHT_STYLE = Style(bgcolor="grey27", bold=True)
LINES_PER_ITEM = 4

MODE_HINTS = {
    Mode.NORMAL: "Normal mode | Press ? for help | q to quit",
    Mode.EMAIL_VIEW: "Email view mode | Press Esc to return | ? for help",
    Mode.HELP: "Help mode",
    Mode.SEARCH: "Search mode",
}

HELP_ROWS = [
    ("j/k or ↑/↓", "Navigate up/down through emails"),
    ("l or → or Enter", "View selected email details"),
    ("h or ← or Esc", "Return to email list"),
    ("g", "Go to first email"),
    ("G", "Go to last email"),
    ("r", "Refresh emails"),
    ("q", "Quit application"),
    ("?", "Show/hide this help menu"),
    ("/", "Search emails"),
]


def border_style(snapshot: AppSnapshot, panel: Focus) -> str:
    return FOCUSED_BORDER if snapshot.focus is panel else UNFOCUSED_BORDER


def visible_window(cursor: int, count: int, capacity: int) -> tuple[int, int]:
    """Slice ``[start, end)`` of ``count`` items that fits ``capacity`` and
    keeps ``cursor`` on screen, scrolling as little as possible from the top.
    """
    capacity = max(1, capacity)
    if count <= capacity:
        return 0, count
    start = max(0, min(cursor - capacity + 1, count - capacity))
    return start, start + capacity


def _list_item(email: Email, selected: bool) -> Text:
    prefix = HIGHLIGHT_SYMBOL if selected else " " * len(HIGHLIGHT_SYMBOL)
    pad = " " * len(HIGHLIGHT_SYMBOL)
    item = Text()
    item.append(prefix)
    item.append(email.subject, style="bold")
    item.append("\n" + pad)
    item.append("From: ", style="blue")
    item.append(email.sender)
    item.append("\n" + pad)
    item.append("Date: ", style="blue")
    item.append(email.date.strftime("%Y-%m-%d %H:%M"))
    item.append("\n")
    if selected:
        item.stylize(HIGHLIGHT_STYLE, 0, len(item) - 1)
    return item


def render_email_list(snapshot: AppSnapshot, height: Optional[int] = None) -> RenderableType:
    """Left panel: subject, sender and date for every filtered email."""
    emails = snapshot.filtered_emails
    if height:
        capacity = max(1, (height - 2) // LINES_PER_ITEM)
    else:
        capacity = max(1, len(emails))
    start, end = visible_window(snapshot.cursor, len(emails), capacity)

    body = Text()
    for position in range(start, end):
        body.append_text(_list_item(emails[position], position == snapshot.cursor))
        if position != end - 1:
            body.append("\n")

    return Panel(
        body,
        title="Emails",
        title_align="left",
        border_style=border_style(snapshot, Focus.EMAIL_LIST),
        height=height,
    )


def render_email_content(snapshot: AppSnapshot, height: Optional[int] = None) -> RenderableType:
    """Right panel: full header and body of the selected email."""
    email = snapshot.selected_email

    if email is None:
        content: RenderableType = Text("No email selected")
    else:
        label = Style(color="green", bold=True)
        content = Text()
        content.append("Subject: ", style=label)
        content.append(email.subject, style="bold")
        content.append("\n")
        content.append("From: ", style=label)
        content.append(email.sender)
        content.append("\n")
        content.append("Date: ", style=label)
        content.append(email.date.strftime("%Y-%m-%d %H:%M:%S"))
        content.append("\n\n\n")
        content.append("\n".join(email.body_lines()))

    return Panel(
        content,
        title="Content",
        title_align="left",
        border_style=border_style(snapshot, Focus.EMAIL_CONTENT),
        height=height,
    )


def spinner_frame(now: Optional[float] = None) -> str:
    now = time.time() if now is None else now
    return SPINNER_FRAMES[int(now * 10) % len(SPINNER_FRAMES)]


def status_text(snapshot: AppSnapshot, now: Optional[float] = None) -> Text:
    """One-line status bar: loading spinner, else status message, else mode hint."""
    if snapshot.loading:
        return Text(f"{spinner_frame(now)} Loading emails...", style="yellow")
    if snapshot.status_message is not None:
        return Text(snapshot.status_message, style="cyan")
    return Text(MODE_HINTS[snapshot.mode])


def render_help() -> RenderableType:
    table = Table.grid(padding=(0, 1))
    table.add_column(style="bold", no_wrap=True)
    table.add_column()
    for keys, description in HELP_ROWS:
        table.add_row(keys, f"- {description}")

    return Panel(
        Group(
            Text("Keyboard Shortcuts:", style="bold"),
            Text(""),
            table,
            Text(""),
            Text("Press any key to close this help window", style="yellow"),
        ),
        title="Help",
        style="white",
    )


def render_search(snapshot: AppSnapshot) -> RenderableType:
    prompt = Text("Search: ")
    prompt.append(snapshot.search_input)
    prompt.append(" ", style="reverse")
    return Panel(prompt, title="Search Emails", style="white")


def overlay_for(snapshot: AppSnapshot) -> Optional[RenderableType]:
    """The modal drawn over the panels in the current mode, if any."""
    if snapshot.mode is Mode.HELP:
        return render_help()
    if snapshot.mode is Mode.SEARCH:
        return render_search(snapshot)
    return None
