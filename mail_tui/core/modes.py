"""Input modes, key bindings and the per-mode key handlers.

Each handler is a pure function of the key and a small read-only context.
It returns the next mode and the commands the state machine should run, so
the transition table can be exercised without a terminal.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from mail_tui.core.selection import Focus

REFRESH_DISABLED_MESSAGE = "Can't refresh emails during UI running. Restart app to refresh."


class Mode(Enum):
    """Active interaction context."""

    NORMAL = "normal"
    HELP = "help"
    EMAIL_VIEW = "email_view"
    SEARCH = "search"


@dataclass(frozen=True)
class KeyPress:
    """A key event, using Textual key names (``down``, ``slash``, ``G``...).

    ``character`` is the printable character for the key, if any.
    """

    key: str
    character: Optional[str] = None

    def is_(self, names: frozenset[str]) -> bool:
        return self.key in names or (self.character is not None and self.character in names)

    @property
    def is_printable(self) -> bool:
        return (
            self.character is not None
            and len(self.character) == 1
            and self.character.isprintable()
        )


QUIT_KEYS = frozenset({"q"})
HELP_KEYS = frozenset({"question_mark", "?"})
REFRESH_KEYS = frozenset({"r"})
SEARCH_KEYS = frozenset({"slash", "/"})
NEXT_KEYS = frozenset({"j", "down"})
PREVIOUS_KEYS = frozenset({"k", "up"})
SELECT_KEYS = frozenset({"l", "right", "enter"})
LEFT_KEYS = frozenset({"h", "left"})
FIRST_KEYS = frozenset({"g"})
LAST_KEYS = frozenset({"G", "shift+g"})
BACK_KEYS = frozenset({"escape", "h", "left"})
CONFIRM_KEYS = frozenset({"enter"})
CANCEL_KEYS = frozenset({"escape"})
BACKSPACE_KEYS = frozenset({"backspace"})


## Commands


class Direction(Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True)
class Navigate:
    direction: Direction


@dataclass(frozen=True)
class SetFocus:
    panel: Focus


@dataclass(frozen=True)
class SetStatus:
    text: str


@dataclass(frozen=True)
class ApplyFilter:
    query: str


class SearchEdit(Enum):
    CLEAR = "clear"
    APPEND = "append"
    DELETE = "delete"


@dataclass(frozen=True)
class EditSearch:
    action: SearchEdit
    text: str = ""


@dataclass(frozen=True)
class Quit:
    pass


Command = Navigate | SetFocus | SetStatus | ApplyFilter | EditSearch | Quit


@dataclass(frozen=True)
class KeyContext:
    """What a handler may know about the state when deciding."""

    has_results: bool
    search_input: str = ""


@dataclass(frozen=True)
class Transition:
    mode: Mode
    commands: tuple[Command, ...] = field(default_factory=tuple)


## Handlers


def handle_normal(key: KeyPress, ctx: KeyContext) -> Transition:
    if key.is_(QUIT_KEYS):
        return Transition(Mode.NORMAL, (Quit(),))
    if key.is_(HELP_KEYS):
        return Transition(Mode.HELP)
    if key.is_(REFRESH_KEYS):
        return Transition(Mode.NORMAL, (SetStatus(REFRESH_DISABLED_MESSAGE),))
    if key.is_(SEARCH_KEYS):
        return Transition(Mode.SEARCH, (EditSearch(SearchEdit.CLEAR),))
    if key.is_(NEXT_KEYS):
        return Transition(Mode.NORMAL, (Navigate(Direction.NEXT),))
    if key.is_(PREVIOUS_KEYS):
        return Transition(Mode.NORMAL, (Navigate(Direction.PREVIOUS),))
    if key.is_(SELECT_KEYS):
        if ctx.has_results:
            return Transition(Mode.EMAIL_VIEW, (SetFocus(Focus.EMAIL_CONTENT),))
        return Transition(Mode.NORMAL)
    if key.is_(LEFT_KEYS):
        return Transition(Mode.NORMAL, (SetFocus(Focus.EMAIL_LIST),))
    if key.is_(FIRST_KEYS):
        return Transition(Mode.NORMAL, (Navigate(Direction.FIRST),))
    if key.is_(LAST_KEYS):
        return Transition(Mode.NORMAL, (Navigate(Direction.LAST),))
    return Transition(Mode.NORMAL)


def handle_email_view(key: KeyPress, ctx: KeyContext) -> Transition:
    if key.is_(BACK_KEYS):
        return Transition(Mode.NORMAL, (SetFocus(Focus.EMAIL_LIST),))
    if key.is_(NEXT_KEYS):
        return Transition(Mode.EMAIL_VIEW, (Navigate(Direction.NEXT),))
    if key.is_(PREVIOUS_KEYS):
        return Transition(Mode.EMAIL_VIEW, (Navigate(Direction.PREVIOUS),))
    if key.is_(QUIT_KEYS):
        return Transition(Mode.EMAIL_VIEW, (Quit(),))
    if key.is_(HELP_KEYS):
        return Transition(Mode.HELP)
    return Transition(Mode.EMAIL_VIEW)


def handle_help(key: KeyPress, ctx: KeyContext) -> Transition:
    # Any key dismisses the help overlay.
    return Transition(Mode.NORMAL)


def handle_search(key: KeyPress, ctx: KeyContext) -> Transition:
    if key.is_(CANCEL_KEYS):
        return Transition(
            Mode.NORMAL, (EditSearch(SearchEdit.CLEAR), ApplyFilter(""))
        )
    if key.is_(CONFIRM_KEYS):
        return Transition(Mode.NORMAL, (ApplyFilter(ctx.search_input),))
    if key.is_(BACKSPACE_KEYS):
        return Transition(Mode.SEARCH, (EditSearch(SearchEdit.DELETE),))
    if key.is_printable:
        return Transition(Mode.SEARCH, (EditSearch(SearchEdit.APPEND, key.character),))
    return Transition(Mode.SEARCH)


HANDLERS: dict[Mode, Callable[[KeyPress, KeyContext], Transition]] = {
    Mode.NORMAL: handle_normal,
    Mode.HELP: handle_help,
    Mode.EMAIL_VIEW: handle_email_view,
    Mode.SEARCH: handle_search,
}
