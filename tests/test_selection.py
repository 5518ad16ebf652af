"""
Tests for the selection cursor and panel focus

Tests cover:
- Wrap-around movement
- First / last jumps
- No-ops on an empty list
- Clamping after the store changes
- Focus switching
"""
import pytest

from mail_tui.core.selection import Focus, SelectionTracker
from mail_tui.core.store import MessageStore

from .test_helpers import EmailTestHelper


@pytest.fixture
def tracker():
    """Tracker over a four-email store"""
    return SelectionTracker(MessageStore(EmailTestHelper.create_emails(count=4)))


class TestMovement:
    """Tests for cursor movement"""

    def test_move_next(self, tracker):
        tracker.move_next()
        assert tracker.cursor == 1

    def test_move_next_wraps_to_first(self, tracker):
        """Past the last item returns to the first"""
        tracker.cursor = 3
        tracker.move_next()
        assert tracker.cursor == 0

    def test_move_previous_wraps_to_last(self, tracker):
        """Before the first item goes to the last"""
        tracker.move_previous()
        assert tracker.cursor == 3

    @pytest.mark.parametrize('start', [0, 1, 2, 3])
    def test_next_then_previous_is_identity(self, tracker, start):
        """move_next and move_previous are inverses"""
        tracker.cursor = start
        tracker.move_next()
        tracker.move_previous()
        assert tracker.cursor == start

    def test_jump_first_and_last(self, tracker):
        tracker.jump_last()
        assert tracker.cursor == 3
        tracker.jump_first()
        assert tracker.cursor == 0

    def test_movement_follows_filtered_list(self, tracker):
        """Wrap-around uses the filtered length, not the store length"""
        tracker.store.set_filtered([1, 3])
        tracker.cursor = 1
        tracker.move_next()
        assert tracker.cursor == 0
        tracker.jump_last()
        assert tracker.cursor == 1


class TestEmptyList:
    """Tests for navigation with nothing to select"""

    def test_all_movement_is_noop(self):
        """Empty store navigation is not an error"""
        tracker = SelectionTracker(MessageStore())

        tracker.move_next()
        tracker.move_previous()
        tracker.jump_first()
        tracker.jump_last()

        assert tracker.cursor == 0
        assert tracker.selected_email is None


class TestClamp:
    """Tests for keeping the cursor in range"""

    def test_clamp_to_shorter_list(self, tracker):
        tracker.cursor = 3
        tracker.store.replace_all(EmailTestHelper.create_emails(count=2))
        tracker.clamp()
        assert tracker.cursor == 1

    def test_clamp_keeps_cursor_in_range(self, tracker):
        tracker.cursor = 2
        tracker.store.replace_all(EmailTestHelper.create_emails(count=5))
        tracker.clamp()
        assert tracker.cursor == 2

    def test_clamp_on_empty_list_goes_to_zero(self, tracker):
        tracker.cursor = 3
        tracker.store.replace_all([])
        tracker.clamp()
        assert tracker.cursor == 0


class TestFocus:
    """Tests for panel focus"""

    def test_default_focus_is_list(self, tracker):
        assert tracker.focus is Focus.EMAIL_LIST

    def test_set_focus_is_unconditional(self):
        """Focus changes even with no emails"""
        tracker = SelectionTracker(MessageStore())
        tracker.set_focus(Focus.EMAIL_CONTENT)
        assert tracker.focus is Focus.EMAIL_CONTENT

    def test_focus_does_not_move_cursor(self, tracker):
        tracker.cursor = 2
        tracker.set_focus(Focus.EMAIL_CONTENT)
        assert tracker.cursor == 2
