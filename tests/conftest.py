"""
Shared test fixtures and configuration for pytest
"""
import os

import pytest

from mail_tui.core.state import AppState

from .test_helpers import EmailTestHelper, FakeClock


@pytest.fixture
def clock():
    """Manually driven monotonic clock"""
    return FakeClock()


@pytest.fixture
def quarter_emails():
    """Four sample emails in fetch order"""
    return EmailTestHelper.create_quarter_emails()


@pytest.fixture
def state(clock):
    """Empty state machine with a fake clock"""
    return AppState(status_timeout=5.0, clock=clock)


@pytest.fixture
def loaded_state(state, quarter_emails):
    """State machine holding the four sample emails"""
    state.replace_emails(quarter_emails)
    return state


@pytest.fixture(autouse=True)
def clear_env_vars():
    """Clear mail-tui environment variables before each test"""
    original = {key: value for key, value in os.environ.items() if key.startswith('MAIL_TUI_')}
    for key in original:
        del os.environ[key]

    yield

    # Restore original environment
    for key in [k for k in os.environ if k.startswith('MAIL_TUI_')]:
        del os.environ[key]
    os.environ.update(original)
