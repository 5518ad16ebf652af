"""
Tests for configuration loading

Tests cover:
- Built-in defaults
- TOML files and their merge order
- Environment variable overrides
- Validation failures surfaced as configuration errors
"""
import pytest

from mail_tui.utils.config_manager import (
    AppConfig,
    candidate_paths,
    deep_merge,
    load_config,
)
from mail_tui.utils.errors import InvalidConfigError
from mail_tui.utils.paths import LOCAL_CONFIG_PATH, USER_CONFIG_PATH


def write_config(path, text):
    path.write_text(text, encoding='utf-8')
    return path


class TestDefaults:
    """Tests for the built-in defaults"""

    def test_default_values(self):
        config = AppConfig()

        assert config.exchange.server == 'outlook.office365.com'
        assert config.exchange.email == ''
        assert not config.exchange.has_credentials()
        assert config.ui.tick_rate == 250
        assert config.ui.tick_seconds == 0.25
        assert config.ui.status_timeout == 5.0
        assert config.ui.fetch_timeout is None
        assert config.logging.log_level == 'INFO'

    def test_no_files_gives_defaults(self, tmp_path):
        config = load_config(paths=[tmp_path / 'missing.toml'])
        assert config.exchange.server == 'outlook.office365.com'

    def test_missing_explicit_path_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / 'nope.toml')
        assert config.ui.tick_rate == 250


class TestCandidatePaths:
    """Tests for config file discovery"""

    def test_default_search_order(self):
        assert candidate_paths() == [LOCAL_CONFIG_PATH, USER_CONFIG_PATH]

    def test_explicit_path_only(self, tmp_path):
        path = tmp_path / 'custom.toml'
        assert candidate_paths(path) == [path]


class TestTomlLoading:
    """Tests for reading TOML files"""

    def test_loads_exchange_section(self, tmp_path):
        path = write_config(tmp_path / 'config.toml', """
[exchange]
email = "user@company.com"
password = "secret"
server = "mail.company.com"
""")
        config = load_config(path)

        assert config.exchange.email == 'user@company.com'
        assert config.exchange.server == 'mail.company.com'
        assert config.exchange.has_credentials()

    def test_later_file_overrides_earlier(self, tmp_path):
        local = write_config(tmp_path / 'local.toml', """
[exchange]
email = "local@company.com"
password = "pw"
""")
        user = write_config(tmp_path / 'user.toml', """
[exchange]
email = "user@company.com"
""")
        config = load_config(paths=[local, user])

        assert config.exchange.email == 'user@company.com'
        assert config.exchange.password == 'pw'

    def test_ui_and_logging_sections(self, tmp_path):
        path = write_config(tmp_path / 'config.toml', """
[ui]
tick_rate = 100
status_timeout = 2.5
fetch_timeout = 30

[logging]
log_level = "debug"
""")
        config = load_config(path)

        assert config.ui.tick_seconds == 0.1
        assert config.ui.status_timeout == 2.5
        assert config.ui.fetch_timeout == 30
        assert config.logging.log_level == 'DEBUG'

    def test_unknown_sections_ignored(self, tmp_path):
        path = write_config(tmp_path / 'config.toml', '[extra]\nkey = 1\n')
        assert load_config(path).exchange.server == 'outlook.office365.com'


class TestEnvironmentOverrides:
    """Tests for MAIL_TUI_ environment variables"""

    def test_env_fills_missing_values(self, monkeypatch, tmp_path):
        monkeypatch.setenv('MAIL_TUI_EXCHANGE__EMAIL', 'env@company.com')
        config = load_config(paths=[tmp_path / 'missing.toml'])
        assert config.exchange.email == 'env@company.com'

    def test_env_beats_file(self, monkeypatch, tmp_path):
        path = write_config(tmp_path / 'config.toml', """
[exchange]
email = "file@company.com"
password = "file-pw"
""")
        monkeypatch.setenv('MAIL_TUI_EXCHANGE__EMAIL', 'env@company.com')

        config = load_config(path)

        assert config.exchange.email == 'env@company.com'
        assert config.exchange.password == 'file-pw'

    def test_env_nested_number(self, monkeypatch):
        monkeypatch.setenv('MAIL_TUI_UI__TICK_RATE', '500')
        assert AppConfig().ui.tick_rate == 500


class TestInvalidConfig:
    """Tests for configuration errors"""

    def test_malformed_toml(self, tmp_path):
        path = write_config(tmp_path / 'config.toml', '[exchange\nemail = ')

        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.details['path'] == str(path)

    def test_wrong_type(self, tmp_path):
        path = write_config(tmp_path / 'config.toml', '[ui]\ntick_rate = "fast"\n')
        with pytest.raises(InvalidConfigError):
            load_config(path)

    def test_non_positive_tick(self, tmp_path):
        path = write_config(tmp_path / 'config.toml', '[ui]\ntick_rate = 0\n')
        with pytest.raises(InvalidConfigError):
            load_config(path)

    def test_unknown_log_level(self, tmp_path):
        path = write_config(tmp_path / 'config.toml', '[logging]\nlog_level = "LOUD"\n')
        with pytest.raises(InvalidConfigError):
            load_config(path)


class TestDeepMerge:
    """Tests for nested dictionary merging"""

    def test_nested_tables_merge(self):
        base = {'exchange': {'email': 'a', 'server': 's'}, 'ui': {'tick_rate': 1}}
        override = {'exchange': {'email': 'b'}}

        merged = deep_merge(base, override)

        assert merged == {'exchange': {'email': 'b', 'server': 's'}, 'ui': {'tick_rate': 1}}
        assert base['exchange']['email'] == 'a'

    def test_scalar_replaces_table(self):
        assert deep_merge({'a': {'b': 1}}, {'a': 2}) == {'a': 2}
