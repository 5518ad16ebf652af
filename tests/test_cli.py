"""
Tests for the command-line entry point
"""
from pathlib import Path

import pytest

from mail_tui import __version__, cli
from mail_tui.core.state import AppState
from mail_tui.tui.app import MailTuiApp
from mail_tui.utils.config_manager import AppConfig


@pytest.fixture
def errors(monkeypatch):
    """Collect messages passed to print_error and skip real logging setup"""
    printed = []
    monkeypatch.setattr(cli, 'print_error', printed.append)
    monkeypatch.setattr(cli, 'init_logging', lambda *args, **kwargs: None)
    return printed


class TestArgumentParser:
    """Tests for argument parsing"""

    def test_defaults(self):
        args = cli.setup_argument_parser().parse_args([])
        assert args.config is None
        assert args.log_level is None

    def test_config_and_level(self):
        args = cli.setup_argument_parser().parse_args(['-c', 'my.toml', '--log-level', 'debug'])
        assert args.config == Path('my.toml')
        assert args.log_level == 'DEBUG'

    def test_invalid_level_exits(self):
        with pytest.raises(SystemExit):
            cli.setup_argument_parser().parse_args(['--log-level', 'loud'])

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            cli.setup_argument_parser().parse_args(['--version'])
        assert __version__ in capsys.readouterr().out


class TestBuildApp:
    """Tests for wiring the app from configuration"""

    def test_timings_flow_into_app(self):
        config = AppConfig(
            exchange={'email': 'user@company.com', 'password': 'pw'},
            ui={'tick_rate': 100, 'status_timeout': 3, 'fetch_timeout': 20},
        )

        app = cli.build_app(config)

        assert isinstance(app, MailTuiApp)
        assert app.tick_interval == 0.1
        assert app.app_state.status_timeout == 3
        assert app.app_state.fetch_timeout == 20


class TestMain:
    """Tests for main()"""

    def test_invalid_config_returns_error(self, tmp_path, errors):
        path = tmp_path / 'config.toml'
        path.write_text('[exchange\n', encoding='utf-8')

        assert cli.main(['-c', str(path)]) == 1
        assert 'not valid TOML' in errors[0]

    def test_missing_credentials_returns_error(self, tmp_path, errors):
        assert cli.main(['-c', str(tmp_path / 'none.toml')]) == 1
        assert errors[0].startswith('Error: Exchange email and password must be set')

    def test_runs_app(self, tmp_path, errors, monkeypatch):
        ran = []

        class FakeApp:
            def run(self):
                ran.append(True)

        monkeypatch.setattr(cli, 'build_app', lambda config: FakeApp())

        assert cli.main(['-c', str(tmp_path / 'none.toml')]) == 0
        assert ran == [True]
        assert errors == []
