"""Smoke tests for CLI commands.

Uses Click's CliRunner with a temporary config file and log file so the
user's ~/.ledapplet directory is never touched.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from ledapplet.cli.main import cli


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path: Path):
    """Invoke the CLI with an isolated config file and log file."""
    config_file = tmp_path / "config.json"
    log_file = tmp_path / "ledapplet.log"

    def _invoke(*args):
        return runner.invoke(
            cli, ['--log-file', str(log_file), '--config-file', str(config_file), *args]
        )

    _invoke.config_file = config_file
    _invoke.log_file = log_file
    return _invoke


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'LED matrix applet client' in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    @pytest.mark.parametrize("command", ['codes', 'config', 'probe'])
    def test_command_help(self, runner, command):
        result = runner.invoke(cli, [command, '--help'])
        assert result.exit_code == 0


@pytest.mark.integration
class TestCodesCommand:
    """Test the status-byte table output."""

    def test_default_revision(self, invoke):
        result = invoke('codes')
        assert result.exit_code == 0
        assert 'Protocol revision v2: grid 10x9, applets 0-3' in result.output
        assert 'PRIVILEGED_APPLET' in result.output
        assert 'COMMAND_FAILED' not in result.output

    def test_v1(self, invoke):
        result = invoke('codes', '--revision', 'v1')
        assert result.exit_code == 0
        assert 'grid 11x9, applets 0-2' in result.output
        assert 'COMMAND_FAILED' in result.output

    def test_unknown_revision(self, invoke):
        result = invoke('codes', '-r', 'v5')
        assert result.exit_code != 0


@pytest.mark.integration
class TestConfigCommand:
    """Test config show/set/reset/validate/path."""

    def test_path(self, invoke):
        result = invoke('config', 'path')
        assert result.exit_code == 0
        assert result.output.strip() == str(invoke.config_file)

    def test_show_defaults(self, invoke):
        result = invoke('config', 'show')
        assert result.exit_code == 0
        assert 'port: 27072' in result.output
        assert 'revision: v2' in result.output
        assert not invoke.config_file.exists()

    def test_show_field(self, invoke):
        result = invoke('config', 'show', '--field', 'host')
        assert result.exit_code == 0
        assert result.output.strip() == 'host: 127.0.0.1'

    def test_set_and_show(self, invoke):
        result = invoke('config', 'set', '--port', '4000', '--revision', 'v1', '--timeout', '2.5')
        assert result.exit_code == 0
        assert 'Set port = 4000' in result.output

        saved = json.loads(invoke.config_file.read_text())
        assert saved['port'] == 4000
        assert saved['revision'] == 'v1'
        assert saved['timeout'] == 2.5

        result = invoke('config', 'show', '-f', 'port')
        assert result.output.strip() == 'port: 4000'

    def test_clear_timeout(self, invoke):
        invoke('config', 'set', '--timeout', '1')
        result = invoke('config', 'set', '--no-timeout')
        assert result.exit_code == 0
        assert json.loads(invoke.config_file.read_text())['timeout'] is None

    def test_set_nothing(self, invoke):
        result = invoke('config', 'set')
        assert result.exit_code == 2
        assert 'Nothing to set' in result.output

    def test_set_invalid_port(self, invoke):
        result = invoke('config', 'set', '--port', '0')
        assert result.exit_code == 1
        assert "Invalid configuration value for 'port'" in result.output
        assert not invoke.config_file.exists()

    def test_reset(self, invoke):
        invoke('config', 'set', '--port', '4000')
        result = invoke('config', 'reset')
        assert result.exit_code == 0
        assert json.loads(invoke.config_file.read_text())['port'] == 27072
        assert invoke.config_file.with_suffix('.json.bak').exists()

    def test_reset_unwritable_path(self, runner, tmp_path: Path):
        blocker = tmp_path / 'blocker'
        blocker.write_text('not a directory')
        result = runner.invoke(cli, [
            '--log-file', str(tmp_path / 'ledapplet.log'),
            '--config-file', str(blocker / 'config.json'),
            'config', 'reset',
        ])
        assert result.exit_code == 1
        assert 'Failed to save configuration' in result.output

    def test_validate(self, invoke):
        result = invoke('config', 'validate')
        assert result.exit_code == 1
        assert 'File not found' in result.output

        invoke('config', 'reset')
        result = invoke('config', 'validate')
        assert result.exit_code == 0
        assert 'Config OK' in result.output

    def test_broken_config_file(self, invoke):
        invoke.config_file.write_text('{"port": 4000,}')
        result = invoke('config', 'show')
        assert result.exit_code == 1
        assert 'trailing comma' in result.output

    def test_logs_to_file(self, invoke):
        invoke('-v', 'config', 'show')
        assert invoke.log_file.exists()


@pytest.mark.integration
class TestProbeCommand:
    """Test the handshake probe against the fake board."""

    def test_probe_ok(self, invoke, board):
        result = invoke('probe', '--app', '1', '--separator', 'solid', '--port', str(board.port))
        assert result.exit_code == 0
        assert '[OK] 10x9 grid, separator SOLID' in result.output
        assert board.commands[0].command.parameters == [1]

    def test_probe_uses_configured_port(self, invoke, board):
        invoke('config', 'set', '--port', str(board.port))
        result = invoke('probe', '-a', '2')
        assert result.exit_code == 0
        assert board.commands[0].command.app_num == 2

    def test_probe_refused(self, invoke, make_board):
        fake = make_board(replies=[34])
        result = invoke('probe', '-a', '1', '-p', str(fake.port))
        assert result.exit_code == 1
        assert '[FAIL] Board refused to create applet 1' in result.output
        assert 'Suggestion: Applet 1 is already owned' in result.output

    def test_probe_invalid_app(self, invoke, board):
        result = invoke('probe', '-a', '7', '-p', str(board.port))
        assert result.exit_code == 1
        assert '[FAIL] app_num maximum is 3' in result.output
        assert board.connections == 0

    def test_probe_requires_app(self, invoke):
        result = invoke('probe')
        assert result.exit_code == 2
