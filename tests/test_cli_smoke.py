"""Smoke tests for CLI commands.

Tests that CLI commands parse correctly and don't crash. Uses Click's
CliRunner for testing without touching the button or the microphone.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from mutebutton.cli.main import cli
from mutebutton.models import DeviceIdentity


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def log_args(tmp_path):
    """Keep test logging out of the user's home directory."""
    return ['--log-file', str(tmp_path / "test.log")]


@pytest.fixture
def config_file(tmp_path):
    return tmp_path / "config.json"


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'MuteMe' in result.output
        assert '--verbose' in result.output
        assert '--log-file' in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    @pytest.mark.parametrize(
        "args",
        [
            ['run', '--help'],
            ['device', '--help'],
            ['device', 'list', '--help'],
            ['device', 'cycle-colors', '--help'],
            ['config', '--help'],
            ['config', 'show', '--help'],
            ['config', 'set', '--help'],
            ['config', 'reset', '--help'],
        ],
    )
    def test_subcommand_help(self, runner, args):
        result = runner.invoke(cli, args)
        assert result.exit_code == 0, result.output


@pytest.mark.integration
class TestDeviceCommands:
    """Test device commands with hidapi mocked."""

    def test_list_no_devices(self, runner, log_args):
        with patch('mutebutton.cli.commands.device.DeviceLocator.list_devices', return_value=[]):
            result = runner.invoke(cli, log_args + ['device', 'list'])

        assert result.exit_code == 0
        assert 'No mute button found' in result.output
        assert '20a0:42da' in result.output

    def test_list_devices(self, runner, log_args):
        devices = [{
            'identity': DeviceIdentity(vendor_id=0x20A0, product_id=0x42DA),
            'path': '/dev/hidraw3',
            'manufacturer': 'muteme.com',
            'product': 'MuteMe',
            'serial': '',
        }]
        with patch('mutebutton.cli.commands.device.DeviceLocator.list_devices', return_value=devices):
            result = runner.invoke(cli, log_args + ['device', 'list'])

        assert result.exit_code == 0
        assert '[0] 20a0:42da  muteme.com MuteMe' in result.output
        assert '/dev/hidraw3' in result.output

    def test_cycle_colors_without_device(self, runner, log_args):
        with patch('mutebutton.cli.commands.device.DeviceLocator.find', return_value=None):
            result = runner.invoke(cli, log_args + ['device', 'cycle-colors', '--delay', '0'])

        assert result.exit_code == 1
        assert 'No mute button found' in result.output


@pytest.mark.integration
class TestConfigCommands:
    """Test config commands against a temporary config file."""

    def test_show_defaults(self, runner, log_args, config_file):
        result = runner.invoke(cli, log_args + ['config', 'show', '--config-file', str(config_file)])

        assert result.exit_code == 0
        assert 'muted_color: Red' in result.output
        assert 'unmuted_color: Green' in result.output

    def test_set_colors(self, runner, log_args, config_file):
        result = runner.invoke(cli, log_args + [
            'config', 'set', '--config-file', str(config_file),
            '--muted-color', 'Purple', '--unmuted-color', 'NoColor',
        ])

        assert result.exit_code == 0, result.output
        data = json.loads(config_file.read_text())
        assert data['muted_color'] == 'Purple'
        assert data['unmuted_color'] == 'NoColor'

    def test_set_rejects_unknown_color(self, runner, log_args, config_file):
        result = runner.invoke(cli, log_args + [
            'config', 'set', '--config-file', str(config_file), '--muted-color', 'Orange',
        ])

        assert result.exit_code != 0
        assert not config_file.exists()

    def test_set_rejects_invalid_interval(self, runner, log_args, config_file):
        result = runner.invoke(cli, log_args + [
            'config', 'set', '--config-file', str(config_file), '--device-check-interval', '-1',
        ])

        assert result.exit_code == 1
        assert not config_file.exists()

    def test_show_single_field(self, runner, log_args, config_file):
        runner.invoke(cli, log_args + [
            'config', 'set', '--config-file', str(config_file), '--read-timeout-ms', '50',
        ])
        result = runner.invoke(cli, log_args + [
            'config', 'show', '--config-file', str(config_file), '--field', 'read_timeout_ms',
        ])

        assert result.exit_code == 0
        assert result.output.strip() == '50'

    def test_reset_field(self, runner, log_args, config_file):
        runner.invoke(cli, log_args + [
            'config', 'set', '--config-file', str(config_file), '--muted-color', 'Blue',
        ])
        result = runner.invoke(cli, log_args + [
            'config', 'reset', '--config-file', str(config_file), '--field', 'muted_color',
        ])

        assert result.exit_code == 0
        assert json.loads(config_file.read_text())['muted_color'] == 'Red'

    def test_invalid_config_file_reported(self, runner, log_args, config_file):
        config_file.write_text('{"muted_color": "Red",}')

        result = runner.invoke(cli, log_args + ['config', 'show', '--config-file', str(config_file)])

        assert result.exit_code == 1
        assert 'Error:' in result.output
