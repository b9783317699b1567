"""Tests for the console-backed terminal."""
from unittest.mock import Mock, patch

import pytest
from rich.console import Console

from autodeploy.core.deployer import Deployer, DeployStatus
from autodeploy.core.errors import PromptUnavailableError
from autodeploy.core.terminal import ConsoleTerminal
from autodeploy.models.config import normalize_options


class TestIsInteractive:
    """Both standard streams must be TTYs."""

    @pytest.mark.parametrize('stdin_tty,stdout_tty,expected', [
        (True, True, True),
        (True, False, False),
        (False, True, False),
        (False, False, False),
    ])
    def test_requires_both_ttys(self, stdin_tty, stdout_tty, expected):
        with patch('sys.stdin') as stdin, patch('sys.stdout') as stdout:
            stdin.isatty.return_value = stdin_tty
            stdout.isatty.return_value = stdout_tty

            assert ConsoleTerminal(console=Mock(spec=Console)).is_interactive() is expected


class TestPromptLine:
    """Reading the operator's answer."""

    def test_returns_console_input(self):
        console = Mock(spec=Console)
        console.input.return_value = 'y'

        assert ConsoleTerminal(console=console).prompt_line('Deploy? ') == 'y'
        console.input.assert_called_once_with('Deploy? ')

    def test_eof_raises_prompt_unavailable(self):
        console = Mock(spec=Console)
        console.input.side_effect = EOFError()

        with pytest.raises(PromptUnavailableError):
            ConsoleTerminal(console=console).prompt_line('Deploy? ')

    def test_eof_at_prompt_skips_deploy(self, base_options, source_dir, mock_runner):
        """Closed stdin during confirmation skips the deploy without running anything."""
        config = normalize_options({**base_options, 'local_source_dir': str(source_dir)})
        console = Mock(spec=Console)
        console.input.side_effect = EOFError()
        terminal = ConsoleTerminal(console=console)

        with patch.object(ConsoleTerminal, 'is_interactive', return_value=True):
            result = Deployer(config, runner=mock_runner, terminal=terminal).deploy()

        assert result.status is DeployStatus.SKIPPED
        mock_runner.run.assert_not_called()
