"""Shared test fixtures for autodeploy tests."""
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from autodeploy.core.runner import CommandRunner
from autodeploy.models.config import normalize_options


class FakeTerminal:
    """Scripted terminal that records prompts."""

    def __init__(self, interactive: bool = True, answer: str = ""):
        self.interactive = interactive
        self.answer = answer
        self.prompts = []

    def is_interactive(self) -> bool:
        return self.interactive

    def prompt_line(self, message: str) -> str:
        self.prompts.append(message)
        return self.answer


FIXED_MOMENT = datetime(2025, 11, 7, 12, 34, 56, tzinfo=timezone.utc)


@pytest.fixture
def base_options():
    """Minimal valid deploy options."""
    return {
        'remote_host': '1.2.3.4',
        'remote_target_dir': '/var/www/app',
    }


@pytest.fixture
def deploy_config(base_options):
    """Normalized config with defaults only."""
    return normalize_options(base_options)


@pytest.fixture
def mock_runner():
    """CommandRunner stand-in that records every command."""
    runner = Mock(spec=CommandRunner)
    runner.run.return_value = ""
    return runner


@pytest.fixture
def source_dir(tmp_path):
    """A local build output directory."""
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "index.html").write_text("<h1>hi</h1>")
    return dist


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_MOMENT


@pytest.fixture
def make_terminal():
    """Factory for scripted terminals."""
    return FakeTerminal
