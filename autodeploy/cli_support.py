"""Shared utilities for autodeploy CLI modules."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from autodeploy.config.loader import ConfigLoader
from autodeploy.models.config import DeploymentConfig

# Default config search paths, checked in order
CONFIG_PATHS = [
    "./autodeploy.yml",
    "./autodeploy.yaml",
    "./.autodeploy.yml",
]


def find_config(config_path: Optional[str] = None) -> str:
    """Locate the active autodeploy configuration file."""
    if config_path:
        return config_path

    if env_config := os.environ.get("AUTODEPLOY_CONFIG"):
        return env_config

    for path in CONFIG_PATHS:
        if Path(path).exists():
            return path

    return "autodeploy.yml"


def is_mock() -> bool:
    """Return True when CLI runs in mock mode."""
    return os.environ.get("AUTODEPLOY_MOCK") == "1"


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> None:
    """Set up file logging for CLI commands."""
    from autodeploy.core.logger import setup_file_logging as _setup_file_logging
    _setup_file_logging(log_file=log_file, verbose=verbose)


def load_deployment_config(config_path: Optional[str]) -> DeploymentConfig:
    """Find, load and normalize the deploy options for a CLI command."""
    loader = ConfigLoader(find_config(config_path))
    return loader.deployment_config()


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Print an error and exit the CLI.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    console.print(f"[green]{prefix}[/green] {message}", highlight=False)


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    console.print(f"[yellow]{prefix}[/yellow] {message}", highlight=False)


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    console.print(f"[cyan]{prefix}[/cyan] {message}", highlight=False)
