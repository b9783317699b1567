"""Deploy CLI commands - deploy, rollback, backups, version."""
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from autodeploy import __version__
from autodeploy.cli_support import is_mock
from autodeploy.core.errors import AutoDeployError, NoBackupsError
from autodeploy.core.runner import CommandRunner

# Module-level console instance (will be set by register function)
console: Console = Console()


def deploy(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file path"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Local build output to upload"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Path to log file"),
):
    """Back up the live release, then upload the local build."""
    from autodeploy.cli_support import (
        handle_cli_error,
        load_deployment_config,
        print_info,
        print_success,
        print_warning,
        setup_file_logging,
    )
    from autodeploy.core.deployer import Deployer
    from autodeploy.core.terminal import ConsoleTerminal

    setup_file_logging(log_file=log_file, verbose=verbose)

    try:
        deploy_config = load_deployment_config(config)
        if yes:
            deploy_config = deploy_config.model_copy(update={'auto_confirm': True})

        deployer = Deployer(
            deploy_config,
            runner=CommandRunner(mock=is_mock()),
            terminal=ConsoleTerminal(console),
        )
        result = deployer.deploy(source_dir=source)
    except AutoDeployError as e:
        handle_cli_error(e, console, verbose=verbose)
        return

    if not result.deployed:
        print_warning(console, "Deployment skipped")
        return

    print_success(console, f"Deployed {result.source_dir} to {deploy_config.destination}:{deploy_config.remote_target_dir}")
    print_info(console, f"Previous release backup: {result.backup_file}")


def rollback(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file path"),
    to: Optional[str] = typer.Option(None, "--to", help="Backup to restore (default: newest)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Path to log file"),
):
    """Restore the remote target from a backup archive."""
    from autodeploy.cli_support import handle_cli_error, load_deployment_config, print_success, setup_file_logging
    from autodeploy.core.rollback import RollbackManager

    setup_file_logging(log_file=log_file, verbose=verbose)

    try:
        deploy_config = load_deployment_config(config)
        manager = RollbackManager(deploy_config, runner=CommandRunner(mock=is_mock()))
        result = manager.rollback(target=to)
    except AutoDeployError as e:
        handle_cli_error(e, console, verbose=verbose)
        return

    print_success(console, f"Rolled back to {result.target}")


def backups(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """List backup archives on the remote host, newest first."""
    from autodeploy.cli_support import handle_cli_error, load_deployment_config, print_warning
    from autodeploy.core.rollback import RollbackManager

    try:
        deploy_config = load_deployment_config(config)
        available = RollbackManager(deploy_config, runner=CommandRunner(mock=is_mock())).list_backups()
    except NoBackupsError as e:
        print_warning(console, str(e))
        return
    except AutoDeployError as e:
        handle_cli_error(e, console)
        return

    table = Table(title=f"Backups in {deploy_config.backup_dir}")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Archive", style="green")

    for index, backup in enumerate(available, start=1):
        table.add_row(str(index), backup)

    console.print(table)


def version():
    """Show autodeploy version."""
    console.print(f"autodeploy v{__version__}")


def register_deploy_commands(app: typer.Typer, shared_console: Console):
    """Register deploy commands with the main Typer app.

    Args:
        app: Main Typer application
        shared_console: Shared Rich console instance
    """
    global console
    console = shared_console

    app.command()(deploy)
    app.command()(rollback)
    app.command()(backups)
    app.command()(version)
