#!/usr/bin/env python3
"""autodeploy CLI - ship a static build to a server, roll back when needed."""

import typer
from rich.console import Console

from autodeploy.cli_deploy_commands import register_deploy_commands

app = typer.Typer(
    name="autodeploy",
    help="""autodeploy - Deploy a static build over SSH with automatic backups

Every deploy archives the live release on the server first.

Quick start:
  autodeploy deploy --source dist   # Back up, then upload dist/
  autodeploy backups                # List archived releases
  autodeploy rollback               # Restore the newest backup
""",
    add_completion=False,
)

console = Console()

register_deploy_commands(app, console)


def main():
    app()


if __name__ == "__main__":
    main()
