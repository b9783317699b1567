"""Backup-then-upload deployment pipeline."""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from autodeploy.core.commands import RemoteCommandBuilder, backup_path
from autodeploy.core.confirmation import should_proceed
from autodeploy.core.errors import ConfigError, RemoteCommandError, TransferFailedError
from autodeploy.core.logger import get_logger
from autodeploy.core.runner import CommandRunner
from autodeploy.core.terminal import ConsoleTerminal, Terminal
from autodeploy.models.config import DeploymentConfig

logger = get_logger(__name__)


class DeployStatus(str, Enum):
    DEPLOYED = "deployed"
    SKIPPED = "skipped"


@dataclass
class DeployResult:
    """Outcome of a deploy run that did not fail."""

    status: DeployStatus
    source_dir: str
    backup_file: Optional[str] = None

    @property
    def deployed(self) -> bool:
        return self.status is DeployStatus.DEPLOYED


class Deployer:
    """Archives the live release on the server, then uploads the new build.

    The upload is never attempted unless the backup step succeeded.
    """

    def __init__(
        self,
        config: DeploymentConfig,
        runner: Optional[CommandRunner] = None,
        terminal: Optional[Terminal] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.runner = runner or CommandRunner()
        self.terminal = terminal or ConsoleTerminal()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.commands = RemoteCommandBuilder(config)

    def deploy(self, source_dir: Optional[str] = None) -> DeployResult:
        """Run the deploy pipeline.

        Args:
            source_dir: Local build output to upload; overrides the configured
                local_source_dir when given

        Returns:
            DeployResult with status DEPLOYED, or SKIPPED if not confirmed

        Raises:
            ConfigError: If the local source directory does not exist
            RemoteCommandError: If the backup step fails (nothing uploaded)
            TransferFailedError: If the upload fails after the backup was taken
        """
        source = source_dir or self.config.local_source_dir
        if not Path(source).is_dir():
            raise ConfigError(f"Local source directory not found: {source}")

        if not should_proceed(self.config, self.terminal.is_interactive(), self.terminal.prompt_line):
            logger.info("Deployment cancelled")
            return DeployResult(status=DeployStatus.SKIPPED, source_dir=source)

        logger.info(f"Deploying {source} to {self.config.destination}:{self.config.remote_target_dir}")

        backup_file = backup_path(self.config, self.clock())

        logger.info(f"Backing up current release to {backup_file}")
        self.runner.run(self.commands.backup_command(backup_file), step="backup")

        logger.info(f"Uploading {source} via {self.config.transport.value}")
        try:
            self.runner.run(self.commands.transfer_command(source), step="transfer")
        except RemoteCommandError as e:
            logger.error(f"Upload failed after backup; previous release is in {backup_file}")
            raise TransferFailedError(e, backup_file) from e

        logger.info(f"Deployment complete. Previous release archived at {backup_file}")
        return DeployResult(
            status=DeployStatus.DEPLOYED,
            source_dir=source,
            backup_file=backup_file,
        )
