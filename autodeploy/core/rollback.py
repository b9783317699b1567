"""Restore the remote target directory from a backup archive."""
import posixpath
from dataclasses import dataclass
from typing import List, Optional

from autodeploy.core.commands import RemoteCommandBuilder, parse_backup_listing
from autodeploy.core.errors import NoBackupsError, UnknownBackupError
from autodeploy.core.logger import get_logger
from autodeploy.core.runner import CommandRunner
from autodeploy.models.config import DeploymentConfig

logger = get_logger(__name__)


@dataclass
class RollbackResult:
    target: str
    available: List[str]


class RollbackManager:
    """Lists remote backups and restores one of them (newest by default)."""

    def __init__(self, config: DeploymentConfig, runner: Optional[CommandRunner] = None):
        self.config = config
        self.runner = runner or CommandRunner()
        self.commands = RemoteCommandBuilder(config)

    def list_backups(self) -> List[str]:
        """Return backup archive paths, newest first.

        Order comes from the remote listing and is not re-sorted here.

        Raises:
            NoBackupsError: If the backup directory holds no archives
            RemoteCommandError: If the listing command fails
        """
        output = self.runner.run(
            self.commands.list_backups_command(),
            step="list-backups",
            capture=True,
        )
        backups = parse_backup_listing(output)
        if not backups:
            raise NoBackupsError(
                f"No backups found in {self.config.backup_dir} on {self.config.remote_host}. "
                "Deploy at least once before rolling back."
            )
        return backups

    def select_target(self, backups: List[str], target: Optional[str] = None) -> str:
        """Pick the archive to restore.

        Args:
            backups: Listing, newest first
            target: Explicit archive (full path or file name); newest if None

        Raises:
            UnknownBackupError: If ``target`` is not in the listing
        """
        if target is None:
            return backups[0]

        for backup in backups:
            if target in (backup, posixpath.basename(backup)):
                return backup

        raise UnknownBackupError(
            f"Backup '{target}' not found in {self.config.backup_dir}"
        )

    def rollback(self, target: Optional[str] = None) -> RollbackResult:
        """Restore a backup over the remote target directory.

        Raises:
            NoBackupsError: If there is nothing to restore
            UnknownBackupError: If an explicit target is not available
            RemoteCommandError: If listing or extraction fails
        """
        logger.info(f"Fetching backup list from {self.config.remote_host}")
        backups = self.list_backups()

        logger.info("Available backups:")
        for index, backup in enumerate(backups, start=1):
            logger.info(f"  {index}. {backup}")

        selected = self.select_target(backups, target)
        logger.info(f"Rolling back to {selected}")

        self.runner.run(self.commands.restore_command(selected), step="restore")

        logger.info(f"Rollback complete, restored {selected}")
        return RollbackResult(target=selected, available=backups)
