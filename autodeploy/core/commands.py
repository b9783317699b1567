"""Build ssh, scp and rsync invocations from a deployment config.

Nothing here executes anything. Every builder returns an argv list that
:class:`autodeploy.core.runner.CommandRunner` runs without a local shell.
Commands that must run several steps on the remote side (mkdir + tar,
tar extract) are passed to ssh as one argument with each path quoted for
the remote shell.
"""
import os
import shlex
from datetime import datetime, timezone
from typing import List, Optional

from autodeploy.core.errors import ConfigError
from autodeploy.models.config import DeploymentConfig, Transport

TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"
BACKUP_SUFFIX = "_backup.tar.gz"


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment (UTC) as YYYY-MM-DD-HH-MM-SS.

    Lexicographic order of the result matches chronological order.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


def backup_path(config: DeploymentConfig, moment: Optional[datetime] = None) -> str:
    """Remote archive path for a deployment started at ``moment``."""
    return f"{config.backup_dir.rstrip('/')}/{format_timestamp(moment)}{BACKUP_SUFFIX}"


def parse_backup_listing(output: str) -> List[str]:
    """Split listing output into archive paths, keeping the remote order."""
    return [line.strip() for line in output.splitlines() if line.strip()]


def local_path(path: str) -> str:
    """Anchor a relative path at ``./`` so scp and rsync never read ``a:b`` as host:path."""
    if os.path.isabs(path) or path.startswith("./"):
        return path
    return f"./{path}"


class RemoteCommandBuilder:
    """Turns a DeploymentConfig into remote-execution commands."""

    def __init__(self, config: DeploymentConfig):
        if config.transport not in (Transport.COPY, Transport.SYNC):
            raise ConfigError(f"Unsupported transport: {config.transport!r}")
        self.config = config
        self._ssh_base = self._build_ssh_base()

    def _key_args(self) -> List[str]:
        if self.config.private_key_path:
            return ["-i", self.config.private_key_path]
        return []

    def _build_ssh_base(self) -> List[str]:
        return [
            "ssh",
            "-p", str(self.config.remote_port),
            *self._key_args(),
            self.config.destination,
        ]

    def ssh_base(self) -> List[str]:
        """ssh invocation shared by every remote command."""
        return list(self._ssh_base)

    def remote(self, script: str) -> List[str]:
        """Run ``script`` through the remote login shell."""
        return [*self._ssh_base, script]

    def backup_command(self, backup_file: str) -> List[str]:
        """Create the backup directory and archive the whole target directory."""
        script = (
            f"mkdir -p {shlex.quote(self.config.backup_dir)} && "
            f"tar -zcvf {shlex.quote(backup_file)} -C {shlex.quote(self.config.remote_target_dir)} ."
        )
        return self.remote(script)

    def transfer_command(self, source_dir: Optional[str] = None) -> List[str]:
        """Upload the local build output to the remote target directory.

        The source directory itself is copied, so ``dist`` lands at
        ``<remote_target_dir>/dist``.
        """
        source = local_path(source_dir or self.config.local_source_dir)
        target = f"{self.config.destination}:{self.config.remote_target_dir}"

        if self.config.transport is Transport.COPY:
            return [
                "scp", "-r",
                "-P", str(self.config.remote_port),
                *self._key_args(),
                source,
                target,
            ]
        if self.config.transport is Transport.SYNC:
            remote_shell = shlex.join([
                "ssh", "-p", str(self.config.remote_port), *self._key_args(),
            ])
            return ["rsync", "-avz", "-e", remote_shell, source, target]

        raise ConfigError(f"Unsupported transport: {self.config.transport!r}")

    def list_backups_command(self) -> List[str]:
        """List archives in the backup directory, newest first.

        An empty or missing backup directory produces empty output rather
        than a failure, so the caller can tell "no backups" apart from
        "ssh failed".
        """
        pattern = f"{shlex.quote(self.config.backup_dir.rstrip('/'))}/*.tar.gz"
        return self.remote(f"ls -1t {pattern} 2>/dev/null || true")

    def restore_command(self, archive: str) -> List[str]:
        """Extract an archive over the target directory."""
        script = (
            f"tar -zxvf {shlex.quote(archive)} -C {shlex.quote(self.config.remote_target_dir)}"
        )
        return self.remote(script)
