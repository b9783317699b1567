"""Error types raised by deploy and rollback operations."""
import shlex
from typing import Optional, Sequence


class AutoDeployError(Exception):
    """Base class for all autodeploy failures."""
    pass


class ConfigError(AutoDeployError):
    """Raised when deployment options are missing or invalid."""
    pass


class PromptUnavailableError(AutoDeployError):
    """Raised when no operator answer can be read. Treated as a decline."""
    pass


class RemoteCommandError(AutoDeployError):
    """Raised when an ssh, scp or rsync invocation exits non-zero."""

    def __init__(
        self,
        step: str,
        command: Sequence[str],
        returncode: int,
        output: Optional[str] = None,
    ):
        self.step = step
        self.command = list(command)
        self.returncode = returncode
        self.output = (output or "").strip()
        super().__init__(self._describe())

    def _describe(self) -> str:
        message = f"{self.step} failed (exit {self.returncode}): {shlex.join(self.command)}"
        if self.output:
            message += f"\n{self.output}"
        return message


class TransferFailedError(RemoteCommandError):
    """Upload failed after the remote backup was taken.

    The remote target may now hold a partial upload; ``backup_file`` is the
    archive to restore from.
    """

    def __init__(self, cause: RemoteCommandError, backup_file: str):
        self.backup_file = backup_file
        super().__init__(cause.step, cause.command, cause.returncode, cause.output)

    def _describe(self) -> str:
        return (
            f"{super()._describe()}\n"
            f"The remote target may hold a partial upload. "
            f"Previous release archived at {self.backup_file}; "
            f"run 'autodeploy rollback' to restore it."
        )


class NoBackupsError(AutoDeployError):
    """Raised when rollback finds no archives in the backup directory."""
    pass


class UnknownBackupError(AutoDeployError):
    """Raised when a requested rollback target is not in the backup listing."""
    pass
