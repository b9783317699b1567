"""Local execution of ssh, scp and rsync commands."""
import shlex
import subprocess
from typing import Sequence

from autodeploy.core.errors import RemoteCommandError
from autodeploy.core.logger import get_logger

logger = get_logger(__name__)


class CommandRunner:
    """Runs argv lists synchronously, without a local shell."""

    def __init__(self, mock: bool = False):
        self.mock = mock

    def run(self, command: Sequence[str], step: str, capture: bool = False) -> str:
        """Run a command and wait for it to finish.

        Args:
            command: Program and arguments
            step: Pipeline step name used in error messages (e.g. "backup")
            capture: Capture and return stdout instead of inheriting the terminal

        Returns:
            Captured stdout, or an empty string when output is inherited

        Raises:
            RemoteCommandError: If the command exits non-zero or cannot be started
        """
        display = shlex.join(command)

        if self.mock:
            logger.info(f"MOCK: Would run {display}")
            return ""

        logger.debug(f"$ {display}")
        try:
            result = subprocess.run(
                list(command),
                capture_output=capture,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise RemoteCommandError(step, command, 127, str(e)) from e

        if result.returncode != 0:
            raise RemoteCommandError(
                step,
                command,
                result.returncode,
                result.stderr if capture else None,
            )

        return result.stdout if capture else ""
