"""Build-tool integration: deploy once a production build has finished."""
from typing import Any, Mapping, Optional

from autodeploy.core.deployer import Deployer, DeployResult
from autodeploy.core.logger import get_logger
from autodeploy.core.runner import CommandRunner
from autodeploy.core.terminal import Terminal
from autodeploy.models.config import normalize_options

logger = get_logger(__name__)

HOOK_NAME = "auto-deploy"
BUILD_COMMAND = "build"


class AutoDeployHook:
    """Lifecycle hook a build tool calls around a build.

    The host calls :meth:`config_resolved` once it knows which command is
    running and where output goes, then :meth:`build_finished` after a
    successful build.
    """

    name = HOOK_NAME

    def __init__(
        self,
        options: Mapping[str, Any],
        runner: Optional[CommandRunner] = None,
        terminal: Optional[Terminal] = None,
    ):
        self.options = dict(options)
        # Fail on bad options when the build starts, not after it finishes
        self.config = normalize_options(self.options)
        self.runner = runner
        self.terminal = terminal
        self.command: Optional[str] = None
        self.output_dir: Optional[str] = None

    def config_resolved(self, command: str, output_dir: Optional[str] = None):
        self.command = command
        self.output_dir = output_dir

    def build_finished(self, output_dir: Optional[str] = None) -> Optional[DeployResult]:
        """Deploy the build output. Does nothing outside production builds.

        An explicit local_source_dir option wins over the build tool's
        output directory.
        """
        if self.command != BUILD_COMMAND:
            logger.debug(f"Skipping deploy for '{self.command}' run")
            return None

        config = normalize_options(self.options, build_output_dir=output_dir or self.output_dir)
        deployer = Deployer(config, runner=self.runner, terminal=self.terminal)
        return deployer.deploy()


def auto_deploy(
    options: Mapping[str, Any],
    runner: Optional[CommandRunner] = None,
    terminal: Optional[Terminal] = None,
) -> AutoDeployHook:
    """Create the build hook from raw deployment options."""
    return AutoDeployHook(options, runner=runner, terminal=terminal)
