"""Deploy, backup and rollback orchestration."""
from autodeploy.core.errors import (
    AutoDeployError,
    ConfigError,
    NoBackupsError,
    PromptUnavailableError,
    RemoteCommandError,
    TransferFailedError,
    UnknownBackupError,
)

__all__ = [
    'AutoDeployError',
    'ConfigError',
    'NoBackupsError',
    'PromptUnavailableError',
    'RemoteCommandError',
    'TransferFailedError',
    'UnknownBackupError',
]
