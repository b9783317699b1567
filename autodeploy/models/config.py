"""Deployment configuration model and option normalization."""
import os
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_snake

from autodeploy.core.errors import ConfigError

DEFAULT_SOURCE_DIR = "dist"

# Option names accepted by the original build plugin
LEGACY_KEYS = {
    'remote_ip': 'remote_host',
    'remote_dir': 'remote_target_dir',
    'private_key': 'private_key_path',
    'local_dist': 'local_source_dir',
}

REQUIRED_FIELDS = {
    'remote_host': 'remote server address',
    'remote_target_dir': 'remote target directory',
}


class Transport(str, Enum):
    """File transfer mode used to push the build output."""

    COPY = "copy"
    SYNC = "sync"


TRANSPORT_ALIASES = {
    'copy': Transport.COPY,
    'scp': Transport.COPY,
    'sync': Transport.SYNC,
    'rsync': Transport.SYNC,
}


class DeploymentConfig(BaseModel):
    """Fully resolved deployment options. Immutable once built."""

    model_config = ConfigDict(extra='forbid', frozen=True, str_strip_whitespace=True)

    remote_host: str = Field(min_length=1)
    remote_user: str = Field("root", min_length=1)
    remote_port: int = Field(22, ge=1, le=65535)
    remote_target_dir: str = Field(min_length=1)
    backup_dir: str = Field(min_length=1)
    private_key_path: Optional[str] = None
    transport: Transport = Transport.COPY
    local_source_dir: str = Field(DEFAULT_SOURCE_DIR, min_length=1)
    auto_confirm: bool = False

    @model_validator(mode='before')
    @classmethod
    def default_backup_dir(cls, data: Any) -> Any:
        """Derive backup_dir from remote_target_dir unless given explicitly."""
        if isinstance(data, dict) and data.get('backup_dir') is None:
            target = data.get('remote_target_dir')
            if isinstance(target, str) and target.strip():
                base = target.strip().rstrip('/') or '/'
                data = {**data, 'backup_dir': f"{base}_backups"}
        return data

    @field_validator('remote_target_dir')
    @classmethod
    def validate_absolute(cls, v: str) -> str:
        if not PurePosixPath(v).is_absolute():
            raise ValueError(f"must be an absolute path on the remote host, got '{v}'")
        return v

    @field_validator('transport', mode='before')
    @classmethod
    def resolve_transport(cls, v):
        """Map transport names (including scp/rsync) onto Transport."""
        if isinstance(v, Transport):
            return v
        transport = TRANSPORT_ALIASES.get(str(v).strip().lower())
        if transport is None:
            supported = ", ".join(sorted(TRANSPORT_ALIASES))
            raise ValueError(f"unsupported transport '{v}' (expected one of: {supported})")
        return transport

    @field_validator('private_key_path')
    @classmethod
    def expand_key_path(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        return os.path.expanduser(v)

    @property
    def destination(self) -> str:
        """user@host login string."""
        return f"{self.remote_user}@{self.remote_host}"


def canonical_key(key: str) -> str:
    """Translate camelCase and legacy option names to field names."""
    snake = to_snake(key)
    return LEGACY_KEYS.get(snake, snake)


def normalize_options(
    options: Mapping[str, Any],
    build_output_dir: Optional[str] = None,
) -> DeploymentConfig:
    """Validate a partial option record and fill in defaults.

    Args:
        options: Raw options from a config file or a build-tool integration.
            Keys may be snake_case, camelCase or legacy plugin names.
        build_output_dir: Output directory resolved by the build tool, used
            when the options do not name a local source directory.

    Returns:
        DeploymentConfig with every field populated

    Raises:
        ConfigError: If a required option is missing or any value is invalid
    """
    resolved: Dict[str, Any] = {}
    for key, value in options.items():
        if value is None:
            continue
        resolved[canonical_key(str(key))] = value

    for field_name, description in REQUIRED_FIELDS.items():
        value = resolved.get(field_name)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Missing required option: {field_name} ({description})")

    if not resolved.get('local_source_dir'):
        resolved['local_source_dir'] = build_output_dir or DEFAULT_SOURCE_DIR

    try:
        return DeploymentConfig(**resolved)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'options'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigError(f"Invalid deployment options: {problems}") from e
