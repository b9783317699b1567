"""YAML configuration loader for deploy options."""
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from autodeploy.core.errors import ConfigError
from autodeploy.models.config import DeploymentConfig, canonical_key, normalize_options

DEPLOY_SECTION = "deploy"
ENV_PREFIX = "AUTODEPLOY_"


def extract_deploy_options(document: Any) -> Dict[str, Any]:
    """Pull the deploy option record out of a parsed config document.

    The ``deploy:`` mapping is used when present; otherwise the whole
    document is treated as the option record.
    """
    if not isinstance(document, dict):
        raise ConfigError("Config file must contain a mapping of deploy options")

    options = document.get(DEPLOY_SECTION, document)
    if not isinstance(options, dict):
        raise ConfigError(f"'{DEPLOY_SECTION}' section must be a mapping")

    return {canonical_key(str(key)): value for key, value in options.items()}


def apply_env_overrides(
    options: Mapping[str, Any],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Override options with AUTODEPLOY_<FIELD> environment variables.

    Example:
        AUTODEPLOY_REMOTE_HOST=10.0.0.5 overrides remote_host
    """
    environ = os.environ if environ is None else environ
    merged = dict(options)
    for field_name in DeploymentConfig.model_fields:
        value = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if value:
            merged[field_name] = value
    return merged


class ConfigLoader:
    """Loads deploy options from a YAML config file."""

    def __init__(self, config_path: str = "autodeploy.yml"):
        self.config_path = Path(config_path)
        self.raw_config = None

    def load(self) -> Dict[str, Any]:
        """Load the YAML document from disk."""
        if not self.config_path.exists():
            raise ConfigError(f"Config file not found: {self.config_path}")

        try:
            with open(self.config_path) as f:
                self.raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not self.raw_config:
            raise ConfigError(f"Config file is empty: {self.config_path}")

        return self.raw_config

    def deploy_options(self, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Raw deploy options from the file, with environment overrides applied."""
        if self.raw_config is None:
            self.load()
        return apply_env_overrides(extract_deploy_options(self.raw_config), environ)

    def deployment_config(self, environ: Optional[Mapping[str, str]] = None) -> DeploymentConfig:
        """Fully normalized deployment config."""
        return normalize_options(self.deploy_options(environ))
