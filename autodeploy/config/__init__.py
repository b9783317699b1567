"""Configuration file loading for autodeploy."""
from autodeploy.config.loader import ConfigLoader, apply_env_overrides, extract_deploy_options

__all__ = ['ConfigLoader', 'apply_env_overrides', 'extract_deploy_options']
