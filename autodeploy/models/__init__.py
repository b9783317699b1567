"""Data models for autodeploy."""
from autodeploy.models.config import (
    DeploymentConfig,
    Transport,
    normalize_options,
)

__all__ = [
    'DeploymentConfig',
    'Transport',
    'normalize_options',
]
