"""Configuration models and loaders for repo-session."""

from .loader import ConfigError, load_config
from .models import RepoSessionConfig

__all__ = [
    "ConfigError",
    "RepoSessionConfig",
    "load_config",
]
