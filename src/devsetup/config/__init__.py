"""Configuration loading for devsetup."""

from devsetup.config.loader import ConfigError, load_config
from devsetup.config.models import GitSettings, SetupConfig

__all__ = ["ConfigError", "load_config", "GitSettings", "SetupConfig"]
