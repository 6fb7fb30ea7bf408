"""
Infrastructure - Configuration and logging around the entity core.
"""

from .configuration import (
    SyncConfig, RemoteConfig, LoggingConfig, Environment, get_config, set_config
)
from .log import configure_logging

__all__ = [
    "SyncConfig", "RemoteConfig", "LoggingConfig", "Environment",
    "get_config", "set_config", "configure_logging",
]
