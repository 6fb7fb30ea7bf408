"""
Configuration Management for StarBind Applications

🔧 Unified Configuration System:
Settings for the pieces that live around the entity core: the HTTP remote
client and logging. Entities and collections never read this module; the
configured client is injected into them.
"""

from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from enum import Enum
import os


class Environment(Enum):
    """Application environments"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


@dataclass
class RemoteConfig:
    """HTTP remote client configuration"""
    base_url: str = "http://localhost:3000"
    timeout: float = 10.0
    headers: Dict[str, str] = field(default_factory=lambda: {"Accept": "application/json"})


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class SyncConfig:
    """Complete configuration"""
    environment: Environment = Environment.DEVELOPMENT
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def for_environment(cls, environment: Environment) -> 'SyncConfig':
        """Create configuration for specific environment"""
        config = cls(environment=environment)

        if environment == Environment.DEVELOPMENT:
            config.logging.level = "DEBUG"

        elif environment == Environment.TESTING:
            config.remote.timeout = 1.0
            config.logging.level = "WARNING"

        elif environment == Environment.PRODUCTION:
            config.logging.level = "INFO"

        return config

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'SyncConfig':
        """Create configuration from dictionary"""
        environment = Environment(config_dict.get("environment", Environment.DEVELOPMENT.value))
        config = cls.for_environment(environment)

        for key, value in config_dict.get("remote", {}).items():
            if hasattr(config.remote, key):
                setattr(config.remote, key, value)

        for key, value in config_dict.get("logging", {}).items():
            if hasattr(config.logging, key):
                setattr(config.logging, key, value)

        return config

    @classmethod
    def from_environment(cls) -> 'SyncConfig':
        """Create configuration from environment variables"""
        environment = Environment(os.getenv('STARBIND_ENV', 'development'))
        config = cls.for_environment(environment)

        if os.getenv('STARBIND_BASE_URL'):
            config.remote.base_url = os.getenv('STARBIND_BASE_URL')

        if os.getenv('STARBIND_TIMEOUT'):
            config.remote.timeout = float(os.getenv('STARBIND_TIMEOUT'))

        if os.getenv('STARBIND_LOG_LEVEL'):
            config.logging.level = os.getenv('STARBIND_LOG_LEVEL').upper()

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary"""
        return {
            "environment": self.environment.value,
            "remote": {
                "base_url": self.remote.base_url,
                "timeout": self.remote.timeout,
                "headers": dict(self.remote.headers),
            },
            "logging": {
                "level": self.logging.level,
                "format": self.logging.format,
                "file_path": self.logging.file_path,
                "max_file_size": self.logging.max_file_size,
                "backup_count": self.logging.backup_count,
            },
        }


# Global configuration management
_current_config: Optional[SyncConfig] = None


def set_config(config: SyncConfig):
    """Set the global configuration"""
    global _current_config
    _current_config = config


def get_config() -> SyncConfig:
    """Get the current global configuration"""
    global _current_config

    if _current_config is None:
        # Auto-create from environment if not set
        _current_config = SyncConfig.from_environment()

    return _current_config


__all__ = [
    "SyncConfig", "RemoteConfig", "LoggingConfig", "Environment",
    "set_config", "get_config",
]
