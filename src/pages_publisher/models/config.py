"""Configuration data model for Pages Publisher."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..utils.exceptions import ConfigurationError
from .options import PublishOptions


logger = logging.getLogger(__name__)


@dataclass
class PublisherConfig:
    """
    On-disk publisher configuration.

    Attributes:
        version: Configuration version for migration purposes
        defaults: Publish option defaults, keyed by option name
        log_level: Default logging level
        log_to_file: Whether to also write rotating log files
    """

    version: str = "1.0.0"
    defaults: dict[str, Any] = field(default_factory=dict)
    log_level: str = "INFO"
    log_to_file: bool = False

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize configuration to dictionary.

        Returns:
            Dict[str, Any]: Serialized configuration data
        """
        return {
            "version": self.version,
            "defaults": dict(self.defaults),
            "log_level": self.log_level,
            "log_to_file": self.log_to_file,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PublisherConfig":
        """
        Deserialize configuration from dictionary.

        Args:
            data: Dictionary containing configuration data

        Returns:
            PublisherConfig: Deserialized configuration instance

        Raises:
            ConfigurationError: If ``defaults`` is not a mapping
        """
        defaults = data.get("defaults", {})
        if not isinstance(defaults, dict):
            raise ConfigurationError('"defaults" must be an object')

        return cls(
            version=data.get("version", "1.0.0"),
            defaults=defaults,
            log_level=data.get("log_level", "INFO"),
            log_to_file=data.get("log_to_file", False),
        )

    def to_options(self) -> PublishOptions:
        """Build publish options from the configured defaults."""
        return PublishOptions.from_dict(self.defaults)

    @classmethod
    def load(cls, config_file: Path) -> "PublisherConfig":
        """
        Load configuration from a JSON file.

        A missing file yields the default configuration.

        Args:
            config_file: Path to the configuration file

        Returns:
            PublisherConfig: Loaded configuration

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        if not config_file.exists():
            logger.debug(f"Config file not found, using defaults: {config_file}")
            return cls()

        try:
            with open(config_file, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in configuration file: {e}",
                config_file=str(config_file),
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read configuration file: {e}",
                config_file=str(config_file),
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration file must contain a JSON object",
                config_file=str(config_file),
            )

        config = cls.from_dict(data)
        logger.debug(f"Configuration loaded from {config_file}")
        return config

    def save(self, config_file: Path) -> bool:
        """
        Save configuration to a JSON file.

        Args:
            config_file: Path to save the configuration file

        Returns:
            bool: True if save was successful, False otherwise
        """
        try:
            config_file.parent.mkdir(parents=True, exist_ok=True)
            with open(config_file, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
            logger.info(f"Configuration saved to {config_file}")
            return True
        except OSError as e:
            logger.error(f"Failed to save configuration to {config_file}: {e}")
            return False
