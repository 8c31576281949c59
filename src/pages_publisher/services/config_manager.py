"""Configuration management service for Pages Publisher."""

import logging
from pathlib import Path
from typing import Any

from ..models.config import PublisherConfig
from ..models.options import PublishOptions
from ..utils.path_manager import PathManager


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


class ConfigManager:
    """
    Manages publisher configuration loading and option resolution.

    Options are resolved with command line values taking precedence over the
    configured defaults, which take precedence over the built-in defaults.
    """

    def __init__(self, config_file: Path | None = None):
        """
        Initialize the configuration manager.

        Args:
            config_file: Optional path to config file (uses default if None)
        """
        self._config_file = config_file or PathManager.get_config_file(
            CONFIG_FILENAME
        )
        self._config: PublisherConfig | None = None

    @property
    def config_file(self) -> Path:
        return self._config_file

    @property
    def config(self) -> PublisherConfig:
        """
        Get the current configuration, loading it if necessary.

        Returns:
            PublisherConfig: Current configuration
        """
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> PublisherConfig:
        """
        Load configuration from file.

        Returns:
            PublisherConfig: Loaded configuration

        Raises:
            ConfigurationError: If the file exists but is invalid
        """
        logger.debug(f"Loading configuration from {self._config_file}")
        self._config = PublisherConfig.load(self._config_file)
        return self._config

    def resolve_options(self, overrides: dict[str, Any] | None = None) -> PublishOptions:
        """
        Build publish options from the configured defaults and overrides.

        Args:
            overrides: Option values that take precedence; None values are ignored

        Returns:
            PublishOptions: Resolved options
        """
        options = self.config.to_options()
        if overrides:
            options = options.merged(overrides)
        return options
