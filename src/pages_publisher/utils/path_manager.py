"""OS-specific path management utilities."""

import os
import shutil
import sys
from pathlib import Path

from ..utils.exceptions import PathError


class PathManager:
    """Manages OS-specific paths for configuration, logs, and the clone cache."""

    APP_NAME = "PagesPublisher"
    CACHE_ENV_VAR = "PAGES_PUBLISHER_CACHE_DIR"

    @staticmethod
    def get_config_dir() -> Path:
        """
        Get OS-appropriate configuration directory.

        Returns:
            Path to configuration directory
        """
        if sys.platform == "darwin":  # macOS
            base_dir = Path.home() / "Library" / "Application Support"
        elif sys.platform == "win32":  # Windows
            base_dir = Path.home() / "AppData" / "Roaming"
        else:  # Linux and other Unix-like systems
            base_dir = Path.home() / ".config"

        return base_dir / PathManager.APP_NAME

    @staticmethod
    def get_log_dir() -> Path:
        """
        Get OS-appropriate log directory.

        Returns:
            Path to log directory
        """
        if sys.platform == "darwin":  # macOS
            base_dir = Path.home() / "Library" / "Logs"
        elif sys.platform == "win32":  # Windows
            base_dir = Path.home() / "AppData" / "Local" / PathManager.APP_NAME / "Logs"
        else:  # Linux and other Unix-like systems
            base_dir = Path.home() / ".local" / "share" / "pages-publisher" / "logs"

        return base_dir / PathManager.APP_NAME if sys.platform != "win32" else base_dir

    @staticmethod
    def get_cache_dir() -> Path:
        """
        Get the clone cache directory.

        The ``PAGES_PUBLISHER_CACHE_DIR`` environment variable takes precedence
        over the OS-appropriate default.

        Returns:
            Path to cache directory
        """
        override = os.environ.get(PathManager.CACHE_ENV_VAR)
        if override:
            return Path(override)

        if sys.platform == "darwin":  # macOS
            base_dir = Path.home() / "Library" / "Caches"
        elif sys.platform == "win32":  # Windows
            base_dir = (
                Path.home() / "AppData" / "Local" / PathManager.APP_NAME / "Cache"
            )
        else:  # Linux and other Unix-like systems
            base_dir = Path.home() / ".cache"

        return base_dir / PathManager.APP_NAME if sys.platform != "win32" else base_dir

    @staticmethod
    def get_config_file(filename: str) -> Path:
        """
        Get path to a configuration file.

        Args:
            filename: Name of the configuration file

        Returns:
            Path to the configuration file
        """
        return PathManager.get_config_dir() / filename

    @staticmethod
    def get_clone_dir(repo: str, cache_dir: str | Path | None = None) -> Path:
        """
        Get the cached clone directory for a repository URL.

        Args:
            repo: Repository URL
            cache_dir: Optional cache root (uses the default cache dir if None)

        Returns:
            Path to the clone directory for this repository
        """
        if not repo:
            raise PathError("Repository URL must be a non-empty string")

        root = Path(cache_dir) if cache_dir else PathManager.get_cache_dir()
        return root / PathManager.get_safe_filename(repo)

    @staticmethod
    def remove_cache_dir(cache_dir: str | Path | None = None) -> bool:
        """
        Remove the clone cache directory and everything in it.

        Args:
            cache_dir: Optional cache root (uses the default cache dir if None)

        Returns:
            True if a directory was removed, False if there was nothing to remove

        Raises:
            PathError: If the directory cannot be removed
        """
        root = Path(cache_dir) if cache_dir else PathManager.get_cache_dir()
        if not root.exists():
            return False

        try:
            shutil.rmtree(root)
        except OSError as e:
            raise PathError(f"Failed to remove cache directory {root}: {e}", path=str(root)) from e
        return True

    @staticmethod
    def get_safe_filename(filename: str) -> str:
        """
        Convert a string to a safe filename by removing/replacing invalid characters.

        Args:
            filename: Original filename

        Returns:
            Safe filename string
        """
        if not filename:
            return "unnamed"

        # Characters that are invalid in filenames on various OS
        invalid_chars = '<>:"/\\|?*'

        # Replace invalid characters with underscores
        safe_name = filename
        for char in invalid_chars:
            safe_name = safe_name.replace(char, "_")

        # Remove control characters
        safe_name = "".join(char for char in safe_name if ord(char) >= 32)

        # Trim whitespace and dots (problematic on Windows)
        safe_name = safe_name.strip(". ")

        # Ensure it's not empty after cleaning
        if not safe_name:
            return "unnamed"

        # Truncate if too long (255 is typical filesystem limit)
        if len(safe_name) > 255:
            safe_name = safe_name[:255]

        return safe_name
