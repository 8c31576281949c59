"""Service layer for git operations and publishing."""

from .config_manager import ConfigManager
from .git_service import Git
from .publish_service import PagesPublisher, PublishResult, clean_cache, publish

__all__ = [
    "ConfigManager",
    "Git",
    "PagesPublisher",
    "PublishResult",
    "clean_cache",
    "publish",
]
