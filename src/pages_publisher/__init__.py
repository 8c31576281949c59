"""Publish a directory of static files to a branch of a git repository."""

__version__ = "0.1.0"

from .app import main
from .models.options import GitUser, PublishOptions
from .services.git_service import Git
from .services.publish_service import (
    PagesPublisher,
    PublishResult,
    clean_cache,
    publish,
)

__all__ = [
    "Git",
    "GitUser",
    "PagesPublisher",
    "PublishOptions",
    "PublishResult",
    "__version__",
    "clean_cache",
    "main",
    "publish",
]
