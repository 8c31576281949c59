"""Data models for publish options and configuration."""

from .config import PublisherConfig
from .options import GitUser, PublishOptions

__all__ = ["GitUser", "PublishOptions", "PublisherConfig"]
