"""Publish options data models."""

import re
from dataclasses import dataclass, fields, replace
from typing import Any

from ..utils.exceptions import ValidationError

USER_PATTERN = re.compile(r"^\s*(?P<name>.*?)\s*<(?P<email>[^<>]+)>\s*$")


@dataclass
class GitUser:
    """
    Identity used for the publish commit.

    Attributes:
        email: Committer email address
        name: Optional committer name
    """

    email: str
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GitUser":
        if not data.get("email"):
            raise ValidationError("User email is required", field="user", value=data)
        return cls(email=data["email"], name=data.get("name") or None)

    @classmethod
    def parse(cls, value: str) -> "GitUser":
        """
        Parse a ``"Name <email>"`` string.

        Args:
            value: User string, e.g. ``"Jane Doe <jane@example.com>"``

        Returns:
            GitUser: Parsed user

        Raises:
            ValidationError: If the string has no ``<email>`` part
        """
        match = USER_PATTERN.match(value or "")
        if not match:
            raise ValidationError(
                'User must be given as "Name <email>"', field="user", value=value
            )
        return cls(email=match.group("email").strip(), name=match.group("name") or None)

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>" if self.name else f"<{self.email}>"


@dataclass
class PublishOptions:
    """
    Options controlling a single publish.

    Attributes:
        branch: Branch to publish to
        remote: Remote alias used for fetching and pushing
        message: Commit message
        src: Glob of files to publish, relative to the base directory
        destination: Directory within the branch the files are copied into
        dotfiles: Whether ``src`` matches dot-files
        add: Only add files, never remove existing ones
        remove: Glob of files in ``destination`` removed before copying
        history: Keep the branch history (False force-pushes a fresh branch)
        push: Whether to push after committing
        depth: Clone depth
        git: Git executable
        silent: Redact the repository URL from logs and errors
        repo: Repository URL (defaults to the URL of ``remote`` in the cwd)
        tag: Tag to create after committing
        user: Commit identity
        cache_dir: Root directory for cached clones
    """

    branch: str = "gh-pages"
    remote: str = "origin"
    message: str = "Updates"
    src: str = "**/*"
    destination: str = "."
    dotfiles: bool = False
    add: bool = False
    remove: str | None = "."
    history: bool = True
    push: bool = True
    depth: int = 1
    git: str = "git"
    silent: bool = False
    repo: str | None = None
    tag: str | None = None
    user: GitUser | None = None
    cache_dir: str | None = None

    def validate(self) -> None:
        """
        Validate the option values.

        Raises:
            ValidationError: If an option has an unusable value
        """
        for name in ("branch", "remote", "message", "src", "git"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(
                    f'The "{name}" option must be a non-empty string',
                    field=name,
                    value=value,
                )

        if not isinstance(self.depth, int) or self.depth < 1:
            raise ValidationError(
                'The "depth" option must be a positive integer',
                field="depth",
                value=self.depth,
            )

    def merged(self, overrides: dict[str, Any]) -> "PublishOptions":
        """
        Return a copy with the non-None values of ``overrides`` applied.

        Args:
            overrides: Option names mapped to new values

        Returns:
            PublishOptions: New options instance
        """
        known = {f.name for f in fields(self)}
        changes = {
            key: value
            for key, value in overrides.items()
            if key in known and value is not None
        }
        if isinstance(changes.get("user"), dict):
            changes["user"] = GitUser.from_dict(changes["user"])
        elif isinstance(changes.get("user"), str):
            changes["user"] = GitUser.parse(changes["user"])
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize options to dictionary.

        Returns:
            Dict[str, Any]: Serialized options data
        """
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["user"] = self.user.to_dict() if self.user else None
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PublishOptions":
        """
        Deserialize options from dictionary. Unknown keys are ignored.

        Args:
            data: Dictionary containing options data

        Returns:
            PublishOptions: Deserialized options instance
        """
        return cls().merged(data)

