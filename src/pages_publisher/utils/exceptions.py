"""Custom exceptions for the publisher."""

from typing import Any
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for better classification."""

    GIT_OPERATION = "git_operation"
    FILE_SYSTEM = "file_system"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    PUBLISH = "publish"


class PublisherError(Exception):
    """Base exception for Pages Publisher."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.PUBLISH,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        details: dict[str, Any] | None = None,
        suggested_action: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.suggested_action = suggested_action

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "details": self.details,
            "suggested_action": self.suggested_action,
            "type": self.__class__.__name__,
        }


class GitError(PublisherError):
    """Exception for Git-related errors."""

    def __init__(
        self,
        message: str,
        command: str | None = None,
        exit_code: int | None = None,
        stderr: str | None = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.GIT_OPERATION, **kwargs)
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        if command:
            self.details.update(
                {"command": command, "exit_code": exit_code, "stderr": stderr}
            )


class ProcessError(GitError):
    """A spawned process exited with a non-zero status."""

    def __init__(self, code: int | None, message: str, command: str | None = None):
        super().__init__(message, command=command, exit_code=code, stderr=message)

    @property
    def code(self) -> int | None:
        return self.exit_code


class ValidationError(PublisherError):
    """Exception for validation errors."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        **kwargs,
    ):
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
            **kwargs,
        )
        self.field = field
        self.value = value
        if field:
            self.details.update(
                {"field": field, "value": str(value) if value is not None else None}
            )


class ConfigurationError(PublisherError):
    """Exception for configuration-related errors."""

    def __init__(self, message: str, config_file: str | None = None, **kwargs):
        super().__init__(message, category=ErrorCategory.CONFIGURATION, **kwargs)
        self.config_file = config_file
        if config_file:
            self.details.update({"config_file": config_file})


class FileSystemError(PublisherError):
    """Exception for file system-related errors."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        operation: str | None = None,
        **kwargs,
    ):
        super().__init__(message, category=ErrorCategory.FILE_SYSTEM, **kwargs)
        self.path = path
        self.operation = operation
        if path:
            self.details.update({"path": path, "operation": operation})


class PathError(PublisherError):
    """Exception for path-related errors."""

    def __init__(self, message: str, path: str | None = None, **kwargs):
        super().__init__(message, category=ErrorCategory.FILE_SYSTEM, **kwargs)
        self.path = path
        if path:
            self.details.update({"path": path})


class PublishError(PublisherError):
    """Exception raised when the publish sequence cannot continue."""

    def __init__(self, message: str, repo: str | None = None, **kwargs):
        super().__init__(message, category=ErrorCategory.PUBLISH, **kwargs)
        self.repo = repo
        if repo:
            self.details.update({"repo": repo})
