"""Base interfaces and abstract classes for services."""

from abc import ABC, abstractmethod


class CommandResult:
    """Result of a command execution."""

    def __init__(
        self, success: bool, output: str = "", error: str = "", exit_code: int = 0
    ):
        self.success = success
        self.output = output
        self.error = error
        self.exit_code = exit_code

    @property
    def combined_output(self) -> str:
        """Stdout followed by stderr, the way a terminal would show them."""
        return "".join(part for part in (self.output, self.error) if part)


class BaseService(ABC):
    """Base class for all services."""

    def __init__(self):
        self._initialized = False

    def initialize(self) -> None:
        """Initialize the service."""
        if not self._initialized:
            self._do_initialize()
            self._initialized = True

    @abstractmethod
    def _do_initialize(self) -> None:
        """Perform service-specific initialization."""
        pass

    def is_initialized(self) -> bool:
        """Check if the service is initialized."""
        return self._initialized
