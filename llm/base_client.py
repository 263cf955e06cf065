"""Base completion client interface."""

from abc import ABC, abstractmethod
from typing import Optional


class CompletionError(RuntimeError):
    """Base error raised when a completion cannot be produced."""


class ProcessError(CompletionError):
    """Raised when the model executable cannot be launched or exits badly."""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.exit_code = exit_code


class CompletionTimeoutError(CompletionError):
    """Raised when the model process does not exit within the timeout."""

    def __init__(self, message: str, timeout: Optional[float] = None):
        super().__init__(message)
        self.timeout = timeout


class BaseLLMClient(ABC):
    """Abstract base class for completion backends."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        Turn an assembled prompt into reply text.

        Args:
            prompt: Full prompt text (persona, memory and recent turns)

        Returns:
            Cleaned reply text, or an empty string when the model produced
            nothing usable

        Raises:
            ProcessError: If the backend cannot be started
            CompletionTimeoutError: If the backend does not finish in time
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the name of the completion provider."""
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Get the name of the model being used."""
        pass
