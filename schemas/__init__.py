"""Pydantic schemas for the local chat assistant."""

from .completion import CompletionRequest, CompletionResult, FailureKind
from .chat import ChatReply

__all__ = [
    "CompletionRequest",
    "CompletionResult",
    "FailureKind",
    "ChatReply",
]
