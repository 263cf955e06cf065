"""Completion client abstraction layer."""

from .base_client import BaseLLMClient, CompletionError, ProcessError, CompletionTimeoutError
from .output_sanitizer import OutputSanitizer
from .llama_cli_client import LlamaCliClient
from .factory import create_llm_client, LLMProvider

__all__ = [
    "BaseLLMClient",
    "CompletionError",
    "ProcessError",
    "CompletionTimeoutError",
    "OutputSanitizer",
    "LlamaCliClient",
    "create_llm_client",
    "LLMProvider",
]
