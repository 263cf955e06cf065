"""Completion client factory."""

from enum import Enum

from config.settings import Settings
from .base_client import BaseLLMClient
from .llama_cli_client import LlamaCliClient
from .output_sanitizer import OutputSanitizer


class LLMProvider(str, Enum):
    """Supported completion backends."""
    LLAMA_CLI = "llama_cli"


def create_llm_client(provider: LLMProvider, settings: Settings) -> BaseLLMClient:
    """
    Create a completion client for the specified provider.

    Args:
        provider: Completion backend
        settings: Application settings (paths, sampling, timeout)

    Returns:
        Configured completion client

    Raises:
        ValueError: If provider is not supported
    """
    if provider == LLMProvider.LLAMA_CLI:
        return LlamaCliClient(
            executable=settings.llama_cli_path,
            model_path=settings.model_path,
            ctx_size=settings.ctx_size,
            n_predict=settings.n_predict,
            temperature=settings.temperature,
            timeout=settings.timeout_seconds,
            strict_exit_code=settings.strict_exit_code,
            sanitizer=OutputSanitizer(
                noise_prefixes=settings.noise_prefixes,
                end_marker=settings.end_marker,
            ),
        )
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")
