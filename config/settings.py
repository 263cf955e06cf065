"""Application settings."""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


DEFAULT_NOISE_PREFIXES = [
    "sampler",
    "llama_",
    "common_",
    "system_info",
    "generate:",
    "main:",
    "ggml_",
    "IMPORTANT:",
]


DEFAULT_FOREIGN_NAMES = ["Claude", "ChatGPT", "Qwen"]


class ConfigurationError(ValueError):
    """Raised when settings cannot be used to launch the model."""


class Settings(BaseModel):
    """Application configuration settings."""

    # Completion backend
    llm_provider: str = "llama_cli"
    llama_cli_path: Optional[str] = None
    model_path: Optional[str] = None

    # llama-cli invocation parameters
    ctx_size: int = 900
    n_predict: int = 128
    temperature: float = 0.7
    timeout_seconds: Optional[float] = 120.0  # None waits forever
    strict_exit_code: bool = False

    # Persona
    persona_name: str = "Mochi"
    foreign_assistant_names: List[str] = Field(
        default_factory=lambda: list(DEFAULT_FOREIGN_NAMES)
    )
    answer_name_questions: bool = True

    # Memory settings
    recent_window: int = 8
    summarize_after_turns: int = 12

    # Reply shaping
    max_reply_chars: int = 600
    min_sentence_chars: int = 60

    # Output cleaning
    noise_prefixes: List[str] = Field(default_factory=lambda: list(DEFAULT_NOISE_PREFIXES))
    end_marker: str = "[end of text]"

    # Logging
    verbose: bool = False

    def __init__(self, **data):
        # Auto-load paths from environment if not provided
        if data.get("llama_cli_path") is None:
            data["llama_cli_path"] = os.environ.get("LLAMA_CLI_PATH")

        if data.get("model_path") is None:
            data["model_path"] = os.environ.get("LLAMA_MODEL_PATH")

        if "timeout_seconds" not in data and os.environ.get("LLAMA_TIMEOUT_SECONDS"):
            data["timeout_seconds"] = float(os.environ["LLAMA_TIMEOUT_SECONDS"])

        super().__init__(**data)

    @field_validator("ctx_size", "n_predict", "recent_window", "summarize_after_turns", "max_reply_chars")
    @classmethod
    def _must_be_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @field_validator("min_sentence_chars")
    @classmethod
    def _must_not_be_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("temperature")
    @classmethod
    def _temperature_range(cls, value: float) -> float:
        if value < 0:
            raise ValueError("temperature must be >= 0")
        return value

    @field_validator("timeout_seconds")
    @classmethod
    def _timeout_positive(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("timeout_seconds must be positive or null")
        return value

    @model_validator(mode="after")
    def _persona_present(self) -> "Settings":
        if not self.persona_name.strip():
            raise ValueError("persona_name must not be blank")
        return self

    @classmethod
    def from_yaml(cls, path: str, **overrides) -> "Settings":
        """
        Load settings from a YAML file.

        Keys mirror the field names. Explicit keyword overrides win over the
        file; values missing from both fall back to the environment and then
        to the class defaults.

        Args:
            path: Path to the YAML config file
            **overrides: Field values that take precedence over the file

        Returns:
            Settings instance
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)

    def validate_paths(self):
        """
        Check that the executable and model file exist.

        Raises:
            ConfigurationError: Listing every problem found
        """
        problems = []

        if not self.llama_cli_path:
            problems.append("llama_cli_path is not set (use --llama-cli or LLAMA_CLI_PATH)")
        elif not Path(self.llama_cli_path).is_file():
            problems.append(f"llama-cli executable not found: {self.llama_cli_path}")

        if not self.model_path:
            problems.append("model_path is not set (use --model or LLAMA_MODEL_PATH)")
        elif not Path(self.model_path).is_file():
            problems.append(f"model file not found: {self.model_path}")

        if problems:
            raise ConfigurationError("; ".join(problems))
