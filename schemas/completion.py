"""Completion request/result schemas."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Why a turn or a compaction did not produce model text."""
    LAUNCH_FAILURE = "launch_failure"
    EMPTY_OUTPUT = "empty_output"
    TIMEOUT = "timeout"
    COMPACTION_FAILURE = "compaction_failure"


class CompletionRequest(BaseModel):
    """One prompt plus the fixed llama-cli sampling parameters."""
    prompt: str
    ctx_size: int = Field(900, description="Context window passed as --ctx-size")
    n_predict: int = Field(128, description="Max new tokens passed as --n-predict")
    temperature: float = Field(0.7, description="Sampling temperature passed as --temp")


class CompletionResult(BaseModel):
    """Outcome of a single llama-cli run."""
    text: str
    raw: str = ""
    exit_code: Optional[int] = None
    elapsed_seconds: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
