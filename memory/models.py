"""Memory data models."""

from enum import Enum
from pydantic import BaseModel, ConfigDict


class Speaker(str, Enum):
    """Who produced a turn."""
    USER = "user"
    ASSISTANT = "assistant"


class Turn(BaseModel):
    """A single utterance in the conversation. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    speaker: Speaker
    text: str
