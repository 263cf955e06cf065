"""Chat turn result schema."""

from typing import Optional
from pydantic import BaseModel

from .completion import FailureKind


class ChatReply(BaseModel):
    """Assistant reply handed back to the front end."""
    text: str
    failure: Optional[FailureKind] = None
    compacted: bool = False
    compaction_failure: Optional[FailureKind] = None  # set when a due compaction did not happen

    @property
    def ok(self) -> bool:
        return self.failure is None
