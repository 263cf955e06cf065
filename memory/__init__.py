"""Conversation memory and compaction."""

from .models import Speaker, Turn
from .conversation_store import ConversationStore
from .summarizer import SummarizationCoordinator, CompactionState

__all__ = [
    "Speaker",
    "Turn",
    "ConversationStore",
    "SummarizationCoordinator",
    "CompactionState",
]
