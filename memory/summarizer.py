"""Long-term memory compaction."""

import logging
from enum import Enum
from typing import Optional

from llm.base_client import BaseLLMClient
from schemas.completion import FailureKind
from .conversation_store import ConversationStore

logger = logging.getLogger(__name__)

SUMMARY_PROMPT_TEMPLATE = (
    "You are summarizing a chat between a user and an assistant named {persona}.\n"
    "Write 3–6 very short bullet points capturing only important, long-term facts about the user, "
    "their preferences, and any ongoing tasks or projects.\n"
    "Do not include greetings or small talk. Do not mention yourself.\n\n"
    "Conversation:\n"
)


class CompactionState(str, Enum):
    """Coordinator state."""
    IDLE = "idle"
    COMPACTING = "compacting"


class SummarizationCoordinator:
    """Replaces long history with a summary plus the recent window."""

    def __init__(self, store: ConversationStore, llm_client: BaseLLMClient):
        """
        Initialize summarization coordinator.

        Args:
            store: Conversation store to compact
            llm_client: Completion backend used to write the summary
        """
        self.store = store
        self.llm_client = llm_client
        self.state = CompactionState.IDLE
        self.last_error: Optional[Exception] = None
        self.last_failure: Optional[FailureKind] = None

    def build_prompt(self) -> str:
        header = SUMMARY_PROMPT_TEMPLATE.format(persona=self.store.persona_name)
        return header + self.store.build_compaction_source()

    def maybe_run(self) -> bool:
        """
        Compact the conversation if the store says it is due.

        Returns:
            True if a new summary was stored and history pruned
        """
        self.last_failure = None
        if not self.store.should_compact():
            return False
        return self.compact()

    def compact(self) -> bool:
        """
        Summarize the full history and prune it.

        Failures and blank summaries leave the store untouched and are only
        logged.

        Returns:
            True on success
        """
        self.state = CompactionState.COMPACTING
        self.last_error = None
        self.last_failure = None
        try:
            summary = self.llm_client.complete(self.build_prompt())

            if not summary or not summary.strip():
                logger.warning("Summarization returned nothing; keeping existing memory")
                self.last_failure = FailureKind.COMPACTION_FAILURE
                return False

            self.store.apply_summary(summary)
            self.store.prune_to_recent_window()
            logger.info(f"Long-term summary updated: {self.store.summary}")
            return True

        except Exception as e:
            self.last_error = e
            self.last_failure = FailureKind.COMPACTION_FAILURE
            logger.warning(f"Failed to summarize conversation: {e}")
            return False

        finally:
            self.state = CompactionState.IDLE
