"""Chat orchestrator: one user message in, one assistant reply out."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from config.settings import Settings
from schemas.chat import ChatReply
from schemas.completion import FailureKind

from llm.factory import create_llm_client, LLMProvider
from llm.base_client import BaseLLMClient, CompletionError, CompletionTimeoutError

from memory.conversation_store import ConversationStore
from memory.summarizer import SummarizationCoordinator

from agents.reply_polisher import ReplyPolisher

logger = logging.getLogger(__name__)

LAUNCH_FAILURE_REPLY = "[error running llama-cli]"
TIMEOUT_REPLY = "[no response: model timed out]"
EMPTY_REPLY = "[no response]"


class ChatOrchestrator:
    """Drives a single conversation against a completion backend."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm_client: Optional[BaseLLMClient] = None,
        store: Optional[ConversationStore] = None,
        polisher: Optional[ReplyPolisher] = None
    ):
        """
        Initialize orchestrator.

        Args:
            settings: Application settings
            llm_client: Completion backend (built from settings if omitted)
            store: Conversation store (built from settings if omitted)
            polisher: Reply polisher (built from settings if omitted)
        """
        self.settings = settings or Settings()

        self.llm_client = llm_client or create_llm_client(
            provider=LLMProvider(self.settings.llm_provider),
            settings=self.settings
        )
        logger.info(
            f"Completion client ready: {self.llm_client.get_provider_name()} "
            f"({self.llm_client.get_model_name()})"
        )

        self.store = store or ConversationStore(
            persona_name=self.settings.persona_name,
            recent_window=self.settings.recent_window,
            summarize_after_turns=self.settings.summarize_after_turns,
            foreign_assistant_names=self.settings.foreign_assistant_names
        )
        self.polisher = polisher or ReplyPolisher(
            persona_name=self.settings.persona_name,
            foreign_names=self.settings.foreign_assistant_names,
            max_chars=self.settings.max_reply_chars,
            min_sentence_chars=self.settings.min_sentence_chars
        )
        self.summarizer = SummarizationCoordinator(self.store, self.llm_client)

        # One completion in flight per conversation
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    def handle_message(self, text: str) -> ChatReply:
        """
        Process a user message end-to-end.

        Appends the user turn, runs the completion, appends exactly one
        assistant turn (a placeholder on failure) and compacts memory if due.

        Args:
            text: User message

        Returns:
            ChatReply with the displayed text and any failure kind
        """
        if text is None or not text.strip():
            raise ValueError("message must not be blank")
        user_text = text.strip()

        with self._lock:
            self.store.append_user(user_text)
            prompt = self.store.build_prompt()

            reply_text, failure = self._complete(prompt)

            if failure is None:
                reply_text = self.polisher.polish(reply_text)
                if not reply_text:
                    reply_text, failure = EMPTY_REPLY, FailureKind.EMPTY_OUTPUT
                elif self.settings.answer_name_questions and self.polisher.is_name_question(user_text):
                    reply_text = self.polisher.name_answer()

            self.store.append_assistant(reply_text)

            compacted = self.summarizer.maybe_run()
            compaction_failure = self.summarizer.last_failure

        return ChatReply(
            text=reply_text,
            failure=failure,
            compacted=compacted,
            compaction_failure=compaction_failure
        )

    def _complete(self, prompt: str):
        try:
            raw = self.llm_client.complete(prompt)
        except CompletionTimeoutError as e:
            logger.error(f"Completion timed out: {e}")
            return TIMEOUT_REPLY, FailureKind.TIMEOUT
        except CompletionError as e:
            logger.error(f"Completion failed: {e}")
            return LAUNCH_FAILURE_REPLY, FailureKind.LAUNCH_FAILURE
        except Exception as e:
            logger.exception(f"Unexpected completion error: {e}")
            return LAUNCH_FAILURE_REPLY, FailureKind.LAUNCH_FAILURE

        if not raw or not raw.strip():
            return EMPTY_REPLY, FailureKind.EMPTY_OUTPUT
        return raw, None

    def submit_user_message(self, text: str) -> str:
        """Send a user message and return the assistant reply text."""
        return self.handle_message(text).text

    def submit_user_message_async(self, text: str) -> "Future[ChatReply]":
        """
        Run handle_message on the background worker.

        The worker is single-threaded, so submissions resolve in order and
        compaction has finished by the time the future completes.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="completion")
        return self._executor.submit(self.handle_message, text)

    # Memory viewer support

    def get_long_term_summary(self) -> str:
        return self.store.summary

    def clear_long_term_summary(self):
        with self._lock:
            self.store.clear_summary()
        logger.info("Long-term memory cleared")

    def clear_all(self):
        with self._lock:
            self.store.clear_all()
        logger.info("Conversation history and memory cleared")

    def close(self):
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
