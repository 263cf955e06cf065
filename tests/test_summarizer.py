"""Tests for SummarizationCoordinator."""

from llm.base_client import BaseLLMClient, ProcessError
from memory.conversation_store import ConversationStore
from memory.summarizer import SummarizationCoordinator, CompactionState
from schemas.completion import FailureKind


class StubClient(BaseLLMClient):
    """Returns canned text or raises, recording every prompt."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []
        self.observed_states = []
        self.coordinator = None

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.coordinator is not None:
            self.observed_states.append(self.coordinator.state)
        if self.error:
            raise self.error
        return self.reply

    def get_provider_name(self) -> str:
        return "stub"

    def get_model_name(self) -> str:
        return "stub-model"


class TestSummarizationCoordinator:
    """Test compaction cycle."""

    def setup_method(self):
        """Set up test fixtures."""
        self.store = ConversationStore(persona_name="Mochi", recent_window=8, summarize_after_turns=12)

    def _reach_threshold(self):
        self.store.append_user("hi")
        for _ in range(11):
            self.store.append_assistant("hello")

    def test_end_to_end_compaction(self):
        """Test threshold reached, summary stored and history pruned to W."""
        self._reach_threshold()
        client = StubClient(reply="User likes hiking.")
        coordinator = SummarizationCoordinator(self.store, client)

        assert coordinator.maybe_run() is True
        assert self.store.summary == "User likes hiking."
        assert len(self.store) == 8
        assert all(t.text == "hello" for t in self.store.turns)
        assert coordinator.state == CompactionState.IDLE

    def test_not_due_does_nothing(self):
        """Test that nothing runs below the threshold."""
        self.store.append_user("hi")
        client = StubClient(reply="facts")
        coordinator = SummarizationCoordinator(self.store, client)

        assert coordinator.maybe_run() is False
        assert client.prompts == []
        assert self.store.summary == ""

    def test_prompt_contains_directive_and_full_history(self):
        """Test the summarization prompt content."""
        for i in range(12):
            self.store.append_user(f"fact {i}")
        client = StubClient(reply="- facts")
        SummarizationCoordinator(self.store, client).maybe_run()

        prompt = client.prompts[0]
        assert "assistant named Mochi" in prompt
        assert "3–6 very short bullet points" in prompt
        assert "Do not include greetings or small talk" in prompt
        assert "Conversation:\nUser: fact 0\n" in prompt
        assert prompt.endswith("User: fact 11\n")

    def test_failure_leaves_store_untouched(self):
        """Test that a failing completion changes nothing."""
        self._reach_threshold()
        self.store.apply_summary("old memory")
        before = self.store.turns
        client = StubClient(error=ProcessError("boom"))
        coordinator = SummarizationCoordinator(self.store, client)

        assert coordinator.maybe_run() is False
        assert self.store.summary == "old memory"
        assert self.store.turns == before
        assert isinstance(coordinator.last_error, ProcessError)
        assert coordinator.state == CompactionState.IDLE

    def test_blank_result_leaves_store_untouched(self):
        """Test that a blank summary is treated as failure."""
        self._reach_threshold()
        self.store.apply_summary("old memory")
        client = StubClient(reply="   ")
        coordinator = SummarizationCoordinator(self.store, client)

        assert coordinator.maybe_run() is False
        assert self.store.summary == "old memory"
        assert len(self.store) == 12

    def test_state_is_compacting_during_call(self):
        """Test the coordinator reports COMPACTING while the call runs."""
        self._reach_threshold()
        client = StubClient(reply="facts")
        coordinator = SummarizationCoordinator(self.store, client)
        client.coordinator = coordinator

        coordinator.compact()

        assert client.observed_states == [CompactionState.COMPACTING]
        assert coordinator.state == CompactionState.IDLE

    def test_summary_replaced_wholesale(self):
        """Test that a second compaction overwrites the first summary."""
        self._reach_threshold()
        SummarizationCoordinator(self.store, StubClient(reply="first")).maybe_run()
        for _ in range(4):
            self.store.append_user("more")
        SummarizationCoordinator(self.store, StubClient(reply="second")).maybe_run()
        assert self.store.summary == "second"
        assert len(self.store) == 8

    def test_failure_kind_reported_on_error(self):
        """Test a failing completion is reported as a compaction failure."""
        self._reach_threshold()
        coordinator = SummarizationCoordinator(self.store, StubClient(error=ProcessError("boom")))

        coordinator.maybe_run()
        assert coordinator.last_failure == FailureKind.COMPACTION_FAILURE

    def test_failure_kind_reported_on_blank_result(self):
        """Test a blank summary is reported as a compaction failure."""
        self._reach_threshold()
        coordinator = SummarizationCoordinator(self.store, StubClient(reply="  "))

        coordinator.maybe_run()
        assert coordinator.last_failure == FailureKind.COMPACTION_FAILURE
        assert coordinator.last_error is None

    def test_failure_kind_cleared_by_later_runs(self):
        """Test success and not-due runs reset the reported failure."""
        self._reach_threshold()
        client = StubClient(reply="  ")
        coordinator = SummarizationCoordinator(self.store, client)
        coordinator.maybe_run()

        client.reply = "User likes tea."
        assert coordinator.maybe_run() is True
        assert coordinator.last_failure is None

        client.reply = "  "
        assert coordinator.maybe_run() is False
        assert coordinator.last_failure is None
