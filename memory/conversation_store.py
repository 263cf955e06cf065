"""In-memory conversation history and long-term summary."""

import logging
from typing import List, Optional, Sequence, Tuple

from config.settings import DEFAULT_FOREIGN_NAMES
from .models import Speaker, Turn

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_TEMPLATE = (
    "You are {persona}, a cute, friendly AI assistant running on the user's own computer.\n"
    "- Always refer to yourself as \"{persona}\".\n"
    "{forbidden_rule}"
    "- Answer in a natural, conversational style.\n\n"
)
FORBIDDEN_NAMES_RULE = "- Never say you are {names}, or any other model name.\n"
FORBIDDEN_ANY_RULE = "- Never say you are any other model.\n"

MEMORY_HEADER = "Long-term memory about the user:\n"
USER_LABEL = "User"


class ConversationStore:
    """
    Owns the ordered turn history and the long-term summary.

    History grows on every append; compaction is driven from outside via
    should_compact(), apply_summary() and prune_to_recent_window(). Nothing
    mutable leaves the store: callers get tuples of frozen turns.
    """

    def __init__(
        self,
        persona_name: str = "Mochi",
        recent_window: int = 8,
        summarize_after_turns: int = 12,
        foreign_assistant_names: Optional[Sequence[str]] = None
    ):
        """
        Initialize conversation store.

        Args:
            persona_name: Assistant name used in the prompt and as speaker label
            recent_window: Turns kept in the live prompt and after compaction
            summarize_after_turns: History length at which compaction is due
            foreign_assistant_names: Names the persona must never claim
        """
        if recent_window <= 0:
            raise ValueError("recent_window must be positive")
        if summarize_after_turns <= 0:
            raise ValueError("summarize_after_turns must be positive")

        self.persona_name = persona_name
        self.recent_window = recent_window
        self.summarize_after_turns = summarize_after_turns
        names = list(foreign_assistant_names) if foreign_assistant_names is not None else list(DEFAULT_FOREIGN_NAMES)
        if names:
            forbidden_rule = FORBIDDEN_NAMES_RULE.format(names=", ".join(names))
        else:
            forbidden_rule = FORBIDDEN_ANY_RULE
        self.system_prompt = SYSTEM_PROMPT_TEMPLATE.format(
            persona=persona_name,
            forbidden_rule=forbidden_rule,
        )

        self._history: List[Turn] = []
        self._summary = ""

    def __len__(self) -> int:
        return len(self._history)

    @property
    def turns(self) -> Tuple[Turn, ...]:
        """Snapshot of the full history, oldest first."""
        return tuple(self._history)

    @property
    def summary(self) -> str:
        return self._summary

    # Appending

    def append_user(self, text: str) -> Turn:
        return self._append(Speaker.USER, text)

    def append_assistant(self, text: str) -> Turn:
        return self._append(Speaker.ASSISTANT, text)

    def _append(self, speaker: Speaker, text: str) -> Turn:
        if text is None:
            raise ValueError("turn text must not be None")
        turn = Turn(speaker=speaker, text=text)
        self._history.append(turn)
        return turn

    # Prompt building

    def speaker_label(self, speaker: Speaker) -> str:
        return USER_LABEL if speaker == Speaker.USER else self.persona_name

    def render_turn(self, turn: Turn) -> str:
        return f"{self.speaker_label(turn.speaker)}: {turn.text}"

    def recent_turns(self) -> Tuple[Turn, ...]:
        """The last recent_window turns, oldest first."""
        start = max(0, len(self._history) - self.recent_window)
        return tuple(self._history[start:])

    def build_prompt(self) -> str:
        """
        Assemble the prompt for the next completion.

        Persona instructions, then the long-term memory block when a
        summary exists, then the recent window one turn per line.
        """
        parts = [self.system_prompt]

        if self._summary.strip():
            parts.append(MEMORY_HEADER)
            parts.append(self._summary + "\n\n")

        for turn in self.recent_turns():
            parts.append(self.render_turn(turn) + "\n")

        return "".join(parts)

    # Compaction support

    def should_compact(self) -> bool:
        return len(self._history) >= self.summarize_after_turns

    def build_compaction_source(self) -> str:
        """Full history, one turn per line. Never truncated."""
        return "".join(self.render_turn(turn) + "\n" for turn in self._history)

    def apply_summary(self, text: Optional[str]):
        """Replace the long-term summary. Blank input clears it."""
        self._summary = (text or "").strip()

    def prune_to_recent_window(self):
        if len(self._history) <= self.recent_window:
            return
        dropped = len(self._history) - self.recent_window
        self._history = self._history[-self.recent_window:]
        logger.debug(f"Pruned {dropped} turns, {len(self._history)} remain")

    # Resets

    def clear_summary(self):
        self._summary = ""

    def clear_all(self):
        self._history = []
        self._summary = ""
