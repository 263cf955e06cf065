"""Reply shaping and identity clean-up."""

import re
from typing import Optional, Sequence

from config.settings import DEFAULT_FOREIGN_NAMES


class ReplyPolisher:
    """Bounds reply length and rewrites wrong self-identification."""

    def __init__(
        self,
        persona_name: str = "Mochi",
        foreign_names: Optional[Sequence[str]] = None,
        max_chars: int = 600,
        min_sentence_chars: int = 60
    ):
        """
        Initialize polisher.

        Args:
            persona_name: Name the assistant must use for itself
            foreign_names: Assistant names to replace with the persona
            max_chars: Hard length cap applied before sentence cutting
            min_sentence_chars: A terminator must sit past this offset to cut there
        """
        self.persona_name = persona_name
        self.foreign_names = list(foreign_names) if foreign_names is not None else list(DEFAULT_FOREIGN_NAMES)
        self.max_chars = max_chars
        self.min_sentence_chars = min_sentence_chars

        self.name_patterns = [
            re.compile(rf"\b{re.escape(name)}\b", re.IGNORECASE)
            for name in self.foreign_names
        ]

        who = "|".join(re.escape(n) for n in [persona_name] + self.foreign_names)
        self.intro_patterns = [
            re.compile(rf"i(?: am|'m) (?:{who}),? a large language model[^.]*\.\s*", re.IGNORECASE),
            re.compile(r"i(?: am|'m) a large language model[^.]*\.\s*", re.IGNORECASE),
            re.compile(r"i(?: am|'m) an ai assistant[^.]*\.\s*", re.IGNORECASE),
        ]
        self.leading_question_mark = re.compile(r"^\s*\?\s*")

        self.name_question_patterns = [
            r"what'?s your name",
            r"what is your name",
            r"who are you",
        ]

    def tidy(self, text: Optional[str]) -> str:
        """Cap length and cut at the last sentence end."""
        if text is None:
            return ""
        r = text.strip()

        if len(r) > self.max_chars:
            r = r[:self.max_chars]

        cut = max(r.rfind("."), r.rfind("!"), r.rfind("?"))
        if cut > self.min_sentence_chars:
            r = r[:cut + 1]

        return r.strip()

    def sanitize_identity(self, text: Optional[str]) -> str:
        """
        Replace foreign assistant names and drop known self-introductions.

        Only catches the patterns listed here; an uncontrolled model can
        always phrase a leak differently.
        """
        if text is None:
            return ""

        cleaned = text
        for pattern in self.name_patterns:
            cleaned = pattern.sub(self.persona_name, cleaned)

        for pattern in self.intro_patterns:
            cleaned = pattern.sub("", cleaned)

        cleaned = self.leading_question_mark.sub("", cleaned)

        return cleaned.strip()

    def polish(self, text: Optional[str]) -> str:
        # tidy first so the regex work runs on bounded text
        return self.sanitize_identity(self.tidy(text))

    def is_name_question(self, user_text: Optional[str]) -> bool:
        if not user_text:
            return False
        lower = user_text.lower()
        return any(re.search(p, lower) for p in self.name_question_patterns)

    def name_answer(self) -> str:
        return f"My name is {self.persona_name}! I'm your offline AI assistant running on your computer."
