"""Strip llama-cli console noise from captured output."""

from typing import Iterable, Optional

from config.settings import DEFAULT_NOISE_PREFIXES

BANNER = "***************************"
END_MARKER = "[end of text]"


class OutputSanitizer:
    """Turns raw llama-cli stdout/stderr into reply text. Stateless."""

    def __init__(
        self,
        noise_prefixes: Optional[Iterable[str]] = None,
        end_marker: str = END_MARKER,
        banner: str = BANNER
    ):
        self.noise_prefixes = tuple(noise_prefixes if noise_prefixes is not None else DEFAULT_NOISE_PREFIXES)
        self.end_marker = end_marker
        self.banner = banner

    def clean(self, raw: Optional[str]) -> str:
        """
        Clean raw process output.

        Args:
            raw: Combined stdout/stderr of the model process

        Returns:
            Reply text on a single line, or "" if nothing usable remains
        """
        if not raw:
            return ""

        out = raw.replace("\r", "").strip()
        if not out:
            return ""

        # The startup banner precedes generated text
        idx = out.rfind(self.banner)
        if idx != -1:
            out = out[idx + len(self.banner):].strip()

        kept = []
        for line in out.split("\n"):
            stripped = line.strip()
            if not stripped:
                continue
            if self.noise_prefixes and stripped.startswith(self.noise_prefixes):
                continue
            kept.append(stripped)

        result = " ".join(kept)

        if self.end_marker:
            result = result.replace(self.end_marker, "")

        return result.strip()


_default_sanitizer = OutputSanitizer()


def clean(raw: Optional[str]) -> str:
    """Clean output using the default noise prefixes and end marker."""
    return _default_sanitizer.clean(raw)
