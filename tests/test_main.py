"""Tests for the CLI front end."""

import pytest
from main import build_parser, load_settings, run_repl, NO_MEMORY_TEXT


class FakeOrchestrator:
    """Records calls made by the REPL."""

    def __init__(self):
        self.messages = []
        self.summary = ""
        self.cleared = []

    def submit_user_message(self, text):
        self.messages.append(text)
        return f"echo {text}"

    def get_long_term_summary(self):
        return self.summary

    def clear_long_term_summary(self):
        self.cleared.append("summary")

    def clear_all(self):
        self.cleared.append("all")


def feed_input(monkeypatch, lines):
    lines = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)


class TestRepl:
    """Test REPL commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.orchestrator = FakeOrchestrator()

    def test_messages_and_commands(self, monkeypatch, capsys):
        """Test chat lines go to the orchestrator and commands do not."""
        feed_input(monkeypatch, ["hello", "", "/memory", "/forget", "/reset", "/quit", "never sent"])

        run_repl(self.orchestrator, "Mochi")

        out = capsys.readouterr().out
        assert self.orchestrator.messages == ["hello"]
        assert "Mochi: echo hello" in out
        assert NO_MEMORY_TEXT in out
        assert self.orchestrator.cleared == ["summary", "all"]

    def test_memory_shows_summary(self, monkeypatch, capsys):
        """Test /memory prints the stored summary."""
        self.orchestrator.summary = "- likes hiking"
        feed_input(monkeypatch, ["/memory"])

        run_repl(self.orchestrator, "Mochi")

        assert "- likes hiking" in capsys.readouterr().out

    def test_eof_ends_loop(self, monkeypatch):
        """Test end of input leaves the loop cleanly."""
        feed_input(monkeypatch, [])
        run_repl(self.orchestrator, "Mochi")
        assert self.orchestrator.messages == []


class TestArguments:
    """Test argument parsing into settings."""

    def test_cli_overrides(self, monkeypatch):
        """Test command-line paths and timeout reach the settings."""
        monkeypatch.delenv("LLAMA_CLI_PATH", raising=False)
        args = build_parser().parse_args(["--llama-cli", "/bin/llama", "-m", "m.gguf", "--timeout", "9", "-v"])
        settings = load_settings(args)
        assert settings.llama_cli_path == "/bin/llama"
        assert settings.model_path == "m.gguf"
        assert settings.timeout_seconds == 9
        assert settings.verbose is True

    def test_config_file(self, tmp_path):
        """Test a YAML config combined with CLI overrides."""
        config = tmp_path / "c.yaml"
        config.write_text("persona_name: Pip\nmodel_path: a.gguf\n", encoding="utf-8")
        args = build_parser().parse_args(["-c", str(config), "-m", "b.gguf"])
        settings = load_settings(args)
        assert settings.persona_name == "Pip"
        assert settings.model_path == "b.gguf"
        assert settings.verbose is False
