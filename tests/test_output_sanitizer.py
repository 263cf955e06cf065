"""Tests for OutputSanitizer."""

from llm.output_sanitizer import OutputSanitizer, BANNER, clean


class TestOutputSanitizer:
    """Test llama-cli output cleaning."""

    def setup_method(self):
        """Set up test fixtures."""
        self.sanitizer = OutputSanitizer()

    def test_banner_noise_and_reply(self):
        """Test that only the genuine reply survives banner and noise."""
        raw = "\n".join([
            "build: 4567 (abc123) with MSVC",
            "llama_model_loader: loaded meta data",
            BANNER,
            "sampler seed: 1234",
            "sampler chain: logits -> top-k",
            "generate: n_ctx = 900, n_batch = 2048",
            "   Hello there! How can I help you today?   ",
            "llama_perf_context_print: load time = 100 ms",
        ])
        assert self.sanitizer.clean(raw) == "Hello there! How can I help you today?"

    def test_text_before_last_banner_dropped(self):
        """Test that everything up to the last banner is discarded."""
        raw = f"junk\n{BANNER}\nmore junk\n{BANNER}\nreal reply"
        assert self.sanitizer.clean(raw) == "real reply"

    def test_multiline_reply_joined_with_spaces(self):
        """Test that surviving lines are joined with single spaces."""
        raw = "First line.\r\n\r\n  Second line.  \r\nmain: done\r\n"
        assert self.sanitizer.clean(raw) == "First line. Second line."

    def test_end_marker_removed(self):
        """Test that the end-of-text marker is stripped."""
        assert self.sanitizer.clean("Goodbye! [end of text]\n") == "Goodbye!"

    def test_all_default_prefixes_dropped(self):
        """Test that each default diagnostic prefix drops its line."""
        noise = [
            "sampler params:",
            "llama_new_context_with_model: n_ctx = 900",
            "common_init_from_params: warming up",
            "system_info: n_threads = 8",
            "generate: n_ctx = 900",
            "main: llama backend init",
            "ggml_cuda_init: found 1 device",
            "IMPORTANT: The interactive mode is deprecated",
        ]
        assert self.sanitizer.clean("\n".join(noise + ["ok"])) == "ok"

    def test_empty_and_none(self):
        """Test that empty, blank and None input give an empty string."""
        assert self.sanitizer.clean("") == ""
        assert self.sanitizer.clean("  \n\r\n ") == ""
        assert self.sanitizer.clean(None) == ""

    def test_only_noise_gives_empty(self):
        """Test that pure diagnostics clean to nothing."""
        assert self.sanitizer.clean("main: start\nggml_init: ok\n[end of text]") == ""

    def test_custom_prefixes(self):
        """Test a configurable prefix list."""
        sanitizer = OutputSanitizer(noise_prefixes=["DEBUG"], end_marker="<eos>")
        assert sanitizer.clean("DEBUG x\nmain: kept\nhi<eos>") == "main: kept hi"

    def test_module_level_clean(self):
        """Test the default module-level helper."""
        assert clean("system_info: x\nHi!") == "Hi!"
