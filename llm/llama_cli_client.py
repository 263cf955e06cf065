"""llama.cpp command-line completion client."""

import os
import logging
import subprocess
import tempfile
import time
from pathlib import Path
from typing import List, Optional

from schemas.completion import CompletionRequest, CompletionResult
from .base_client import BaseLLMClient, ProcessError, CompletionTimeoutError
from .output_sanitizer import OutputSanitizer

logger = logging.getLogger(__name__)


class LlamaCliClient(BaseLLMClient):
    """Runs one llama-cli process per completion."""

    def __init__(
        self,
        executable: str,
        model_path: str,
        ctx_size: int = 900,
        n_predict: int = 128,
        temperature: float = 0.7,
        timeout: Optional[float] = 120.0,
        strict_exit_code: bool = False,
        sanitizer: Optional[OutputSanitizer] = None
    ):
        """
        Initialize llama-cli client.

        Args:
            executable: Path to the llama-cli binary
            model_path: Path to the GGUF model file
            ctx_size: Context size passed to --ctx-size
            n_predict: Max new tokens passed to --n-predict
            temperature: Sampling temperature passed to --temp
            timeout: Seconds to wait for the process (None waits forever)
            strict_exit_code: Treat any non-zero exit as a failure
            sanitizer: Output cleaner (default prefixes if omitted)
        """
        self.executable = executable
        self.model_path = model_path
        self.ctx_size = ctx_size
        self.n_predict = n_predict
        self.temperature = temperature
        self.timeout = timeout
        self.strict_exit_code = strict_exit_code
        self.sanitizer = sanitizer or OutputSanitizer()

    def complete(self, prompt: str) -> str:
        """Run llama-cli on the prompt and return the cleaned reply."""
        return self.run(self.build_request(prompt)).text

    def build_request(self, prompt: str) -> CompletionRequest:
        return CompletionRequest(
            prompt=prompt,
            ctx_size=self.ctx_size,
            n_predict=self.n_predict,
            temperature=self.temperature,
        )

    def build_command(self, request: CompletionRequest, prompt_path: str) -> List[str]:
        """Build the llama-cli argument list. Order matters."""
        return [
            self.executable,
            "-m", self.model_path,
            "-no-cnv",
            "--no-display-prompt",
            "--ctx-size", str(request.ctx_size),
            "--n-predict", str(request.n_predict),
            "--temp", str(request.temperature),
            "-f", prompt_path,
        ]

    def run(self, request: CompletionRequest) -> CompletionResult:
        """
        Execute a completion request.

        The prompt is written to a temporary file which is removed on every
        exit path. stderr is merged into stdout and read until the process
        exits.

        Args:
            request: Prompt and sampling parameters

        Returns:
            CompletionResult with cleaned text, raw output and exit code

        Raises:
            ProcessError: If llama-cli cannot be started, or exits non-zero
                in strict mode
            CompletionTimeoutError: If llama-cli runs past the timeout
        """
        if not self.executable or not self.model_path:
            raise ProcessError("llama-cli executable or model path is not configured")

        try:
            fd, prompt_path = tempfile.mkstemp(prefix="llama_prompt_", suffix=".txt")
            os.close(fd)
        except OSError as e:
            logger.error(f"Could not create prompt file: {e}")
            raise ProcessError(f"Could not create prompt file: {e}") from e

        try:
            try:
                Path(prompt_path).write_text(request.prompt, encoding="utf-8")
            except OSError as e:
                logger.error(f"Could not write prompt file {prompt_path}: {e}")
                raise ProcessError(f"Could not write prompt file: {e}") from e

            command = self.build_command(request, prompt_path)
            logger.debug(f"Running command: {' '.join(command)}")

            started = time.monotonic()
            try:
                proc = subprocess.run(
                    command,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    stdin=subprocess.DEVNULL,
                    encoding="utf-8",
                    errors="replace",
                    timeout=self.timeout,
                )
            except subprocess.TimeoutExpired as e:
                logger.error(f"llama-cli did not finish within {self.timeout}s")
                raise CompletionTimeoutError(
                    f"llama-cli did not finish within {self.timeout} seconds",
                    timeout=self.timeout
                ) from e
            except OSError as e:
                logger.error(f"Failed to launch llama-cli ({self.executable}): {e}")
                raise ProcessError(f"Could not launch {self.executable}: {e}") from e

            elapsed = time.monotonic() - started
            logger.debug(f"llama-cli finished with code {proc.returncode} in {elapsed:.1f}s")

            if proc.returncode != 0:
                if self.strict_exit_code:
                    raise ProcessError(
                        f"llama-cli exited with code {proc.returncode}",
                        exit_code=proc.returncode
                    )
                logger.warning(f"llama-cli exited with non-zero code {proc.returncode}")

            raw = proc.stdout or ""
            result = CompletionResult(
                text=self.sanitizer.clean(raw),
                raw=raw,
                exit_code=proc.returncode,
                elapsed_seconds=elapsed,
            )
            if result.is_empty:
                logger.warning("llama-cli produced no usable output")

            return result
        finally:
            Path(prompt_path).unlink(missing_ok=True)

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "llama_cli"

    def get_model_name(self) -> str:
        """Get the model name."""
        return Path(self.model_path).stem if self.model_path else "unknown"
