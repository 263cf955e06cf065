#!/usr/bin/env python3
"""Local chat CLI for llama.cpp models."""

import argparse
import logging
import sys

from pydantic import ValidationError

from config.settings import Settings, ConfigurationError
from orchestrator import ChatOrchestrator

NO_MEMORY_TEXT = "(No long-term memory saved yet.)"

HELP_TEXT = """Commands:
  /memory   show long-term memory
  /forget   clear long-term memory
  /reset    clear history and memory
  /quit     leave"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Chat with a local llama.cpp model that remembers what matters"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="YAML settings file"
    )
    parser.add_argument(
        "--llama-cli",
        type=str,
        help="Path to the llama-cli executable (default: $LLAMA_CLI_PATH)"
    )
    parser.add_argument(
        "--model",
        "-m",
        type=str,
        help="Path to the GGUF model (default: $LLAMA_MODEL_PATH)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for each completion (default: 120)"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    overrides = {
        "llama_cli_path": args.llama_cli,
        "model_path": args.model,
        "timeout_seconds": args.timeout,
        "verbose": args.verbose or None,
    }
    if args.config:
        return Settings.from_yaml(args.config, **overrides)
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def run_repl(orchestrator: ChatOrchestrator, persona: str):
    print(f"=== {persona} - local chat (type /help for commands) ===")

    while True:
        try:
            user_text = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not user_text:
            continue

        command = user_text.lower()
        if command in ("/quit", "/exit"):
            break
        if command == "/help":
            print(HELP_TEXT)
            continue
        if command == "/memory":
            print(orchestrator.get_long_term_summary() or NO_MEMORY_TEXT)
            continue
        if command == "/forget":
            orchestrator.clear_long_term_summary()
            print("Long-term memory cleared.")
            continue
        if command == "/reset":
            orchestrator.clear_all()
            print("Conversation cleared.")
            continue

        print(f"{persona} is thinking...", end="\r", flush=True)
        reply = orchestrator.submit_user_message(user_text)
        print(f"{persona}: {reply}\n")


def main():
    """Main CLI entry point."""
    args = build_parser().parse_args()

    try:
        settings = load_settings(args)
    except (OSError, ConfigurationError, ValidationError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        settings.validate_paths()
    except ConfigurationError as e:
        print(f"Cannot start: {e}", file=sys.stderr)
        sys.exit(2)

    with ChatOrchestrator(settings=settings) as orchestrator:
        run_repl(orchestrator, settings.persona_name)


if __name__ == "__main__":
    main()
