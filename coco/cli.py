"""Command-line front door for coco.

Parses CLI options, resolves defaults from the config file, and loads the
dataset. Then runs the interactive session and prints the chosen line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from . import config
from .errors import CocoError
from .logging_setup import configure as configure_logging
from .session import SelectionSession, run_session
from .source import load_dataset
from .terminal import Terminal

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coco",
        description="Filter lines interactively with a regular expression and print the chosen one.",
    )
    parser.add_argument("files", nargs="*", metavar="filename", help="Files to read. Defaults to standard input.")
    parser.add_argument("--query", default="", help="Initial value for the query.")
    parser.add_argument("--prompt", default=None, help="Prompt string shown before the query.")
    parser.add_argument(
        "-b",
        "--max-buffer",
        type=_positive_int,
        default=None,
        help="Maximum number of lines to read.",
    )
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store the given --prompt and --max-buffer as defaults for later runs.",
    )
    return parser


def select_line(dataset: Sequence[str], query: str, prompt: str) -> str | None:
    """Run one interactive session on the controlling terminal."""
    session = SelectionSession(dataset, query=query, prompt=prompt)
    with Terminal.open() as terminal:
        return run_session(session, terminal)


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, run the selector, and print any selected line.

    Fatal input, decoding, and terminal errors exit with status 1 after the
    terminal has been restored.
    """
    configure_logging()
    args = build_parser().parse_args(argv)
    prompt = args.prompt if args.prompt is not None else config.load_default_prompt()
    max_buffer = args.max_buffer if args.max_buffer is not None else config.load_default_max_buffer()
    if args.save_defaults:
        config.save_defaults(prompt=args.prompt, max_buffer=args.max_buffer)
        logger.info("saved defaults to %s", config.CONFIG_PATH)

    try:
        dataset = load_dataset(args.files, max_buffer)
        selection = select_line(dataset, args.query, prompt)
    except CocoError as exc:
        logger.error("aborting: %s", exc)
        raise SystemExit(f"coco: error: {exc}") from exc

    if selection is not None:
        sys.stdout.write(selection + "\n")
        sys.stdout.flush()


if __name__ == "__main__":
    main()
