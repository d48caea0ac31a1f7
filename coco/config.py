"""Persistent JSON config helpers.

Stores user defaults for the prompt text and the line buffer cap.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .session import DEFAULT_PROMPT
from .source import DEFAULT_MAX_LINES

logger = logging.getLogger(__name__)

APP_NAME = "coco"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def load_default_prompt() -> str:
    """Return the configured prompt, or the built-in one for non-strings."""
    value = load_config().get("prompt")
    return value if isinstance(value, str) else DEFAULT_PROMPT


def load_default_max_buffer() -> int:
    """Return the configured line cap.

    Booleans, non-integers, and values below 1 fall back to the default.
    """
    value = load_config().get("max_buffer")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return DEFAULT_MAX_LINES
    return value


def save_defaults(prompt: str | None = None, max_buffer: int | None = None) -> None:
    """Update stored defaults, leaving unrelated keys untouched."""
    config = load_config()
    if prompt is not None:
        config["prompt"] = prompt
    if max_buffer is not None:
        config["max_buffer"] = max(1, int(max_buffer))
    save_config(config)
