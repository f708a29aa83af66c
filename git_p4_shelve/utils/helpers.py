"""General utility functions for commit messages and changelist descriptions."""

import re

from .constants import MATCH_PREFIX_LENGTH


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines) into single spaces."""
    return re.sub(r"\s+", " ", text).strip()


def message_prefix(message: str, length: int = MATCH_PREFIX_LENGTH) -> str:
    """Return the leading characters of a message as they appear in a one-line summary."""
    return collapse_whitespace(message)[:length]


def normalize_description(text: str) -> str:
    """Normalize a commit message or changelist description for exact comparison.

    Trailing whitespace is removed from every line, and leading and trailing
    blank lines are dropped. Nothing else is changed.
    """
    lines = [line.rstrip() for line in text.replace("\r\n", "\n").split("\n")]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)
