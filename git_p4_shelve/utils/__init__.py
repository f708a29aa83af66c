"""Utility modules for shared functionality."""

from .constants import (
    DEFAULT_UPSTREAM_BRANCH,
    MATCH_PREFIX_LENGTH,
    NEW_CHANGELIST_PLACEHOLDER,
    SQUASHED_BRANCH_PREFIX,
)
from .helpers import collapse_whitespace, message_prefix, normalize_description

__all__ = [
    "DEFAULT_UPSTREAM_BRANCH",
    "MATCH_PREFIX_LENGTH",
    "NEW_CHANGELIST_PLACEHOLDER",
    "SQUASHED_BRANCH_PREFIX",
    "collapse_whitespace",
    "message_prefix",
    "normalize_description",
]
