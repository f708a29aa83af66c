"""Models for configuration reconciled from CLI arguments, git config and environment variables."""

from dataclasses import dataclass, field
from enum import Enum


class ShelveAction(str, Enum):
    """Enum for the action applied to every resolved commit."""

    PRINT = "print"
    SHELVE_NEW = "shelve-new"
    UPDATE_EXISTING = "update-existing"
    UPDATE_OR_SHELVE = "update-or-shelve"


@dataclass
class SquashConfig:
    """Configuration class for squashing a branch."""

    base_branch: str
    current_branch: str | None = None
    target_branch: str | None = None
    force: bool = False
    message: str | None = None
    message_file: str | None = None
    reword: bool = False


@dataclass
class ShelveConfig:
    """Configuration class for the shelve command."""

    action: ShelveAction
    tokens: list[str] = field(default_factory=list)
    upstream: str | None = None
    client: str | None = None
    user: str | None = None
    squash: bool = False
    dry_run: bool = False
    debug: bool = False
