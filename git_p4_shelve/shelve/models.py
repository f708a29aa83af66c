"""Pydantic models for commits, pending changelists and their mappings."""

from enum import Enum

from pydantic import BaseModel


class ShelveDecision(str, Enum):
    """What was done for a single commit-changelist mapping."""

    PRINT = "print"
    CREATE = "create"
    UPDATE = "update"


class Commit(BaseModel):
    """Pydantic model for a git commit."""

    sha: str
    message: str = ""

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        return self.message.split("\n", 1)[0]


class PendingChangelist(BaseModel):
    """Pydantic model for a pending Perforce changelist.

    `summary` is the one-line, truncated description reported by `p4 changes`.
    `description` stays None until the full description has been fetched.
    """

    number: int
    summary: str = ""
    user: str | None = None
    client: str | None = None
    description: str | None = None


class CommitMapping(BaseModel):
    """Pydantic model pairing a commit with the changelist it belongs to, if any."""

    commit: Commit
    changelist: int | None = None
    explicit: bool = False
