"""Base ABCs for the git and Perforce clients."""

from abc import ABC, abstractmethod

from git_p4_shelve.shelve.models import PendingChangelist


class GitClientBase(ABC):
    """Base ABC for git clients."""

    # Configuration
    @abstractmethod
    def config_get(self, key: str) -> str | None:
        """Get a git configuration value, or None if it is unset."""
        pass

    # Refs and branches
    @abstractmethod
    def current_branch(self) -> str | None:
        """Get the name of the checked-out branch, or None when HEAD is detached."""
        pass

    @abstractmethod
    def head_commit(self) -> str:
        """Get the commit HEAD points to."""
        pass

    @abstractmethod
    def upstream_branch(self) -> str | None:
        """Get the tracking branch of the checked-out branch, if any."""
        pass

    @abstractmethod
    def list_branches(self) -> list[str]:
        """List local and remote-tracking branch names."""
        pass

    @abstractmethod
    def ref_exists(self, ref: str) -> bool:
        """Check whether a ref resolves to a commit."""
        pass

    @abstractmethod
    def branch_exists(self, branch: str) -> bool:
        """Check whether a local branch exists."""
        pass

    # Commits
    @abstractmethod
    def resolve_commit(self, ref: str) -> str:
        """Resolve a ref to a full commit id."""
        pass

    @abstractmethod
    def merge_base(self, first: str, second: str) -> str | None:
        """Get the merge base of two refs, or None if they share no history."""
        pass

    @abstractmethod
    def rev_list(self, revision_range: str) -> list[str]:
        """List the commits in a range, oldest first."""
        pass

    @abstractmethod
    def commit_message(self, ref: str) -> str:
        """Get the full message (subject and body) of a commit."""
        pass

    @abstractmethod
    def commit_subject(self, ref: str) -> str:
        """Get the subject line of a commit."""
        pass

    # Working tree
    @abstractmethod
    def has_tracked_changes(self) -> bool:
        """Check whether the working tree or index has uncommitted changes to tracked files."""
        pass

    @abstractmethod
    def checkout(self, ref: str) -> None:
        """Check out a branch or commit."""
        pass

    @abstractmethod
    def create_branch(self, branch: str, start_point: str, force: bool = False) -> None:
        """Create a branch at a start point and check it out."""
        pass

    @abstractmethod
    def reset_hard(self, ref: str) -> None:
        """Reset the checked-out branch, index and working tree to a ref."""
        pass

    @abstractmethod
    def reset_soft(self, ref: str) -> None:
        """Reset the checked-out branch to a ref, keeping the index and working tree."""
        pass

    @abstractmethod
    def commit(self, message: str | None = None, message_file: str | None = None) -> None:
        """Commit the index with a message or a message file."""
        pass

    @abstractmethod
    def amend_interactively(self) -> None:
        """Amend the last commit, opening its message in the editor."""
        pass


class ChangelistClientBase(ABC):
    """Base ABC for Perforce changelist clients."""

    @abstractmethod
    def list_pending_changelists(self) -> list[PendingChangelist]:
        """List pending changelists for the configured user and client."""
        pass

    @abstractmethod
    def fetch_description(self, changelist: int) -> str:
        """Fetch the full description of a changelist."""
        pass

    @abstractmethod
    def shelve_commit(self, commit: str) -> None:
        """Shelve a commit into a new pending changelist."""
        pass

    @abstractmethod
    def update_shelved_commit(self, commit: str, changelist: int) -> None:
        """Replace the shelved files of an existing changelist with a commit."""
        pass
