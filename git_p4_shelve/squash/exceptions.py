"""Contains exceptions raised while squashing a branch."""


class SquashError(Exception):
    """Base class for errors raised by the branch squasher."""

    pass


class BranchNotFoundError(SquashError):
    """Raised when the base branch does not exist."""

    def __init__(self, branch: str) -> None:
        """Initializes the exception with the missing branch."""
        super().__init__(f"Branch '{branch}' does not exist")
        self.branch = branch


class DirtyWorkingTreeError(SquashError):
    """Raised when tracked files have uncommitted changes."""

    pass


class InvalidSquashTargetError(SquashError):
    """Raised when the squash target cannot be used (for example it is the branch being squashed)."""

    pass


class MergeBaseNotFoundError(SquashError):
    """Raised when the base and current branches share no history."""

    def __init__(self, base: str, current: str) -> None:
        """Initializes the exception with both branches."""
        super().__init__(f"Could not find a merge base between '{base}' and '{current}'")
        self.base = base
        self.current = current


class NothingToSquashError(SquashError):
    """Raised when the current branch has no commits ahead of the merge base."""

    pass


class AmbiguousSquashTargetError(SquashError):
    """Raised when an existing squash target has more than one commit ahead of the base."""

    def __init__(self, target: str, base: str, count: int) -> None:
        """Initializes the exception with the target branch and its commit count."""
        super().__init__(
            f"Branch '{target}' has {count} commits ahead of '{base}', expected exactly one. "
            "Delete it or use --force to recreate it."
        )
        self.target = target
        self.count = count


class EmptySquashTargetError(SquashError):
    """Raised when an existing squash target has no commits ahead of the base."""

    def __init__(self, target: str, base: str) -> None:
        """Initializes the exception with the target branch."""
        super().__init__(f"Branch '{target}' has no commits ahead of '{base}'. Delete it first or use --force.")
        self.target = target


class BranchRestoreError(SquashError):
    """Raised when the originally checked-out branch could not be restored."""

    def __init__(self, ref: str, reason: str) -> None:
        """Initializes the exception with the ref that could not be checked out."""
        super().__init__(f"Failed to restore '{ref}': {reason}")
        self.ref = ref
