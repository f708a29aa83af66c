"""Contains exceptions raised while resolving, matching and shelving commits."""


class ShelveError(Exception):
    """Base class for errors that stop a shelve run before or during dispatch."""

    pass


class InvalidCommitTokenError(ShelveError):
    """Raised when a command line token cannot be turned into commits."""

    def __init__(self, token: str, reason: str) -> None:
        """Initializes the exception with the offending token."""
        super().__init__(f"Invalid commit argument '{token}': {reason}")
        self.token = token


class ConflictingMappingError(ShelveError):
    """Raised when one commit is mapped to two different changelists."""

    def __init__(self, commit: str, first: int, second: int) -> None:
        """Initializes the exception with the commit and both changelists."""
        super().__init__(f"Commit {commit} is mapped to both changelist {first} and changelist {second}")
        self.commit = commit
        self.changelists = (first, second)


class UpstreamNotFoundError(ShelveError):
    """Raised when the upstream branch is needed but could not be determined."""

    pass


class NoCommitsResolvedError(ShelveError):
    """Raised when the command line arguments resolve to no commits at all."""

    pass


class ExplicitMappingNotAllowedError(ShelveError):
    """Raised when shelving as new changelists is requested for explicitly mapped commits."""

    def __init__(self, commits: list[str]) -> None:
        """Initializes the exception with the explicitly mapped commits."""
        super().__init__(
            "Cannot shelve explicitly mapped commits as new changelists, use --update-existing instead: " + ", ".join(commits)
        )
        self.commits = commits


class ChangelistNotFoundError(ShelveError):
    """Raised when updating existing changelists and a commit has none."""

    def __init__(self, commits: list[str]) -> None:
        """Initializes the exception with the commits lacking a changelist."""
        super().__init__("No pending changelist found for commit(s): " + ", ".join(commits))
        self.commits = commits
