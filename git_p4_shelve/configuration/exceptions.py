"""Contains exceptions raised when reconciling application configuration."""

from git_p4_shelve.configuration.models import ShelveAction


class ConflictingActionsError(Exception):
    """Raised when more than one shelve action is requested."""

    def __init__(self, actions: list[ShelveAction]) -> None:
        """Initializes the exception with the conflicting actions."""
        super().__init__("Only one action may be given, got: " + ", ".join(f"--{action.value}" for action in actions))
        self.actions = actions


class ConflictingMessageOptionsError(Exception):
    """Raised when both a commit message and a commit message file are given."""

    pass
