"""Contains results of shelve execution."""

from git_p4_shelve.shelve.models import CommitMapping, ShelveDecision


class ShelveResult:
    """Contains the outcome for a single commit-changelist mapping."""

    def __init__(self, mapping: CommitMapping, decision: ShelveDecision) -> None:
        """Initialize the result with the mapping and the decision taken for it."""
        self.mapping = mapping
        self.decision = decision


class ShelveRunResult:
    """Contains results of the shelve workflow for all commits."""

    def __init__(self, results: list[ShelveResult], squashed_branch: str | None = None) -> None:
        """Initialize the result with the per-commit results and the squashed branch, if squashing ran."""
        self.results = results
        self.squashed_branch = squashed_branch

    def count(self, decision: ShelveDecision) -> int:
        """Count the results with the given decision."""
        return sum(1 for result in self.results if result.decision == decision)
