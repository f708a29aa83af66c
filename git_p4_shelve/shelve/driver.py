"""Orchestrates squashing, resolving, matching and shelving commits."""

import time
from typing import Callable

import structlog
import typer

from git_p4_shelve.configuration.models import ShelveAction, ShelveConfig, SquashConfig
from git_p4_shelve.shelve.dispatcher import dispatch_shelve_action
from git_p4_shelve.shelve.exceptions import NoCommitsResolvedError, UpstreamNotFoundError
from git_p4_shelve.shelve.matcher import match_changelists
from git_p4_shelve.shelve.models import Commit, CommitMapping
from git_p4_shelve.shelve.resolver import resolve_commit_tokens
from git_p4_shelve.shelve.results import ShelveRunResult
from git_p4_shelve.squash.squasher import SquashResult, squash_branch
from git_p4_shelve.vcs.abc import ChangelistClientBase, GitClientBase
from git_p4_shelve.vcs.git import GitCliAdapter
from git_p4_shelve.vcs.p4 import P4CliAdapter
from git_p4_shelve.vcs.runner import CommandRunner

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

ACTIONS_USING_MATCHER = frozenset({ShelveAction.PRINT, ShelveAction.UPDATE_EXISTING, ShelveAction.UPDATE_OR_SHELVE})


def planned_squash_mapping(squash_result: SquashResult) -> CommitMapping:
    """Build the mapping for a squashed commit that a dry run has not created.

    The commit is named by its target branch and carries the message it would
    be committed with, so matching and dispatch decide as they would for the
    real commit.
    """
    return CommitMapping(commit=Commit(sha=squash_result.target_branch, message=squash_result.message or ""))


def run_shelve_workflow(
    config: ShelveConfig,
    git: GitClientBase,
    changelists: ChangelistClientBase,
    echo: Callable[[str], None] = typer.echo,
) -> ShelveRunResult:
    """Run the shelve workflow against already-constructed adapters.

    With squashing enabled, the current branch is squashed first and, when no
    tokens were given, the squashed commit is what gets shelved. A dry run does
    not create that commit, so it is shelved by its branch name instead. Pending
    changelists are only listed when the action needs matching and at least
    one commit lacks an explicit changelist.

    Raises:
        ShelveError: If the commits cannot be resolved or the action's requirements are not met.
        SquashError: If squashing was requested and a squash precondition fails.
        ExternalCommandError: If an external command fails. Earlier shelves are not rolled back.
    """
    tokens = list(config.tokens)
    squashed_branch: str | None = None
    mappings: list[CommitMapping] | None = None
    if config.squash:
        if config.upstream is None:
            raise UpstreamNotFoundError("No upstream branch could be determined to squash against. Pass --upstream.")
        squash_result = squash_branch(SquashConfig(base_branch=config.upstream), git)
        squashed_branch = squash_result.target_branch
        if not tokens and config.dry_run:
            mappings = [planned_squash_mapping(squash_result)]
        elif not tokens:
            tokens = [f"{config.upstream}..{squashed_branch}"]

    if mappings is None:
        mappings = resolve_commit_tokens(tokens, git, config.upstream)
    if not mappings:
        raise NoCommitsResolvedError("No commits found to shelve")

    if config.action in ACTIONS_USING_MATCHER and any(mapping.changelist is None for mapping in mappings):
        start_time = time.time()
        pending = changelists.list_pending_changelists()
        match_changelists(mappings, pending, changelists)
        logger.info("Matched commits to pending changelists", duration=round(time.time() - start_time, 2))

    results = dispatch_shelve_action(config.action, mappings, changelists, echo)
    return ShelveRunResult(results, squashed_branch=squashed_branch)


def run_shelve(config: ShelveConfig, echo: Callable[[str], None] = typer.echo) -> ShelveRunResult:
    """Build the git and Perforce adapters for a configuration and run the shelve workflow."""
    runner = CommandRunner(dry_run=config.dry_run, echo=echo)
    git = GitCliAdapter(runner)
    changelists = P4CliAdapter(runner, client=config.client, user=config.user)
    return run_shelve_workflow(config, git, changelists, echo)
