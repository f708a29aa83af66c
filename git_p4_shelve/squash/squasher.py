"""Squashes the commits of the current branch into a single commit on a target branch.

Every commit reachable from the current branch but not from its merge base
with the base branch is collapsed into one commit. The commit is placed on a
target branch (`squashed/<current-branch>` by default) that starts at the
merge base. Running the squasher again replaces that single commit with one
holding the current diff, so the target never has more than one commit ahead
of the base.

The working copy is switched to the target branch while the commit is built
and is always switched back to whatever was checked out before, whether the
squash succeeded or not.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

import structlog

from git_p4_shelve.configuration.models import SquashConfig
from git_p4_shelve.squash.exceptions import (
    AmbiguousSquashTargetError,
    BranchNotFoundError,
    BranchRestoreError,
    DirtyWorkingTreeError,
    EmptySquashTargetError,
    InvalidSquashTargetError,
    MergeBaseNotFoundError,
    NothingToSquashError,
)
from git_p4_shelve.utils.constants import SQUASHED_BRANCH_PREFIX
from git_p4_shelve.vcs.abc import GitClientBase
from git_p4_shelve.vcs.exceptions import ExternalCommandError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


@dataclass
class SquashResult:
    """Outcome of a squash.

    `message` is the squashed commit message, or None when it was read from a file.
    """

    target_branch: str
    merge_base: str
    squashed_commits: list[str] = field(default_factory=list)
    replaced_existing: bool = False
    message: str | None = None


@dataclass
class _SquashPlan:
    current_branch: str
    current_tip: str
    target_branch: str
    merge_base: str
    source_commits: list[str]


def default_target_branch(current_branch: str) -> str:
    """Name of the branch a squashed commit goes to when none is given."""
    return f"{SQUASHED_BRANCH_PREFIX}{current_branch}"


@contextmanager
def restore_checkout(git: GitClientBase) -> Iterator[str]:
    """Check the original branch (or detached commit) back out on every exit path.

    Raises:
        BranchRestoreError: If the original checkout could not be restored.
    """
    original = git.current_branch() or git.head_commit()
    logger.debug("Saving original checkout", ref=original)
    try:
        yield original
    finally:
        try:
            git.checkout(original)
        except ExternalCommandError as exc:
            logger.error("Failed to restore original checkout", ref=original, error=str(exc))
            raise BranchRestoreError(original, str(exc)) from exc
        logger.debug("Restored original checkout", ref=original)


def _plan_squash(config: SquashConfig, git: GitClientBase) -> _SquashPlan:
    """Check every precondition without touching the repository."""
    if not git.ref_exists(config.base_branch):
        raise BranchNotFoundError(config.base_branch)
    if git.has_tracked_changes():
        raise DirtyWorkingTreeError("The working tree has uncommitted changes, commit or stash them first")

    current_branch = config.current_branch or git.current_branch()
    if current_branch is None:
        raise InvalidSquashTargetError("HEAD is detached, check out the branch to squash first")
    target_branch = config.target_branch or default_target_branch(current_branch)
    if target_branch == current_branch:
        raise InvalidSquashTargetError(f"Cannot squash branch '{current_branch}' onto itself")

    merge_base = git.merge_base(config.base_branch, current_branch)
    if merge_base is None:
        raise MergeBaseNotFoundError(config.base_branch, current_branch)
    source_commits = git.rev_list(f"{merge_base}..{current_branch}")
    if not source_commits:
        raise NothingToSquashError(f"Branch '{current_branch}' has no commits ahead of '{config.base_branch}'")

    return _SquashPlan(
        current_branch=current_branch,
        current_tip=git.resolve_commit(current_branch),
        target_branch=target_branch,
        merge_base=merge_base,
        source_commits=source_commits,
    )


def _existing_target_message(config: SquashConfig, plan: _SquashPlan, git: GitClientBase) -> str:
    """Return the message of the single commit an existing target holds ahead of the base."""
    ahead = git.rev_list(f"{config.base_branch}..{plan.target_branch}")
    if len(ahead) > 1:
        raise AmbiguousSquashTargetError(plan.target_branch, config.base_branch, len(ahead))
    if not ahead:
        raise EmptySquashTargetError(plan.target_branch, config.base_branch)
    return git.commit_message(ahead[0])


def squash_branch(config: SquashConfig, git: GitClientBase) -> SquashResult:
    """Squash the current branch onto its target branch and restore the original checkout.

    Raises:
        SquashError: If a precondition fails. Nothing is changed in that case.
        ExternalCommandError: If a git command fails while the commit is built.
    """
    plan = _plan_squash(config, git)
    replace_existing = git.branch_exists(plan.target_branch) and not config.force
    message = config.message
    if replace_existing:
        existing_message = _existing_target_message(config, plan, git)
        if message is None:
            message = existing_message
    elif message is None and config.message_file is None:
        message = "\n".join(git.commit_subject(sha) for sha in plan.source_commits)

    logger.info(
        "Squashing branch",
        current_branch=plan.current_branch,
        target_branch=plan.target_branch,
        base_branch=config.base_branch,
        merge_base=plan.merge_base,
        commit_count=len(plan.source_commits),
        replace_existing=replace_existing,
    )
    with restore_checkout(git):
        if replace_existing:
            git.checkout(plan.target_branch)
        else:
            git.create_branch(plan.target_branch, plan.merge_base, force=config.force)
        git.reset_hard(plan.current_tip)
        git.reset_soft(plan.merge_base)
        if config.message_file is not None:
            git.commit(message_file=config.message_file)
        else:
            git.commit(message=message)
        if config.reword:
            git.amend_interactively()

    logger.info("Squashed branch", target_branch=plan.target_branch, commit_count=len(plan.source_commits))
    return SquashResult(
        target_branch=plan.target_branch,
        merge_base=plan.merge_base,
        squashed_commits=plan.source_commits,
        replaced_existing=replace_existing,
        message=message,
    )
