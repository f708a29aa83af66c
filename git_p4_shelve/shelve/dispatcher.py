"""Applies the requested shelve action to resolved commit-changelist mappings."""

from typing import Callable

import structlog
import typer

from git_p4_shelve.configuration.models import ShelveAction
from git_p4_shelve.shelve.exceptions import ChangelistNotFoundError, ExplicitMappingNotAllowedError
from git_p4_shelve.shelve.models import CommitMapping, ShelveDecision
from git_p4_shelve.shelve.results import ShelveResult
from git_p4_shelve.utils.constants import NEW_CHANGELIST_PLACEHOLDER
from git_p4_shelve.vcs.abc import ChangelistClientBase

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def format_mapping(mapping: CommitMapping) -> str:
    """Format a mapping as `<sha> <changelist|new> <subject>`."""
    changelist = str(mapping.changelist) if mapping.changelist is not None else NEW_CHANGELIST_PLACEHOLDER
    return f"{mapping.commit.sha} {changelist} {mapping.commit.subject}".rstrip()


def partition_mappings(mappings: list[CommitMapping]) -> tuple[list[CommitMapping], list[CommitMapping]]:
    """Split mappings into those with a changelist (to update) and those without (to create)."""
    to_update = [mapping for mapping in mappings if mapping.changelist is not None]
    to_create = [mapping for mapping in mappings if mapping.changelist is None]
    return to_update, to_create


def print_mappings(mappings: list[CommitMapping], echo: Callable[[str], None] = typer.echo) -> list[ShelveResult]:
    """Print one line per mapping without changing anything."""
    for mapping in mappings:
        echo(format_mapping(mapping))
    return [ShelveResult(mapping, ShelveDecision.PRINT) for mapping in mappings]


def shelve_new(mappings: list[CommitMapping], changelists: ChangelistClientBase) -> list[ShelveResult]:
    """Shelve every commit into its own new changelist.

    Raises:
        ExplicitMappingNotAllowedError: If any commit was explicitly mapped to a changelist.
    """
    explicit = [mapping.commit.sha for mapping in mappings if mapping.explicit]
    if explicit:
        raise ExplicitMappingNotAllowedError(explicit)
    return _create_batch(mappings, changelists)


def update_existing(mappings: list[CommitMapping], changelists: ChangelistClientBase) -> list[ShelveResult]:
    """Update the shelved changelist of every commit.

    Every commit is checked before anything is updated.

    Raises:
        ChangelistNotFoundError: If any commit has no changelist.
    """
    missing = [mapping.commit.sha for mapping in mappings if mapping.changelist is None]
    if missing:
        raise ChangelistNotFoundError(missing)
    return _update_batch(mappings, changelists)


def update_or_shelve(mappings: list[CommitMapping], changelists: ChangelistClientBase) -> list[ShelveResult]:
    """Update commits that have a changelist, then shelve the rest into new changelists."""
    to_update, to_create = partition_mappings(mappings)
    logger.info("Partitioned commits", update_count=len(to_update), create_count=len(to_create))
    return _update_batch(to_update, changelists) + _create_batch(to_create, changelists)


def _create_batch(mappings: list[CommitMapping], changelists: ChangelistClientBase) -> list[ShelveResult]:
    # git p4 cannot shelve a non-contiguous set of commits in one call.
    results: list[ShelveResult] = []
    for mapping in mappings:
        changelists.shelve_commit(mapping.commit.sha)
        results.append(ShelveResult(mapping, ShelveDecision.CREATE))
    return results


def _update_batch(mappings: list[CommitMapping], changelists: ChangelistClientBase) -> list[ShelveResult]:
    results: list[ShelveResult] = []
    for mapping in mappings:
        if mapping.changelist is None:
            raise ValueError("Mapping has no changelist to update")
        changelists.update_shelved_commit(mapping.commit.sha, mapping.changelist)
        results.append(ShelveResult(mapping, ShelveDecision.UPDATE))
    return results


def dispatch_shelve_action(
    action: ShelveAction,
    mappings: list[CommitMapping],
    changelists: ChangelistClientBase,
    echo: Callable[[str], None] = typer.echo,
) -> list[ShelveResult]:
    """Apply the requested action to every mapping and return what was done for each."""
    logger.info("Dispatching shelve action", action=action.value, commit_count=len(mappings))
    if action == ShelveAction.PRINT:
        return print_mappings(mappings, echo)
    elif action == ShelveAction.SHELVE_NEW:
        return shelve_new(mappings, changelists)
    elif action == ShelveAction.UPDATE_EXISTING:
        return update_existing(mappings, changelists)
    elif action == ShelveAction.UPDATE_OR_SHELVE:
        return update_or_shelve(mappings, changelists)
    raise ValueError(f"Unknown shelve action: {action}")
