"""Matches commits to pending changelists by their description text.

Fetching a changelist's full description costs one `p4 change -o` call, so
matching runs in two stages. First, the leading characters of the commit
message are searched for in the one-line summaries returned by `p4 changes`.
Only the changelists that pass are fetched in full and compared against the
whole commit message. The first exact match in listing order wins.
"""

from typing import Collection

import structlog

from git_p4_shelve.shelve.models import CommitMapping, PendingChangelist
from git_p4_shelve.utils.helpers import collapse_whitespace, message_prefix, normalize_description
from git_p4_shelve.vcs.abc import ChangelistClientBase

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def get_description(changelist: PendingChangelist, changelists: ChangelistClientBase) -> str:
    """Return the full description of a changelist, fetching it on first use."""
    if changelist.description is None:
        changelist.description = changelists.fetch_description(changelist.number)
    return changelist.description


def prefilter_candidates(message: str, pending: list[PendingChangelist], exclude: Collection[int] = ()) -> list[PendingChangelist]:
    """Return the pending changelists whose summary contains the start of the message.

    An empty or very short message matches every summary.
    """
    prefix = message_prefix(message)
    return [changelist for changelist in pending if changelist.number not in exclude and prefix in collapse_whitespace(changelist.summary)]


def find_matching_changelist(
    message: str,
    pending: list[PendingChangelist],
    changelists: ChangelistClientBase,
    exclude: Collection[int] = (),
) -> PendingChangelist | None:
    """Find the first pending changelist whose description equals the commit message."""
    expected = normalize_description(message)
    candidates = prefilter_candidates(message, pending, exclude)
    logger.debug("Prefiltered changelist candidates", prefix=message_prefix(message), candidates=[c.number for c in candidates])
    for candidate in candidates:
        if normalize_description(get_description(candidate, changelists)) == expected:
            return candidate
    return None


def match_changelists(
    mappings: list[CommitMapping],
    pending: list[PendingChangelist],
    changelists: ChangelistClientBase,
) -> list[CommitMapping]:
    """Fill in the changelist of every mapping that has none, where a match exists.

    A changelist already used by another mapping in this run is never matched
    again. This function mutates the mappings and returns them.
    """
    claimed: set[int] = {mapping.changelist for mapping in mappings if mapping.changelist is not None}
    for mapping in mappings:
        if mapping.changelist is not None:
            continue
        match = find_matching_changelist(mapping.commit.message, pending, changelists, exclude=claimed)
        if match is None:
            logger.info("No pending changelist matches commit", commit=mapping.commit.sha, subject=mapping.commit.subject)
            continue
        logger.info("Matched commit to pending changelist", commit=mapping.commit.sha, changelist=match.number)
        mapping.changelist = match.number
        claimed.add(match.number)
    return mappings
