"""Resolves command line tokens into an ordered list of commit-changelist mappings."""

import structlog

from git_p4_shelve.shelve.exceptions import ConflictingMappingError, InvalidCommitTokenError, UpstreamNotFoundError
from git_p4_shelve.shelve.models import Commit, CommitMapping
from git_p4_shelve.vcs.abc import GitClientBase
from git_p4_shelve.vcs.exceptions import ExternalCommandError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def parse_mapping_token(token: str) -> tuple[str, int] | None:
    """Split a `ref=CL` token into its ref and changelist, or return None for other tokens."""
    if "=" not in token:
        return None
    ref, _, changelist = token.rpartition("=")
    if not ref:
        raise InvalidCommitTokenError(token, "missing commit reference before '='")
    if ".." in ref:
        raise InvalidCommitTokenError(token, "a changelist can only be mapped to a single commit")
    if not changelist.isdigit() or int(changelist) <= 0:
        raise InvalidCommitTokenError(token, "changelist must be a positive integer")
    return ref, int(changelist)


def _require_upstream(upstream: str | None, token: str | None = None) -> str:
    if upstream is None:
        reason = f"for branch '{token}'" if token else "when no commits are given"
        raise UpstreamNotFoundError(
            f"No upstream branch could be determined {reason}. Pass --upstream, set GIT_P4_SHELVE_UPSTREAM or set a tracking branch."
        )
    return upstream


def expand_token(token: str, git: GitClientBase, branches: set[str], upstream: str | None) -> list[str]:
    """Expand a range, branch or single ref token into commit ids, oldest first."""
    try:
        if ".." in token:
            return git.rev_list(token)
        if token in branches:
            return git.rev_list(f"{_require_upstream(upstream, token)}..{token}")
        return [git.resolve_commit(token)]
    except ExternalCommandError as exc:
        raise InvalidCommitTokenError(token, "not a valid commit, range or branch") from exc


def resolve_commit_tokens(tokens: list[str], git: GitClientBase, upstream: str | None) -> list[CommitMapping]:
    """Resolve command line tokens into commit-changelist mappings.

    Tokens keep their order and commits within a token are oldest first. With
    no tokens, every commit in upstream..HEAD is used. A commit named twice is
    kept at its first position.

    Raises:
        InvalidCommitTokenError: If a token cannot be resolved.
        ConflictingMappingError: If a commit is mapped to two different changelists.
        UpstreamNotFoundError: If the upstream branch is needed but unknown.
    """
    entries: list[tuple[str, int | None]] = []
    if not tokens:
        entries = [(sha, None) for sha in git.rev_list(f"{_require_upstream(upstream)}..HEAD")]
    else:
        branches: set[str] | None = None
        for token in tokens:
            mapping = parse_mapping_token(token)
            if mapping is not None:
                ref, changelist = mapping
                try:
                    entries.append((git.resolve_commit(ref), changelist))
                except ExternalCommandError as exc:
                    raise InvalidCommitTokenError(token, f"'{ref}' is not a valid commit") from exc
                continue
            if branches is None:
                branches = set(git.list_branches())
            entries.extend((sha, None) for sha in expand_token(token, git, branches, upstream))

    mappings: dict[str, CommitMapping] = {}
    for sha, changelist in entries:
        existing = mappings.get(sha)
        if existing is None:
            mappings[sha] = CommitMapping(commit=Commit(sha=sha), changelist=changelist, explicit=changelist is not None)
        elif changelist is not None:
            if existing.changelist is None:
                existing.changelist = changelist
                existing.explicit = True
            elif existing.changelist != changelist:
                raise ConflictingMappingError(sha, existing.changelist, changelist)

    for mapping in mappings.values():
        mapping.commit.message = git.commit_message(mapping.commit.sha)
    logger.info(
        "Resolved commits",
        commit_count=len(mappings),
        explicit_mapping_count=sum(1 for mapping in mappings.values() if mapping.explicit),
    )
    return list(mappings.values())
