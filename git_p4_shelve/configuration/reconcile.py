"""Reconcile configuration between CLI arguments, git config and environment variables."""

import structlog

from git_p4_shelve.configuration.env import Settings
from git_p4_shelve.configuration.exceptions import ConflictingActionsError, ConflictingMessageOptionsError
from git_p4_shelve.configuration.models import ShelveAction, ShelveConfig, SquashConfig
from git_p4_shelve.utils.constants import DEFAULT_UPSTREAM_BRANCH, GIT_P4_CLIENT_CONFIG_KEY, GIT_P4_USER_CONFIG_KEY
from git_p4_shelve.vcs.abc import GitClientBase

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def resolve_shelve_action(
    shelve_new: bool = False,
    update_existing: bool = False,
    update_or_shelve: bool = False,
    print_mappings: bool = False,
) -> ShelveAction:
    """Resolves the single action requested by the action flags.

    Args:
        shelve_new (bool): --shelve-new was given.
        update_existing (bool): --update-existing was given.
        update_or_shelve (bool): --update-or-shelve was given.
        print_mappings (bool): --print was given.

    Raises:
        ConflictingActionsError: If more than one action flag was given.

    Returns:
        ShelveAction: The requested action, ShelveAction.PRINT when none was given.
    """
    requested = [
        action
        for action, flag in (
            (ShelveAction.SHELVE_NEW, shelve_new),
            (ShelveAction.UPDATE_EXISTING, update_existing),
            (ShelveAction.UPDATE_OR_SHELVE, update_or_shelve),
            (ShelveAction.PRINT, print_mappings),
        )
        if flag
    ]
    if len(requested) > 1:
        raise ConflictingActionsError(requested)
    if not requested:
        return ShelveAction.PRINT
    return requested[0]


def reconcile_client(cli_client: str | None, git: GitClientBase, settings: Settings) -> str | None:
    """Pick the Perforce client from the CLI, then git config, then P4CLIENT."""
    if cli_client:
        return cli_client
    git_client = git.config_get(GIT_P4_CLIENT_CONFIG_KEY)
    if git_client:
        return git_client
    return settings.P4CLIENT


def reconcile_user(cli_user: str | None, git: GitClientBase, settings: Settings) -> str | None:
    """Pick the Perforce user from the CLI, then git config, then P4USER."""
    if cli_user:
        return cli_user
    git_user = git.config_get(GIT_P4_USER_CONFIG_KEY)
    if git_user:
        return git_user
    return settings.P4USER


def reconcile_upstream(cli_upstream: str | None, git: GitClientBase, settings: Settings) -> str | None:
    """Pick the upstream branch.

    The CLI value wins, then GIT_P4_SHELVE_UPSTREAM, then the tracking branch of
    the checked-out branch, then p4/master if it exists. None is returned when
    nothing applies; callers that need an upstream raise at that point.
    """
    if cli_upstream:
        return cli_upstream
    if settings.GIT_P4_SHELVE_UPSTREAM:
        return settings.GIT_P4_SHELVE_UPSTREAM
    tracking_branch = git.upstream_branch()
    if tracking_branch:
        return tracking_branch
    if git.ref_exists(DEFAULT_UPSTREAM_BRANCH):
        return DEFAULT_UPSTREAM_BRANCH
    logger.debug("No upstream branch could be determined")
    return None


def reconcile_shelve_configuration(
    git: GitClientBase,
    settings: Settings,
    cli_tokens: list[str] | None = None,
    cli_shelve_new: bool = False,
    cli_update_existing: bool = False,
    cli_update_or_shelve: bool = False,
    cli_print: bool = False,
    cli_squash: bool = False,
    cli_client: str | None = None,
    cli_user: str | None = None,
    cli_upstream: str | None = None,
    cli_dry_run: bool = False,
    cli_debug: bool = False,
) -> ShelveConfig:
    """Reconcile CLI arguments with git config and environment settings into a ShelveConfig."""
    action = resolve_shelve_action(
        shelve_new=cli_shelve_new,
        update_existing=cli_update_existing,
        update_or_shelve=cli_update_or_shelve,
        print_mappings=cli_print,
    )
    config = ShelveConfig(
        action=action,
        tokens=list(cli_tokens or []),
        upstream=reconcile_upstream(cli_upstream, git, settings),
        client=reconcile_client(cli_client, git, settings),
        user=reconcile_user(cli_user, git, settings),
        squash=cli_squash,
        dry_run=cli_dry_run,
        debug=cli_debug or settings.DEBUG,
    )
    logger.debug(
        "Reconciled shelve configuration",
        action=config.action.value,
        upstream=config.upstream,
        client=config.client,
        user=config.user,
        squash=config.squash,
        dry_run=config.dry_run,
    )
    return config


def reconcile_squash_configuration(
    base_branch: str,
    target_branch: str | None = None,
    force: bool = False,
    message: str | None = None,
    message_file: str | None = None,
    reword: bool = False,
) -> SquashConfig:
    """Validate the squash options and build a SquashConfig.

    Raises:
        ConflictingMessageOptionsError: If both a message and a message file were given.
    """
    if message is not None and message_file is not None:
        raise ConflictingMessageOptionsError("Only one of -m and -F may be given")
    return SquashConfig(
        base_branch=base_branch,
        target_branch=target_branch,
        force=force,
        message=message,
        message_file=message_file,
        reword=reword,
    )
