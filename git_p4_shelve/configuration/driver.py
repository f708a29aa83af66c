"""Synchronous driver for configuration reconciliation for the CLI entry points."""

from git_p4_shelve.configuration import reconcile
from git_p4_shelve.configuration.env import Settings
from git_p4_shelve.configuration.models import ShelveConfig
from git_p4_shelve.vcs.git import GitCliAdapter
from git_p4_shelve.vcs.runner import CommandRunner


def get_shelve_config(
    tokens: list[str] | None = None,
    shelve_new: bool = False,
    update_existing: bool = False,
    update_or_shelve: bool = False,
    print_mappings: bool = False,
    squash: bool = False,
    client: str | None = None,
    user: str | None = None,
    upstream: str | None = None,
    dry_run: bool = False,
    debug: bool = False,
) -> ShelveConfig:
    """Get the reconciled shelve configuration, reading git config from the current repository."""
    return reconcile.reconcile_shelve_configuration(
        git=GitCliAdapter(CommandRunner()),
        settings=Settings(),
        cli_tokens=tokens,
        cli_shelve_new=shelve_new,
        cli_update_existing=update_existing,
        cli_update_or_shelve=update_or_shelve,
        cli_print=print_mappings,
        cli_squash=squash,
        cli_client=client,
        cli_user=user,
        cli_upstream=upstream,
        cli_dry_run=dry_run,
        cli_debug=debug,
    )
