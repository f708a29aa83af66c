"""Defines the Command Line Interfaces (CLI) using Typer."""

from pathlib import Path

import structlog
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from git_p4_shelve.configuration.driver import get_shelve_config
from git_p4_shelve.configuration.exceptions import ConflictingActionsError, ConflictingMessageOptionsError
from git_p4_shelve.configuration.reconcile import reconcile_squash_configuration
from git_p4_shelve.shelve.driver import run_shelve
from git_p4_shelve.shelve.exceptions import ShelveError
from git_p4_shelve.shelve.models import ShelveDecision
from git_p4_shelve.squash.exceptions import SquashError
from git_p4_shelve.squash.squasher import squash_branch
from git_p4_shelve.utils.logging import configure_logging
from git_p4_shelve.vcs.exceptions import ExternalCommandError
from git_p4_shelve.vcs.git import GitCliAdapter
from git_p4_shelve.vcs.runner import CommandRunner

load_dotenv()

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

shelve_app = typer.Typer(pretty_exceptions_show_locals=False, add_completion=False)
squash_app = typer.Typer(pretty_exceptions_show_locals=False, add_completion=False)


@shelve_app.command(name="git-p4-shelve")
def shelve_cli(
    ctx: typer.Context,
    tokens: Annotated[
        list[str] | None,
        Argument(
            help="Commits to shelve: single refs, ranges (a..b), branch names, or ref=CL mappings. "
            "Defaults to every commit on the current branch that is not on the upstream branch.",
            show_default=False,
        ),
    ] = None,
    shelve_new: Annotated[bool, Option("--shelve-new", "-N", help="Shelve every commit into a new changelist.")] = False,
    update_existing: Annotated[
        bool, Option("--update-existing", "-E", help="Update the existing shelved changelist of every commit.")
    ] = False,
    update_or_shelve: Annotated[
        bool, Option("--update-or-shelve", "-U", help="Update commits that have a changelist, shelve the rest as new changelists.")
    ] = False,
    print_mappings: Annotated[bool, Option("--print", help="Print each commit with its changelist (the default action).")] = False,
    squash: Annotated[bool, Option("--squash", "-s", help="Squash the current branch onto squashed/<branch> first.")] = False,
    client: Annotated[str | None, Option("--client", "-c", help="Perforce client. Defaults to git config git-p4.client, then P4CLIENT.")] = None,
    user: Annotated[str | None, Option("--user", "-u", help="Perforce user. Defaults to git config git-p4.user, then P4USER.")] = None,
    upstream: Annotated[
        str | None,
        Option("--upstream", help="Upstream branch. Defaults to GIT_P4_SHELVE_UPSTREAM, the tracking branch, then p4/master."),
    ] = None,
    dry_run: Annotated[bool, Option("--dry-run", "-n", help="Print the commands that would change anything instead of running them.")] = False,
    debug: Annotated[bool, Option("--debug", envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Shelve git commits into Perforce changelists, or update the changelists they were shelved into."""
    configure_logging(debug)
    try:
        config = get_shelve_config(
            tokens=tokens,
            shelve_new=shelve_new,
            update_existing=update_existing,
            update_or_shelve=update_or_shelve,
            print_mappings=print_mappings,
            squash=squash,
            client=client,
            user=user,
            upstream=upstream,
            dry_run=dry_run,
            debug=debug,
        )
    except ConflictingActionsError as exc:
        raise typer.BadParameter(str(exc), ctx=ctx) from exc
    except ExternalCommandError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if config.debug and not debug:
        configure_logging(debug=True)

    if config.dry_run:
        logger.info("Dry run enabled - commands that change anything will be printed instead of run")

    try:
        result = run_shelve(config)
    except (ShelveError, SquashError, ExternalCommandError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    logger.info(
        "Shelve run complete",
        action=config.action.value,
        created=result.count(ShelveDecision.CREATE),
        updated=result.count(ShelveDecision.UPDATE),
        printed=result.count(ShelveDecision.PRINT),
        squashed_branch=result.squashed_branch,
    )


@squash_app.command(name="git-squash-branch")
def squash_branch_cli(
    ctx: typer.Context,
    base_branch: Annotated[str, Argument(help="Branch to squash against. Commits since the merge base with it are squashed.")],
    new_branch: Annotated[
        str | None, Argument(help="Branch to put the squashed commit on. Defaults to squashed/<current-branch>.", show_default=False)
    ] = None,
    force: Annotated[bool, Option("--force", help="Recreate the target branch even if it already exists.")] = False,
    message: Annotated[str | None, Option("-m", "--message", help="Commit message for the squashed commit.")] = None,
    message_file: Annotated[Path | None, Option("-F", "--file", help="Read the commit message from a file.")] = None,
    reword: Annotated[bool, Option("-r", "--reword", help="Edit the commit message after the squashed commit is created.")] = False,
    debug: Annotated[bool, Option("--debug", envvar="DEBUG", help="Enable debug logging.")] = False,
) -> None:
    """Squash the commits of the current branch into a single commit on another branch."""
    configure_logging(debug)
    try:
        config = reconcile_squash_configuration(
            base_branch=base_branch,
            target_branch=new_branch,
            force=force,
            message=message,
            message_file=str(message_file) if message_file is not None else None,
            reword=reword,
        )
    except ConflictingMessageOptionsError as exc:
        raise typer.BadParameter(str(exc), ctx=ctx) from exc

    try:
        result = squash_branch(config, GitCliAdapter(CommandRunner()))
    except (SquashError, ExternalCommandError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    action = "Replaced the squashed commit on" if result.replaced_existing else "Created"
    typer.echo(f"{action} {result.target_branch} from {len(result.squashed_commits)} commit(s)")


if __name__ == "__main__":
    shelve_app()
