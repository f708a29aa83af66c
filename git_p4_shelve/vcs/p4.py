"""Perforce changelist adapter for the p4 and git-p4 command lines."""

import structlog

from git_p4_shelve.shelve.models import PendingChangelist
from git_p4_shelve.utils.constants import (
    GIT_P4_CLIENT_CONFIG_KEY,
    GIT_P4_USER_CONFIG_KEY,
    P4_CHANGES_LINE_PATTERN,
    P4_SPEC_FIELD_PATTERN,
    P4_UNKNOWN_CLIENT,
    P4_ZTAG_LINE_PATTERN,
)
from git_p4_shelve.utils.helpers import normalize_description
from git_p4_shelve.vcs.abc import ChangelistClientBase
from git_p4_shelve.vcs.runner import CommandRunner

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


def parse_pending_changelists(lines: list[str]) -> list[PendingChangelist]:
    """Parse `p4 changes` output into pending changelists, preserving listing order."""
    changelists: list[PendingChangelist] = []
    for line in lines:
        match = P4_CHANGES_LINE_PATTERN.match(line)
        if match is None:
            logger.debug("Skipping unrecognized p4 changes line", line=line)
            continue
        changelists.append(
            PendingChangelist(
                number=int(match.group("number")),
                summary=match.group("summary"),
                user=match.group("user"),
                client=match.group("client"),
            )
        )
    return changelists


def parse_change_description(form: str) -> str:
    """Extract the Description field from a `p4 change -o` form."""
    description_lines: list[str] = []
    in_description = False
    for line in form.splitlines():
        if line.startswith("#"):
            continue
        if in_description:
            if P4_SPEC_FIELD_PATTERN.match(line):
                break
            description_lines.append(line[1:] if line.startswith("\t") else line.strip())
        elif line.startswith("Description:"):
            in_description = True
            inline = line[len("Description:") :].strip()
            if inline:
                description_lines.append(inline)
    return normalize_description("\n".join(description_lines))


def parse_ztag_fields(lines: list[str]) -> dict[str, str]:
    """Parse `p4 -ztag` output into a dictionary, keeping the first value of each field."""
    fields: dict[str, str] = {}
    for line in lines:
        match = P4_ZTAG_LINE_PATTERN.match(line)
        if match is not None:
            fields.setdefault(match.group("key"), match.group("value").strip())
    return fields


class P4CliAdapter(ChangelistClientBase):
    """Changelist adapter that drives `p4` for queries and `git p4` for shelving."""

    def __init__(
        self,
        runner: CommandRunner,
        client: str | None = None,
        user: str | None = None,
        p4_executable: str = "p4",
        git_executable: str = "git",
    ) -> None:
        """Initialize the adapter with a command runner and the Perforce identity to act as."""
        self.runner = runner
        self.client = client
        self.user = user
        self.p4_executable = p4_executable
        self.git_executable = git_executable

    def _p4(self, *args: str) -> list[str]:
        """Build a p4 command line carrying the configured client and user."""
        command = [self.p4_executable]
        if self.client:
            command += ["-c", self.client]
        if self.user:
            command += ["-u", self.user]
        return command + list(args)

    def _git_p4_submit(self, *args: str) -> list[str]:
        """Build a `git p4 submit` command line carrying the configured client and user."""
        command = [self.git_executable]
        if self.client:
            command += ["-c", f"{GIT_P4_CLIENT_CONFIG_KEY}={self.client}"]
        if self.user:
            command += ["-c", f"{GIT_P4_USER_CONFIG_KEY}={self.user}"]
        return command + ["p4", "submit", *args]

    def resolve_identity(self) -> tuple[str | None, str | None]:
        """Return the user and client to act as, asking `p4 info` for whichever is not configured.

        p4 may take its identity from P4CONFIG, `p4 set` or the login name, none
        of which the adapter sees directly.
        """
        if self.user and self.client:
            return self.user, self.client
        info = parse_ztag_fields(self.runner.read_lines(self._p4("-ztag", "info")))
        user = self.user or info.get("userName") or None
        client = self.client or info.get("clientName") or None
        if client == P4_UNKNOWN_CLIENT:
            client = None
        logger.debug("Resolved Perforce identity", user=user, client=client)
        return user, client

    def list_pending_changelists(self) -> list[PendingChangelist]:
        """List pending changelists of the current user and client, in p4's listing order."""
        user, client = self.resolve_identity()
        args = ["changes", "-s", "pending"]
        if user:
            args += ["-u", user]
        if client:
            args += ["-c", client]
        changelists = parse_pending_changelists(self.runner.read_lines(self._p4(*args)))
        logger.info("Fetched pending changelists", count=len(changelists), user=user, client=client)
        return changelists

    def fetch_description(self, changelist: int) -> str:
        """Fetch the full description of a changelist."""
        return parse_change_description(self.runner.read(self._p4("change", "-o", str(changelist))))

    def shelve_commit(self, commit: str) -> None:
        """Shelve a commit into a new pending changelist."""
        logger.info("Shelving commit into a new changelist", commit=commit)
        self.runner.mutate(self._git_p4_submit("--shelve", "--disable-rebase", "--commit", commit))

    def update_shelved_commit(self, commit: str, changelist: int) -> None:
        """Replace the shelved files of an existing changelist with a commit."""
        logger.info("Updating shelved changelist", commit=commit, changelist=changelist)
        self.runner.mutate(self._git_p4_submit("--update-shelve", str(changelist), "--disable-rebase", "--commit", commit))
