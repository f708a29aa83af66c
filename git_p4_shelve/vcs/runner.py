"""Runs external commands on behalf of the git and Perforce adapters.

Commands fall into two groups. Read-only commands (listing branches, commits,
changelists and descriptions) always run, because every decision the tools
make depends on their output. Mutating commands (checkouts, resets, commits,
shelves) run only when the runner is not in dry-run mode; otherwise the exact
command line is echoed to stdout so it can be inspected or replayed by hand.
"""

import shlex
import subprocess
from pathlib import Path
from typing import Callable

import structlog
import typer

from git_p4_shelve.vcs.exceptions import ExternalCommandError

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class CommandRunner:
    """Executes external commands, honouring dry-run mode for mutating ones."""

    def __init__(self, dry_run: bool = False, cwd: Path | None = None, echo: Callable[[str], None] = typer.echo) -> None:
        """Initialize the runner.

        Args:
            dry_run: Echo mutating commands instead of executing them.
            cwd: Working directory for every command. Defaults to the process working directory.
            echo: Callable used to emit dry-run command lines.
        """
        self.dry_run = dry_run
        self.cwd = cwd
        self.echo = echo

    def execute(self, command: list[str]) -> subprocess.CompletedProcess[str]:
        """Run a command and capture its output without checking the exit status."""
        logger.debug("Running command", command=shlex.join(command), cwd=str(self.cwd) if self.cwd else None)
        try:
            return subprocess.run(command, capture_output=True, text=True, cwd=self.cwd)
        except FileNotFoundError as exc:
            raise ExternalCommandError(command, 127, f"{command[0]}: command not found") from exc

    def read(self, command: list[str]) -> str:
        """Run a read-only command and return its stdout with the trailing newline removed.

        Raises:
            ExternalCommandError: If the command exits with a non-zero status.
        """
        result = self.execute(command)
        if result.returncode != 0:
            raise ExternalCommandError(command, result.returncode, result.stderr)
        return result.stdout.rstrip("\n")

    def read_lines(self, command: list[str]) -> list[str]:
        """Run a read-only command and return its non-empty output lines."""
        return [line for line in self.read(command).splitlines() if line.strip()]

    def succeeds(self, command: list[str]) -> bool:
        """Run a read-only command and report whether it exited successfully."""
        return self.execute(command).returncode == 0

    def mutate(self, command: list[str]) -> None:
        """Run a command that changes repository or server state.

        In dry-run mode the command line is echoed instead of executed.

        Raises:
            ExternalCommandError: If the command exits with a non-zero status.
        """
        if self.dry_run:
            self.echo(shlex.join(command))
            return
        result = self.execute(command)
        if result.returncode != 0:
            raise ExternalCommandError(command, result.returncode, result.stderr)
        if result.stdout.strip():
            logger.debug("Command output", command=shlex.join(command), stdout=result.stdout.strip())

    def interactive(self, command: list[str]) -> None:
        """Run a mutating command attached to the terminal (for example one that opens an editor)."""
        if self.dry_run:
            self.echo(shlex.join(command))
            return
        logger.debug("Running interactive command", command=shlex.join(command))
        result = subprocess.run(command, cwd=self.cwd)
        if result.returncode != 0:
            raise ExternalCommandError(command, result.returncode)
