"""Git client adapter for the git command line."""

import structlog

from git_p4_shelve.vcs.abc import GitClientBase
from git_p4_shelve.vcs.runner import CommandRunner

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)


class GitCliAdapter(GitClientBase):
    """Git client adapter that drives the `git` executable through a CommandRunner."""

    def __init__(self, runner: CommandRunner, git_executable: str = "git") -> None:
        """Initialize the adapter with an already-configured command runner."""
        self.runner = runner
        self.git_executable = git_executable

    def _git(self, *args: str) -> list[str]:
        """Build a git command line."""
        return [self.git_executable, *args]

    # Configuration
    def config_get(self, key: str) -> str | None:
        """Get a git configuration value, or None if it is unset."""
        result = self.runner.execute(self._git("config", "--get", key))
        if result.returncode != 0:
            return None
        value = result.stdout.strip()
        return value or None

    # Refs and branches
    def current_branch(self) -> str | None:
        """Get the checked-out branch name, or None when HEAD is detached."""
        result = self.runner.execute(self._git("symbolic-ref", "--short", "-q", "HEAD"))
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def head_commit(self) -> str:
        """Get the commit HEAD points to."""
        return self.runner.read(self._git("rev-parse", "HEAD"))

    def upstream_branch(self) -> str | None:
        """Get the tracking branch of the checked-out branch, if any."""
        result = self.runner.execute(self._git("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{upstream}"))
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def list_branches(self) -> list[str]:
        """List local and remote-tracking branch names."""
        return self.runner.read_lines(self._git("for-each-ref", "--format=%(refname:short)", "refs/heads", "refs/remotes"))

    def ref_exists(self, ref: str) -> bool:
        """Check whether a ref resolves to a commit."""
        return self.runner.succeeds(self._git("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"))

    def branch_exists(self, branch: str) -> bool:
        """Check whether a local branch exists."""
        return self.runner.succeeds(self._git("rev-parse", "--verify", "--quiet", f"refs/heads/{branch}"))

    # Commits
    def resolve_commit(self, ref: str) -> str:
        """Resolve a ref to a full commit id."""
        return self.runner.read(self._git("rev-parse", "--verify", f"{ref}^{{commit}}"))

    def merge_base(self, first: str, second: str) -> str | None:
        """Get the merge base of two refs, or None if they share no history."""
        result = self.runner.execute(self._git("merge-base", first, second))
        if result.returncode != 0:
            logger.debug("No merge base found", first=first, second=second, stderr=result.stderr.strip())
            return None
        return result.stdout.strip() or None

    def rev_list(self, revision_range: str) -> list[str]:
        """List the commits in a range, oldest first."""
        return self.runner.read_lines(self._git("rev-list", "--reverse", revision_range))

    def commit_message(self, ref: str) -> str:
        """Get the full message of a commit without trailing whitespace."""
        return self.runner.read(self._git("log", "-1", "--format=%B", ref)).rstrip()

    def commit_subject(self, ref: str) -> str:
        """Get the subject line of a commit."""
        return self.runner.read(self._git("log", "-1", "--format=%s", ref))

    # Working tree
    def has_tracked_changes(self) -> bool:
        """Check whether tracked files have uncommitted changes."""
        return bool(self.runner.read(self._git("status", "--porcelain", "--untracked-files=no")).strip())

    def checkout(self, ref: str) -> None:
        """Check out a branch or commit."""
        self.runner.mutate(self._git("checkout", "-q", ref))

    def create_branch(self, branch: str, start_point: str, force: bool = False) -> None:
        """Create (or with force, recreate) a branch at a start point and check it out."""
        self.runner.mutate(self._git("checkout", "-q", "-B" if force else "-b", branch, start_point))

    def reset_hard(self, ref: str) -> None:
        """Reset the checked-out branch, index and working tree to a ref."""
        self.runner.mutate(self._git("reset", "-q", "--hard", ref))

    def reset_soft(self, ref: str) -> None:
        """Reset the checked-out branch to a ref, keeping the index and working tree."""
        self.runner.mutate(self._git("reset", "-q", "--soft", ref))

    def commit(self, message: str | None = None, message_file: str | None = None) -> None:
        """Commit the index with a message or a message file."""
        if message_file is not None:
            self.runner.mutate(self._git("commit", "-q", "-F", message_file))
        elif message is not None:
            self.runner.mutate(self._git("commit", "-q", "-m", message))
        else:
            raise ValueError("A commit message or a commit message file is required")

    def amend_interactively(self) -> None:
        """Amend the last commit, opening its message in the editor."""
        self.runner.interactive(self._git("commit", "--amend"))
