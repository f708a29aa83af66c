"""Pytest configuration for integration tests against a real git repository."""

import shutil
import subprocess
from pathlib import Path
from typing import Callable

import pytest

from git_p4_shelve.vcs.git import GitCliAdapter
from git_p4_shelve.vcs.runner import CommandRunner


@pytest.fixture(autouse=True)
def isolated_git_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's git configuration out of the tests and give commits a fixed identity."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / ".gitconfig"))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Alice Example")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "alice@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Alice Example")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "alice@example.com")
    for name in ("P4CLIENT", "P4USER", "GIT_P4_SHELVE_UPSTREAM", "DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def repo_path(tmp_path: Path) -> Path:
    """An empty git repository on branch main."""
    path = tmp_path / "repo"
    path.mkdir()
    subprocess.run(["git", "init", "-q", "-b", "main"], cwd=path, check=True)
    return path


@pytest.fixture
def run_git(repo_path: Path) -> Callable[..., str]:
    """Run a git command in the test repository and return its stripped stdout."""

    def _run(*args: str) -> str:
        result = subprocess.run(["git", *args], cwd=repo_path, check=True, capture_output=True, text=True)
        return result.stdout.strip()

    return _run


@pytest.fixture
def commit_file(repo_path: Path, run_git: Callable[..., str]) -> Callable[[str, str, str], str]:
    """Write a file, commit it and return the new commit id."""

    def _commit(name: str, content: str, message: str) -> str:
        (repo_path / name).write_text(content)
        run_git("add", name)
        run_git("commit", "-q", "-m", message)
        return run_git("rev-parse", "HEAD")

    return _commit


@pytest.fixture
def topic_repo(run_git: Callable[..., str], commit_file: Callable[[str, str, str], str]) -> dict[str, str]:
    """A repository where topic has two commits ahead of main, with topic checked out."""
    base = commit_file("README.md", "readme\n", "Initial commit")
    run_git("checkout", "-q", "-b", "topic")
    first = commit_file("widget.txt", "widget\n", "Add widget")
    second = commit_file("widget.txt", "widget v2\n", "Fix widget\n\nThe widget no longer overheats.")
    return {"base": base, "first": first, "second": second}


@pytest.fixture
def git_adapter(repo_path: Path) -> GitCliAdapter:
    """A git adapter bound to the test repository."""
    return GitCliAdapter(CommandRunner(cwd=repo_path))
