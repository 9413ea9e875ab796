"""Shared pytest fixtures for forkaudit tests."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers bound to CliRunner streams once a test is done."""
    yield
    logging.getLogger().handlers.clear()


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-C", str(repo), *args],
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


@pytest.fixture
def git():
    """Run a git command in a repository and return its stdout."""
    return _git


@pytest.fixture
def git_repo(tmp_path):
    """An empty repository on branch ``main`` with a committer identity set."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")
    _git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(repo, "config", "user.email", "dev@example.com")
    _git(repo, "config", "user.name", "Dev")
    _git(repo, "config", "commit.gpgsign", "false")
    return repo
