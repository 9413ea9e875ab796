"""Read-only git queries run as subprocesses."""

from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable

import structlog

from forkaudit.exceptions import VcsCommandError
from forkaudit.git.models import CommitRecord

log = structlog.get_logger("forkaudit.git")


@runtime_checkable
class VcsClient(Protocol):
    """The git queries the commit auditor needs."""

    async def current_branch(self) -> str: ...

    async def latest_commit(self, ref: str) -> str: ...

    async def log(self, ref: str, max_count: int) -> list[CommitRecord]: ...

    async def branch_contains(self, branch: str, sha: str) -> bool: ...


def parse_log(output: str) -> list[CommitRecord]:
    """Parse ``%h %s`` log lines into records, newest first."""
    commits: list[CommitRecord] = []
    for line in output.strip().splitlines():
        if not line:
            continue
        sha, _, subject = line.partition(" ")
        commits.append(CommitRecord(sha=sha, subject=subject))
    return commits


class GitClient:
    """Runs git non-interactively inside *repo_path*."""

    def __init__(self, repo_path: str, *, timeout: float = 60.0) -> None:
        self._repo_path = repo_path
        self._timeout = timeout

    async def current_branch(self) -> str:
        branch = await self._run("branch", "--show-current")
        if not branch:
            raise VcsCommandError(
                ["git", "branch", "--show-current"], 0, "HEAD is detached, no branch checked out"
            )
        return branch

    async def latest_commit(self, ref: str) -> str:
        return await self._run("log", "-1", "--pretty=format:%h", ref)

    async def log(self, ref: str, max_count: int) -> list[CommitRecord]:
        output = await self._run("log", f"--max-count={max_count}", "--pretty=format:%h %s", ref)
        return parse_log(output)

    async def branch_contains(self, branch: str, sha: str) -> bool:
        output = await self._run("branch", "--list", branch, "--contains", sha)
        return len(output) > 0

    async def _run(self, *args: str) -> str:
        """Run a git command, returning stripped stdout.

        Raises :class:`VcsCommandError` on a missing binary, timeout, or
        non-zero exit code.
        """
        cmd = ["git", "-C", self._repo_path, *args]
        log.debug("git.run", cmd=cmd)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise VcsCommandError(cmd, None, str(exc)) from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), self._timeout)
        except asyncio.TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise VcsCommandError(cmd, None, f"timed out after {self._timeout}s") from exc

        if proc.returncode != 0:
            raise VcsCommandError(cmd, proc.returncode, stderr.decode(errors="replace").strip())
        return stdout.decode(errors="replace").strip()
