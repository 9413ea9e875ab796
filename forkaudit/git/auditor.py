"""Commit auditor: fork commits missing from the checked-out branch."""

from __future__ import annotations

import structlog

from forkaudit.core.config import DEFAULT_MAX_COMMITS
from forkaudit.exceptions import BoundaryNotFoundError
from forkaudit.git.client import VcsClient
from forkaudit.git.config import origin_web_url
from forkaudit.git.models import CommitRecord, MissingCommitReport

log = structlog.get_logger("forkaudit.git")


def commits_after(commits: list[CommitRecord], boundary: str, ref: str) -> list[CommitRecord]:
    """Return the commits newer than *boundary* in a newest-first log.

    Raises :class:`BoundaryNotFoundError` if *boundary* is not in the log.
    """
    extra: list[CommitRecord] = []
    for commit in commits:
        if commit.sha == boundary:
            return extra
        extra.append(commit)
    raise BoundaryNotFoundError(boundary, ref, len(commits))


async def audit(
    repo_path: str,
    tracked_branch: str,
    upstream_branch: str,
    vcs: VcsClient,
    *,
    max_commits: int = DEFAULT_MAX_COMMITS,
) -> MissingCommitReport:
    """Find commits on ``origin/<tracked_branch>`` that the current branch lacks.

    Only commits newer than the tip of ``upstream/<upstream_branch>`` are
    considered; each one is checked for containment in the checked-out
    branch.
    """
    web_url = origin_web_url(repo_path)
    current = await vcs.current_branch()

    upstream_ref = f"remotes/upstream/{upstream_branch}"
    tracked_ref = f"remotes/origin/{tracked_branch}"
    boundary = await vcs.latest_commit(upstream_ref)
    history = await vcs.log(tracked_ref, max_commits)
    extra = commits_after(history, boundary, tracked_ref)
    log.info(
        "auditor.extra_commits",
        tracked=tracked_ref,
        upstream=upstream_ref,
        boundary=boundary,
        count=len(extra),
    )

    report = MissingCommitReport(branch=current, web_url=web_url)
    for commit in extra:
        if not await vcs.branch_contains(current, commit.sha):
            report.commits.append(commit)
    return report
