"""Upstream verifier: are branch-pinned Cargo.lock sources still at the branch tip?"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
import structlog

from forkaudit.exceptions import UpstreamQueryError
from forkaudit.scanner.models import GitSourceSpec, LockedPackageIndex
from forkaudit.upstream.github_client import HostingApiClient, RateLimitError

log = structlog.get_logger("forkaudit.upstream")


@dataclass
class MismatchReport:
    """A locked commit that is no longer the latest on its branch."""

    owner: str
    repo: str
    branch: str
    expected_sha: str
    actual_sha: str
    source: str


@dataclass
class VerifyResult:
    mismatches: list[MismatchReport] = field(default_factory=list)
    errors: list[UpstreamQueryError] = field(default_factory=list)


async def verify(
    index: LockedPackageIndex,
    client: HostingApiClient,
    *,
    keep_going: bool = False,
) -> VerifyResult:
    """Check every GitHub branch source in *index* against the branch head.

    Sources are queried one at a time. A failed query raises
    :class:`UpstreamQueryError` unless *keep_going* is set, in which case
    it is recorded in ``VerifyResult.errors`` and the next source is checked.
    """
    result = VerifyResult()
    for source in index:
        if source is None:
            continue
        spec = GitSourceSpec.parse(source)
        if spec is None:
            continue

        try:
            actual = await client.get_branch_head(spec.owner, spec.repo, spec.branch)
        except (httpx.HTTPError, RateLimitError, ValueError) as exc:
            error = UpstreamQueryError(source, f"{type(exc).__name__}: {exc}")
            if not keep_going:
                raise error from exc
            log.info("verifier.query_failed", source=source, error=str(exc))
            result.errors.append(error)
            continue

        if actual != spec.pinned_sha:
            log.info(
                "verifier.mismatch",
                repo=f"{spec.owner}/{spec.repo}",
                branch=spec.branch,
                expected=spec.pinned_sha,
                actual=actual,
            )
            result.mismatches.append(
                MismatchReport(
                    owner=spec.owner,
                    repo=spec.repo,
                    branch=spec.branch,
                    expected_sha=spec.pinned_sha,
                    actual_sha=actual,
                    source=source,
                )
            )
    return result
