"""Async GitHub API client with rate-limit handling and optional retries."""

from __future__ import annotations

import asyncio
import time
from typing import Protocol, runtime_checkable

import httpx
import structlog

from forkaudit.core.config import DEFAULT_GITHUB_API

log = structlog.get_logger("forkaudit.upstream")

_RETRY_BASE_DELAY = 1.0  # seconds


class RateLimitError(Exception):
    """Raised when GitHub rate limit is exhausted and we need to wait."""

    def __init__(self, retry_after: int) -> None:
        self.retry_after = retry_after
        super().__init__(f"rate limit exceeded, retry after {retry_after}s")


@runtime_checkable
class HostingApiClient(Protocol):
    """Read-only view of a git hosting provider."""

    async def get_branch_head(self, owner: str, repo: str, branch: str) -> str: ...


class GitHubClient:
    """Thin async wrapper around the GitHub REST API."""

    def __init__(
        self,
        token: str | None = None,
        *,
        base_url: str = DEFAULT_GITHUB_API,
        timeout: float = 30.0,
        max_retries: int = 1,
    ) -> None:
        headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            headers["Authorization"] = f"token {token}"
        self._max_retries = max(max_retries, 1)
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def get_branch_head(self, owner: str, repo: str, branch: str) -> str:
        """Return the full SHA of the latest commit on *branch*."""
        response = await self._request_with_retry(f"/repos/{owner}/{repo}/commits/{branch}")
        data = response.json()
        sha = data.get("sha") if isinstance(data, dict) else None
        if not sha:
            raise ValueError(f"no sha in commit response for {owner}/{repo}@{branch}")
        return sha

    # ── internal ───────────────────────────────────────────────────────────

    async def _request_with_retry(self, url: str) -> httpx.Response:
        """GET with exponential backoff on 5xx, 403 rate-limit, and timeout errors.

        With ``max_retries=1`` (the default) every failure surfaces on the
        first attempt.
        """
        last_exc: Exception | None = None
        for attempt in range(self._max_retries):
            delay = _RETRY_BASE_DELAY * (2**attempt)
            try:
                resp = await self._client.get(url)
            except httpx.TimeoutException as exc:
                log.warning("github.timeout", url=url, attempt=attempt + 1)
                last_exc = exc
            else:
                wait = _rate_limit_wait(resp) if resp.status_code == 403 else None
                if wait is not None:
                    log.warning(
                        "github.rate_limit", url=url, wait_seconds=wait, attempt=attempt + 1
                    )
                    last_exc = RateLimitError(wait)
                    delay = wait
                elif resp.status_code < 500:
                    resp.raise_for_status()
                    return resp
                else:
                    log.warning(
                        "github.server_error", url=url, status=resp.status_code, attempt=attempt + 1
                    )
                    last_exc = httpx.HTTPStatusError(
                        f"{resp.status_code}", request=resp.request, response=resp
                    )

            if attempt < self._max_retries - 1:
                await asyncio.sleep(delay)

        raise last_exc  # type: ignore[misc]


def _rate_limit_wait(response: httpx.Response) -> int | None:
    """Seconds to back off if a 403 is a rate limit, else None.

    Retry-After wins, then the time left until X-RateLimit-Reset, then 60.
    """
    headers = response.headers
    remaining = headers.get("X-RateLimit-Remaining")
    if remaining is None and "Retry-After" not in headers:
        return None
    if remaining is not None and remaining != "0":
        return None
    for name, now in (("Retry-After", 0), ("X-RateLimit-Reset", int(time.time()))):
        value = headers.get(name, "")
        if value.isdigit():
            return max(int(value) - now, 1)
    return 60
