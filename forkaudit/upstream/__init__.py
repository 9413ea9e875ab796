"""Upstream verification of branch-pinned lockfile sources."""

from forkaudit.upstream.github_client import GitHubClient, HostingApiClient
from forkaudit.upstream.verifier import MismatchReport, VerifyResult, verify

__all__ = ["GitHubClient", "HostingApiClient", "MismatchReport", "VerifyResult", "verify"]
