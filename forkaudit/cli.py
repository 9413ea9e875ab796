"""CLI entry point: forkaudit.

Subcommands:
    forkaudit deps [PATH] [--lock] [--verbose]          # git dependencies in Cargo.toml / Cargo.lock
    forkaudit commits PATH BRANCH UPSTREAM_BRANCH       # fork commits missing from the local branch
"""

from __future__ import annotations

import asyncio
import os
import sys
from collections.abc import Coroutine
from typing import Any, NoReturn

import click
import structlog

from forkaudit.core.config import DEFAULT_MAX_COMMITS, RunConfig
from forkaudit.core.logging import setup_logging
from forkaudit.exceptions import ConfigParseError, ForkAuditError
from forkaudit.git.auditor import audit
from forkaudit.git.client import GitClient, VcsClient
from forkaudit.git.config import read_origin_url
from forkaudit.report import render_index, render_mismatch, render_missing_commits
from forkaudit.scanner.cargo_lock import LOCKFILE_NAME, scan_lockfile
from forkaudit.scanner.cargo_toml import scan_manifests
from forkaudit.upstream.github_client import GitHubClient, HostingApiClient
from forkaudit.upstream.verifier import verify

log = structlog.get_logger("forkaudit.cli")


def _fail(exc: ForkAuditError) -> NoReturn:
    log.error("cli.failed", error=str(exc), error_type=type(exc).__name__)
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


def _load_config(**overrides: object) -> RunConfig:
    try:
        return RunConfig.from_env(**overrides)
    except ForkAuditError as exc:
        _fail(exc)


def _run_flow(flow: Coroutine[Any, Any, int]) -> None:
    """Run an async flow, turning forkaudit errors into exit code 1."""
    try:
        code = asyncio.run(flow)
    except ForkAuditError as exc:
        _fail(exc)
    if code:
        sys.exit(code)


# ── flows ──────────────────────────────────────────────────────────────────


async def deps_flow(
    path: str,
    config: RunConfig,
    *,
    lock: bool = False,
    verbose: bool = False,
    client: HostingApiClient | None = None,
) -> int:
    """List git dependencies and, with *lock*, verify branch-pinned lock entries.

    Returns the process exit code.
    """
    try:
        click.echo(read_origin_url(path))
    except ConfigParseError as exc:
        log.warning("cli.no_origin", error=str(exc))

    dependencies = scan_manifests(path)
    click.echo(render_index("Cargo.toml", dependencies, verbose))

    if not lock:
        return 0

    packages = scan_lockfile(os.path.join(path, LOCKFILE_NAME))
    click.echo(render_index("Cargo.lock", packages, verbose))

    if client is None:
        async with GitHubClient(
            config.github_token,
            base_url=config.github_api,
            timeout=config.http_timeout,
            max_retries=config.github_retries,
        ) as gh:
            result = await verify(packages, gh, keep_going=config.keep_going)
    else:
        result = await verify(packages, client, keep_going=config.keep_going)

    for mismatch in result.mismatches:
        click.echo(render_mismatch(mismatch))
    for error in result.errors:
        click.echo(f"Error: {error}", err=True)
    return 1 if result.errors else 0


async def commits_flow(
    path: str,
    branch: str,
    upstream_branch: str,
    config: RunConfig,
    *,
    vcs: VcsClient | None = None,
) -> int:
    """Print the commits of ``origin/<branch>`` missing from the checked-out branch."""
    if vcs is None:
        vcs = GitClient(path, timeout=config.git_timeout)
    report = await audit(path, branch, upstream_branch, vcs, max_commits=config.max_commits)
    click.echo(render_missing_commits(report))
    return 0


# ── commands ───────────────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: $FORKAUDIT_LOG_LEVEL or WARNING)",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """forkaudit: audit git dependencies and fork branches of a Cargo project."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(2)
    setup_logging(log_level)


@main.command("deps")
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False))
@click.option("-l", "--lock", is_flag=True, help="Verify Cargo.lock against upstream branches")
@click.option("-v", "--verbose", is_flag=True, help="Print full JSON instead of key lists")
@click.option(
    "--keep-going",
    is_flag=True,
    help="Continue verifying after a failed upstream query (exit 1 at the end)",
)
def deps(path: str, lock: bool, verbose: bool, keep_going: bool) -> None:
    """Get git dependency information from Cargo.toml (and Cargo.lock)."""
    structlog.contextvars.bind_contextvars(command="deps", path=path)
    config = _load_config(keep_going=keep_going)
    _run_flow(deps_flow(path, config, lock=lock, verbose=verbose))


@main.command("commits")
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.argument("previous_branch")
@click.argument("previous_branch_upstream")
@click.option(
    "--max-commits",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_COMMITS,
    show_default=True,
    help="How far back to search origin/PREVIOUS_BRANCH for the upstream tip",
)
def commits(path: str, previous_branch: str, previous_branch_upstream: str, max_commits: int) -> None:
    """List commits on origin/PREVIOUS_BRANCH missing from the current branch.

    Only commits newer than the tip of upstream/PREVIOUS_BRANCH_UPSTREAM are
    considered.
    """
    structlog.contextvars.bind_contextvars(command="commits", path=path)
    config = _load_config(max_commits=max_commits)
    _run_flow(commits_flow(path, previous_branch, previous_branch_upstream, config))


if __name__ == "__main__":
    main()
