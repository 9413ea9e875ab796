"""Report printer: text rendering of scan, verify and audit results."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

import click

from forkaudit.git.models import MissingCommitReport
from forkaudit.upstream.verifier import MismatchReport


def render_index(title: str, index: Mapping[str | None, Sequence[str]], verbose: bool) -> str:
    """Render a source-keyed index under a *title* header line.

    Verbose mode dumps the whole mapping as indented JSON; otherwise only
    the keys are listed, one per line.
    """
    if verbose:
        body = json.dumps(index, indent=2)
    else:
        body = "\n".join("null" if key is None else key for key in index)
    return f"{title}\n{body}" if body else title


def render_mismatch(mismatch: MismatchReport) -> str:
    return (
        f"SHA error! The latest commit hash is {mismatch.actual_sha} "
        f"for repo {mismatch.owner}/{mismatch.repo}, branch '{mismatch.branch}', "
        f"got {mismatch.expected_sha}: \n\t{mismatch.source}"
    )


def render_missing_commits(report: MissingCommitReport) -> str:
    if not report.commits:
        return f"No missing commits on branch {report.branch}."
    lines = [f"Need the following commits on branch {report.branch}:"]
    for commit in report.commits:
        lines.append(
            f"{click.style(commit.sha, fg='yellow')} "
            f"{click.style(report.commit_url(commit.sha), dim=True)} "
            f"{commit.subject}"
        )
    return "\n".join(lines)
