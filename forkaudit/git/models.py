"""Data models for the commit auditor."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CommitRecord:
    """One line of ``git log --pretty=format:'%h %s'``."""

    sha: str
    subject: str


@dataclass
class MissingCommitReport:
    """Commits on the tracked branch that the local branch does not contain."""

    branch: str
    web_url: str
    commits: list[CommitRecord] = field(default_factory=list)

    def commit_url(self, sha: str) -> str:
        return f"{self.web_url}/commit/{sha}"
