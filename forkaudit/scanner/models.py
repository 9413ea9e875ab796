"""Data models for the manifest and lockfile scanners."""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_BRANCH = "master"

# Maps "<git>#<branch>" to the dependency names declared against that source.
DependencyIndex = dict[str, list[str]]

# Maps a lockfile source string (None when absent) to package names.
LockedPackageIndex = dict[str | None, list[str]]

_GIT_SOURCE_RE = re.compile(
    r"git\+https://github\.com/([^/]+)/([^/?#]+)\?branch=([^#]+)#(\w+)"
)


@dataclass
class DependencyDeclaration:
    """A git-sourced dependency found in a Cargo.toml."""

    name: str
    git_url: str
    branch: str = DEFAULT_BRANCH

    @property
    def key(self) -> str:
        return f"{self.git_url}#{self.branch}"


@dataclass
class LockedPackage:
    """A ``[[package]]`` block from Cargo.lock."""

    name: str | None = None
    source: str | None = None


@dataclass(frozen=True)
class GitSourceSpec:
    """A Cargo.lock source pinned to a GitHub branch."""

    owner: str
    repo: str
    branch: str
    pinned_sha: str

    @classmethod
    def parse(cls, source: str) -> GitSourceSpec | None:
        """Parse ``git+https://github.com/o/r(.git)?branch=b#sha``.

        Returns None for registry sources, other hosts, and git sources
        pinned by tag or rev.
        """
        m = _GIT_SOURCE_RE.search(source)
        if not m:
            return None
        return cls(
            owner=m.group(1),
            repo=m.group(2).removesuffix(".git"),
            branch=m.group(3),
            pinned_sha=m.group(4),
        )
