"""Lockfile scanner: line-oriented reading of Cargo.lock package blocks."""

from __future__ import annotations

import re

import structlog

from forkaudit.exceptions import FilesystemError
from forkaudit.scanner.models import LockedPackage, LockedPackageIndex

log = structlog.get_logger("forkaudit.scanner")

LOCKFILE_NAME = "Cargo.lock"

_BLOCK_START = "[[package]]"
_NAME_RE = re.compile(r'^name = "([^"]+)"')
_SOURCE_RE = re.compile(r'^source = "([^"]+)"')


def parse_lockfile(content: str) -> list[LockedPackage]:
    """Split Cargo.lock text into packages.

    A block is emitted when the next ``[[package]]`` marker is seen; the
    last block is flushed after the final line.
    """
    packages: list[LockedPackage] = []
    current = LockedPackage()

    for raw in content.splitlines():
        line = raw.strip()
        if line == _BLOCK_START:
            if current.name is not None:
                packages.append(current)
            current = LockedPackage()
            continue

        m = _NAME_RE.match(line)
        if m:
            current.name = m.group(1)
            continue
        m = _SOURCE_RE.match(line)
        if m:
            current.source = m.group(1)

    if current.name is not None:
        packages.append(current)
    return packages


def index_packages(packages: list[LockedPackage]) -> LockedPackageIndex:
    """Group package names by source; sourceless packages share the None bucket."""
    index: LockedPackageIndex = {}
    for pkg in packages:
        index.setdefault(pkg.source, []).append(pkg.name)  # type: ignore[arg-type]
    return index


def scan_lockfile(path: str) -> LockedPackageIndex:
    """Read *path* and return its packages grouped by source."""
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except OSError as exc:
        raise FilesystemError(f"cannot read {path}: {exc}") from exc

    packages = parse_lockfile(content)
    log.debug("scanner.lockfile", path=path, packages=len(packages))
    return index_packages(packages)
