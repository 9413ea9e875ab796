"""Manifest and lockfile scanning for Cargo projects."""

from forkaudit.scanner.cargo_lock import scan_lockfile
from forkaudit.scanner.cargo_toml import scan_manifests
from forkaudit.scanner.models import (
    DependencyDeclaration,
    DependencyIndex,
    GitSourceSpec,
    LockedPackage,
    LockedPackageIndex,
)
from forkaudit.scanner.walker import walk

__all__ = [
    "DependencyDeclaration",
    "DependencyIndex",
    "GitSourceSpec",
    "LockedPackage",
    "LockedPackageIndex",
    "scan_lockfile",
    "scan_manifests",
    "walk",
]
