"""Manifest scanner: git dependencies declared in Cargo.toml files."""

from __future__ import annotations

import os
import sys
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import structlog

from forkaudit.exceptions import FilesystemError, ManifestParseError
from forkaudit.scanner.models import DEFAULT_BRANCH, DependencyDeclaration, DependencyIndex
from forkaudit.scanner.walker import walk

log = structlog.get_logger("forkaudit.scanner")

MANIFEST_NAME = "Cargo.toml"

# Skipped only directly under the scan root.
_ROOT_SKIP_DIRS = {"target", ".git", ".github"}
# Skipped at any depth.
_SKIP_DIRS = {"node_modules"}


def find_manifests(root: str) -> list[str]:
    """Return every Cargo.toml under *root* outside build/VCS/CI directories."""

    def should_ignore(dir_path: str, entry: os.DirEntry) -> bool:
        if not entry.is_dir(follow_symlinks=False):
            return False
        if dir_path == root and entry.name in _ROOT_SKIP_DIRS:
            return True
        return entry.name in _SKIP_DIRS

    def is_match(_: str, entry: os.DirEntry) -> bool:
        return entry.is_file() and entry.name == MANIFEST_NAME

    return walk(root, should_ignore, is_match)


def _dependency_table(path: str, data: dict[str, Any]) -> dict[str, Any]:
    """Top-level ``[dependencies]``, falling back to ``[workspace.dependencies]`` when absent."""
    deps = data.get("dependencies")
    if deps is None:
        workspace = data.get("workspace", {})
        if not isinstance(workspace, dict):
            raise ManifestParseError(path, "workspace is not a table")
        deps = workspace.get("dependencies")
    if deps is None:
        return {}
    if not isinstance(deps, dict):
        raise ManifestParseError(path, "dependencies is not a table")
    return deps


def parse_manifest(path: str) -> list[DependencyDeclaration]:
    """Extract git dependency declarations from one Cargo.toml.

    Entries without a ``git`` key (registry versions, path dependencies)
    are skipped.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as exc:
        raise FilesystemError(f"cannot read {path}: {exc}") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ManifestParseError(path, str(exc)) from exc

    declarations: list[DependencyDeclaration] = []
    for name, spec in _dependency_table(path, data).items():
        if not isinstance(spec, dict) or not spec.get("git"):
            continue
        declarations.append(
            DependencyDeclaration(
                name=name,
                git_url=spec["git"],
                branch=spec.get("branch") or DEFAULT_BRANCH,
            )
        )
    return declarations


def scan_manifests(root: str) -> DependencyIndex:
    """Walk *root* and group git dependencies by ``"<git>#<branch>"``."""
    index: DependencyIndex = {}
    for path in find_manifests(root):
        declarations = parse_manifest(path)
        log.debug("scanner.manifest", path=path, git_dependencies=len(declarations))
        for dep in declarations:
            index.setdefault(dep.key, []).append(dep.name)
    return index
