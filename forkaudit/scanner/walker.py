"""Recursive directory walk with caller-supplied ignore/match predicates."""

from __future__ import annotations

import os
from collections.abc import Callable

from forkaudit.exceptions import FilesystemError

EntryPredicate = Callable[[str, os.DirEntry], bool]


def walk(root: str, should_ignore: EntryPredicate, is_match: EntryPredicate) -> list[str]:
    """Return paths of matching files under *root*, depth-first.

    Both predicates receive the containing directory and the entry. An
    ignored directory is never descended into. Siblings keep the order the
    filesystem lists them in.

    Raises :class:`FilesystemError` if any directory cannot be read.
    """
    results: list[str] = []
    try:
        with os.scandir(root) as it:
            entries = list(it)
    except OSError as exc:
        raise FilesystemError(f"cannot read directory {root}: {exc}") from exc

    for entry in entries:
        if should_ignore(root, entry):
            continue
        path = os.path.join(root, entry.name)
        if entry.is_dir(follow_symlinks=False):
            results.extend(walk(path, should_ignore, is_match))
        elif is_match(root, entry):
            results.append(path)
    return results
