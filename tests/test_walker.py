"""Tests for the recursive directory walker."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from forkaudit.exceptions import FilesystemError
from forkaudit.scanner.walker import walk


def _never(_dir, _entry):
    return False


def _always(_dir, _entry):
    return True


def _rel(root, paths):
    return sorted(os.path.relpath(p, root) for p in paths)


class TestWalk:
    def test_empty_directory(self, tmp_path):
        assert walk(str(tmp_path), _never, _always) == []

    def test_returns_matching_files_recursively(self, tmp_path):
        (tmp_path / "a" / "b").mkdir(parents=True)
        (tmp_path / "top.txt").write_text("x")
        (tmp_path / "a" / "mid.txt").write_text("x")
        (tmp_path / "a" / "b" / "deep.txt").write_text("x")
        paths = walk(str(tmp_path), _never, _always)
        assert _rel(tmp_path, paths) == ["a/b/deep.txt", "a/mid.txt", "top.txt"]

    def test_paths_are_joined_to_root(self, tmp_path):
        (tmp_path / "f.txt").write_text("x")
        assert walk(str(tmp_path), _never, _always) == [os.path.join(str(tmp_path), "f.txt")]

    def test_match_predicate_filters_files(self, tmp_path):
        (tmp_path / "keep.toml").write_text("x")
        (tmp_path / "drop.txt").write_text("x")
        paths = walk(str(tmp_path), _never, lambda _d, e: e.name.endswith(".toml"))
        assert _rel(tmp_path, paths) == ["keep.toml"]

    def test_match_predicate_not_applied_to_directories(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "f.txt").write_text("x")
        paths = walk(str(tmp_path), _never, lambda _d, e: e.is_file())
        assert _rel(tmp_path, paths) == ["sub/f.txt"]

    def test_ignored_directory_never_visited(self, tmp_path):
        (tmp_path / "skip" / "inner").mkdir(parents=True)
        (tmp_path / "skip" / "inner" / "Cargo.toml").write_text("x")
        (tmp_path / "Cargo.toml").write_text("x")
        seen_dirs = []

        def should_ignore(dir_path, entry):
            seen_dirs.append(dir_path)
            return entry.name == "skip"

        paths = walk(str(tmp_path), should_ignore, _always)
        assert _rel(tmp_path, paths) == ["Cargo.toml"]
        skipped = os.path.join(str(tmp_path), "skip")
        assert not any(d.startswith(skipped) for d in seen_dirs)

    def test_ignored_file_is_skipped(self, tmp_path):
        (tmp_path / "a.txt").write_text("x")
        (tmp_path / "b.txt").write_text("x")
        paths = walk(str(tmp_path), lambda _d, e: e.name == "a.txt", _always)
        assert _rel(tmp_path, paths) == ["b.txt"]

    def test_predicates_receive_containing_directory(self, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "f.txt").write_text("x")
        calls = []
        walk(str(tmp_path), _never, lambda d, e: calls.append((d, e.name)) or True)
        assert calls == [(os.path.join(str(tmp_path), "sub"), "f.txt")]

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(FilesystemError):
            walk(str(tmp_path / "nope"), _never, _always)

    def test_unreadable_subdirectory_aborts_walk(self, tmp_path):
        (tmp_path / "ok.txt").write_text("x")
        (tmp_path / "locked").mkdir()
        real_scandir = os.scandir

        def fake_scandir(path):
            if str(path).endswith("locked"):
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        with patch("forkaudit.scanner.walker.os.scandir", side_effect=fake_scandir):
            with pytest.raises(FilesystemError, match="locked"):
                walk(str(tmp_path), _never, _always)
