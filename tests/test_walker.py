"""Tests for depth-limited traversal."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

import pytest

from depthwalk.walker import WalkFilter, walk


def _make_tree(root: Path) -> None:
    """Create `root/{a.txt, b/{c.txt, d/{e.txt}}}`."""
    (root / "a.txt").write_text("a")
    b = root / "b"
    b.mkdir()
    (b / "c.txt").write_text("c")
    d = b / "d"
    d.mkdir()
    (d / "e.txt").write_text("e")


def _rel(entries: Iterable[os.DirEntry[str]], root: Path) -> list[str]:
    return [Path(entry.path).relative_to(root).as_posix() for entry in entries]


def _count_scandir(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Patch `os.scandir` to record every listed location."""
    listed: list[str] = []
    real_scandir = os.scandir

    def counting_scandir(path: str):  # type: ignore[no-untyped-def]
        listed.append(os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", counting_scandir)
    return listed


def test_depth_one_yields_container_but_not_its_children(tmp_path: Path):
    _make_tree(tmp_path)
    result = _rel(walk(tmp_path, 1), tmp_path)
    assert sorted(result) == ["a.txt", "b", "b/c.txt", "b/d"]


def test_depth_zero_lists_only_immediate_children(tmp_path: Path):
    _make_tree(tmp_path)
    result = _rel(walk(tmp_path, 0), tmp_path)
    assert sorted(result) == ["a.txt", "b"]


def test_depth_covering_tree_yields_everything_once(tmp_path: Path):
    _make_tree(tmp_path)
    for depth in (2, 3, 255):
        result = _rel(walk(tmp_path, depth), tmp_path)
        assert sorted(result) == ["a.txt", "b", "b/c.txt", "b/d", "b/d/e.txt"]
        assert len(result) == len(set(result))


def test_no_listing_beyond_depth(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_tree(tmp_path)
    listed = _count_scandir(monkeypatch)
    list(walk(tmp_path, 1))
    assert sorted(Path(p).relative_to(tmp_path).as_posix() for p in listed) == [".", "b"]


def test_depth_zero_lists_root_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_tree(tmp_path)
    listed = _count_scandir(monkeypatch)
    list(walk(tmp_path, 0))
    assert listed == [str(tmp_path)]


def test_parents_come_before_children(tmp_path: Path):
    _make_tree(tmp_path)
    (tmp_path / "b" / "d" / "f").mkdir()
    (tmp_path / "b" / "d" / "f" / "g.txt").write_text("g")
    result = _rel(walk(tmp_path, 10), tmp_path)
    for i, rel in enumerate(result):
        parent = str(Path(rel).parent.as_posix())
        if parent != ".":
            assert result.index(parent) < i


def test_star_filter_same_as_default(tmp_path: Path):
    _make_tree(tmp_path)
    unfiltered = _rel(walk(tmp_path, 5), tmp_path)
    starred = _rel(walk(tmp_path, 5, WalkFilter(name_pattern="*")), tmp_path)
    assert sorted(unfiltered) == sorted(starred)


def test_entries_only_drops_containers(tmp_path: Path):
    _make_tree(tmp_path)
    everything = _rel(walk(tmp_path, 5), tmp_path)
    files = _rel(walk(tmp_path, 5, WalkFilter(entries_only=True)), tmp_path)
    assert sorted(files) == ["a.txt", "b/c.txt", "b/d/e.txt"]
    assert sorted(files) == sorted(r for r in everything if not (tmp_path / r).is_dir())


def test_name_filter_with_entries_only(tmp_path: Path):
    (tmp_path / "x.dll").write_text("x")
    (tmp_path / "y.txt").write_text("y")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "z.dll").write_text("z")

    result = _rel(walk(tmp_path, 2, WalkFilter("*.dll", entries_only=True)), tmp_path)
    assert sorted(result) == ["sub/z.dll", "x.dll"]


def test_name_filter_still_descends_into_unmatched_dirs(tmp_path: Path):
    _make_tree(tmp_path)
    result = _rel(walk(tmp_path, 5, WalkFilter("*.txt")), tmp_path)
    assert sorted(result) == ["a.txt", "b/c.txt", "b/d/e.txt"]


def test_name_filter_matches_directories(tmp_path: Path):
    _make_tree(tmp_path)
    result = _rel(walk(tmp_path, 5, WalkFilter("?")), tmp_path)
    assert sorted(result) == ["b", "b/d"]


def test_case_sensitivity_override(tmp_path: Path):
    (tmp_path / "UPPER.TXT").write_text("u")
    (tmp_path / "lower.txt").write_text("l")

    sensitive = _rel(walk(tmp_path, 0, WalkFilter("*.txt", case_sensitive=True)), tmp_path)
    assert sensitive == ["lower.txt"]

    insensitive = _rel(walk(tmp_path, 0, WalkFilter("*.txt", case_sensitive=False)), tmp_path)
    assert sorted(insensitive) == ["UPPER.TXT", "lower.txt"]


def test_walk_is_lazy(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_tree(tmp_path)
    listed = _count_scandir(monkeypatch)
    entries = walk(tmp_path, 5)
    assert listed == []
    next(entries)
    assert listed == [str(tmp_path)]
    entries.close()


def test_invalid_depth_rejected_before_listing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    listed = _count_scandir(monkeypatch)
    for depth in (-1, 256):
        with pytest.raises(ValueError):
            walk(tmp_path, depth)
    assert listed == []


def test_missing_root_raises_native_error(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        list(walk(tmp_path / "missing", 1))


def test_file_root_raises_native_error(tmp_path: Path):
    leaf = tmp_path / "leaf.txt"
    leaf.write_text("leaf")
    with pytest.raises(NotADirectoryError):
        list(walk(leaf, 1))


def test_listing_error_keeps_earlier_results(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _make_tree(tmp_path)
    real_scandir = os.scandir
    blocked = str(tmp_path / "b")

    def failing_scandir(path: str):  # type: ignore[no-untyped-def]
        if os.fspath(path) == blocked:
            raise PermissionError(13, "Permission denied", blocked)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", failing_scandir)

    produced: list[str] = []
    with pytest.raises(PermissionError):
        for entry in walk(tmp_path, 3):
            produced.append(entry.name)
    assert "b" in produced
    assert "c.txt" not in produced


def test_skipped_subtree_is_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    _make_tree(tmp_path)
    caplog.set_level(logging.DEBUG, logger="depthwalk")
    list(walk(tmp_path, 1))
    skipped = [r.getMessage() for r in caplog.records if "Skipping" in r.getMessage()]
    assert skipped == [f"Skipping {tmp_path / 'b' / 'd'}: depth 2 exceeds limit 1"]
