#!/usr/bin/env python3
"""
Test suite for prompt_sorter/walker.py — candidate enumeration
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from prompt_sorter.walker import enumerate_files


@pytest.fixture
def image_tree(tmp_path):
    """
    root/
      b.png, a.png, .hidden.png
      nested/c.png
      .cache/d.png
    """
    root = tmp_path / "renders"
    root.mkdir()
    (root / "b.png").write_bytes(b"b")
    (root / "a.png").write_bytes(b"a")
    (root / ".hidden.png").write_bytes(b"h")
    (root / "nested").mkdir()
    (root / "nested" / "c.png").write_bytes(b"c")
    (root / ".cache").mkdir()
    (root / ".cache" / "d.png").write_bytes(b"d")
    return root


def names(files):
    return [f.basename for f in files]


class TestFlat:

    def test_only_top_level_files(self, image_tree):
        assert names(enumerate_files(image_tree)) == ['a.png', 'b.png']

    def test_directories_excluded(self, image_tree):
        assert all(f.path.is_file() for f in enumerate_files(image_tree))

    def test_empty_directory(self, tmp_path):
        assert enumerate_files(tmp_path) == []


class TestRecursive:

    def test_descends_into_subdirectories(self, image_tree):
        files = enumerate_files(image_tree, recursive=True)
        assert names(files) == ['a.png', 'b.png', 'c.png']

    def test_hidden_directories_pruned(self, image_tree):
        files = enumerate_files(image_tree, recursive=True)
        assert 'd.png' not in names(files)

    def test_paths_are_under_root(self, image_tree):
        for f in enumerate_files(image_tree, recursive=True):
            assert image_tree in f.path.parents
