import os
import stat

import pytest

from kiwidb.env import delete_dir, is_dir, mkdir_with_path


def test_is_dir_on_directory_and_file(tmp_path):
    file_path = tmp_path / "file.txt"
    file_path.write_text("x")
    assert is_dir(tmp_path) is True
    assert is_dir(file_path) is False


def test_is_dir_missing_path_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        is_dir(tmp_path / "missing")


def test_mkdir_with_path_creates_parents(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    mkdir_with_path(target, 0o755)
    assert target.is_dir()
    assert is_dir(tmp_path / "a")


def test_mkdir_with_path_sets_mode(tmp_path):
    target = tmp_path / "moded"
    mkdir_with_path(target, 0o700)
    assert stat.S_IMODE(os.stat(target).st_mode) == 0o700


def test_mkdir_with_path_existing_directory(tmp_path):
    target = tmp_path / "again"
    mkdir_with_path(target, 0o755)
    mkdir_with_path(target, 0o755)
    assert target.is_dir()


def test_delete_dir_removes_tree(tmp_path):
    root = tmp_path / "root"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "top.txt").write_text("top")
    (root / "sub" / "inner.txt").write_text("inner")
    (root / "sub" / "deeper" / "leaf.txt").write_text("leaf")
    delete_dir(root)
    assert not root.exists()
    assert tmp_path.exists()


def test_delete_dir_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        delete_dir(tmp_path / "absent")