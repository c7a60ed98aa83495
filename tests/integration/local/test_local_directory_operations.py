"""DirectoryOperations against the host file system."""

import os
import stat

import pytest

from pathkit.domain.errors import AlreadyExists, InvalidTargetError
from pathkit.domain.policy import ExistsPolicy

# pylint: disable=redefined-outer-name


@pytest.fixture
def tree(workdir):
    root = workdir / "root"
    for name, content in [
        ("a.txt", b"a"),
        ("sub/b.txt", b"b"),
        ("sub/subsub/c.txt", b"c"),
        ("sub/.hidden", b"h"),
    ]:
        (root / name).file.write_all_bytes(content)
    return root


def test_get_files_two_levels(tree):
    assert list(tree.directory.get_files("*.txt", depth=2)) == [
        tree / "a.txt",
        tree / "sub" / "b.txt",
    ]


def test_get_directories(tree):
    assert list(tree.directory.get_directories(depth=5)) == [tree / "sub", tree / "sub" / "subsub"]


def test_copy_then_hash(tree, workdir):
    target = tree.directory.copy(workdir / "copy")
    assert target.directory.get_directory_hash() == tree.directory.get_directory_hash()
    assert (target / "sub" / ".hidden").file.exists()


def test_copy_excluding_hidden_files(tree, workdir):
    target = tree.directory.copy(
        workdir / "copy", exclude_file=lambda p: p.name.startswith(".")
    )
    assert not (target / "sub" / ".hidden").file.exists()
    assert tree.directory.get_directory_hash(
        lambda p: not p.name.startswith(".")
    ) == target.directory.get_directory_hash()


def test_move_merges_into_existing_target(tree, workdir):
    target = workdir / "target"
    (target / "keep.txt").file.write_all_bytes(b"k")

    with pytest.raises(AlreadyExists):
        tree.directory.move(target)
    tree.directory.move(target, ExistsPolicy.MERGE_AND_OVERWRITE)

    assert not tree.directory.exists()
    assert sorted(p.name for p in target.directory.get_files(depth=3)) == [
        ".hidden",
        "a.txt",
        "b.txt",
        "c.txt",
        "keep.txt",
    ]


def test_move_into_itself_is_refused(tree):
    with pytest.raises(InvalidTargetError):
        tree.directory.move(tree / "sub" / "inner")
    assert (tree / "a.txt").file.exists()


def test_remove_with_read_only_files(tree):
    os.chmod(tree / "sub" / "b.txt", stat.S_IREAD)
    tree.directory.remove()
    assert not os.path.exists(tree)


def test_clean_and_recreate(tree):
    tree.directory.clean_and_recreate()
    assert os.listdir(tree) == []


def test_find_parent_or_self(tree):
    marker = (tree / "marker.cfg").file.touch()
    start = tree / "sub" / "subsub"
    found = start.directory.find_parent_or_self(
        lambda p: p.directory.contains_file("marker.cfg")
    )
    assert found == marker.parent
