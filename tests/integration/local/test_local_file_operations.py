"""FileOperations against the host file system."""

import hashlib
import os
import stat
from datetime import datetime, timedelta, timezone

import pytest

from pathkit.domain.errors import AlreadyExists, FileNotFound, InvalidTargetError
from pathkit.domain.policy import ExistsPolicy
from pathkit.domain.value_objects import LineBreak


def test_text_round_trip_keeps_line_breaks(workdir):
    path = workdir / "notes" / "a.txt"
    path.file.write_all_text("one\r\ntwo\r\n\r\n")

    assert (workdir / "notes").directory.exists()
    with open(path, "rb") as f:
        assert f.read() == b"one\r\ntwo\r\n"
    assert path.file.read_all_lines() == ["one", "two"]


def test_write_lines_then_append(workdir):
    path = workdir / "list.txt"
    path.file.write_all_lines(["a", "b"], line_break=LineBreak.UNIX)
    path.file.append_all_lines(["c"], line_break=LineBreak.UNIX)
    assert path.file.read_all_bytes() == b"a\nb\nc\n"


def test_get_hash(workdir):
    path = (workdir / "blob.bin").file.write_all_bytes(os.urandom(4096))
    with open(path, "rb") as f:
        assert path.file.get_hash() == hashlib.md5(f.read()).hexdigest()


def test_touch_sets_modification_time(workdir):
    moment = datetime(2019, 7, 1, 9, 30, tzinfo=timezone.utc)
    path = (workdir / "a" / "b.txt").file.touch(moment)
    assert os.stat(path).st_mtime == pytest.approx(moment.timestamp(), abs=1)


def test_remove_read_only_file(workdir):
    path = (workdir / "locked.txt").file.touch()
    os.chmod(path, stat.S_IREAD)
    path.file.remove()
    assert not os.path.exists(path)


def test_move_and_copy(workdir):
    source = (workdir / "src.txt").file.write_all_text("payload")
    copied = source.file.copy(workdir / "out" / "copy.txt")
    moved = source.file.move_to(workdir / "archive")

    assert copied.file.read_all_text() == "payload\n"
    assert moved == workdir / "archive" / "src.txt"
    assert not source.file.exists()


def test_move_and_copy_onto_itself(workdir):
    path = (workdir / "keep.txt").file.write_all_bytes(b"precious")

    assert path.file.rename("keep.txt", ExistsPolicy.MERGE_AND_OVERWRITE) == path
    with pytest.raises(InvalidTargetError):
        path.file.copy(path, ExistsPolicy.MERGE_AND_OVERWRITE)
    assert path.file.read_all_bytes() == b"precious"


def test_conflicts(workdir):
    source = (workdir / "s.txt").file.write_all_bytes(b"new")
    target = (workdir / "t.txt").file.write_all_bytes(b"old")

    with pytest.raises(AlreadyExists):
        source.file.copy(target)
    assert source.file.copy(target, ExistsPolicy.MERGE_AND_SKIP) == source
    assert target.file.read_all_bytes() == b"old"

    source.file.copy(target, ExistsPolicy.MERGE_AND_OVERWRITE)
    assert target.file.read_all_bytes() == b"new"


def test_overwrite_read_only_target(workdir):
    source = (workdir / "s.txt").file.write_all_bytes(b"new")
    target = (workdir / "t.txt").file.write_all_bytes(b"old")
    os.chmod(target, stat.S_IREAD)

    source.file.copy(target, ExistsPolicy.MERGE_AND_OVERWRITE)

    assert target.file.read_all_bytes() == b"new"


def test_overwrite_if_newer_uses_modification_times(workdir):
    now = datetime.now(timezone.utc)
    source = (workdir / "s.txt").file.write_all_bytes(b"source")
    target = (workdir / "t.txt").file.write_all_bytes(b"target")

    source.file.touch(now - timedelta(hours=1))
    target.file.touch(now)
    assert source.file.move(target, ExistsPolicy.MERGE_AND_OVERWRITE_IF_NEWER) == target
    assert target.file.read_all_bytes() == b"target"
    assert source.file.exists()

    source.file.touch(now + timedelta(hours=1))
    assert source.file.move(target, ExistsPolicy.MERGE_AND_OVERWRITE_IF_NEWER) == target
    assert target.file.read_all_bytes() == b"source"
    assert not source.file.exists()


def test_read_missing_file(workdir):
    with pytest.raises(FileNotFound):
        (workdir / "missing.txt").file.read_all_text()
