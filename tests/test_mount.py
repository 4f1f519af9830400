import os
from collections import namedtuple

import pytest

from cstorcsi.mount import NodeMounter

Mount = namedtuple("Mount", "device path")


@pytest.fixture
def mounter():
    return NodeMounter()


def test_make_file_creates_empty_file(mounter, tmp_path):
    target = tmp_path / "vol"
    mounter.make_file(str(target))
    assert target.is_file()
    assert target.read_bytes() == b""


def test_make_file_keeps_existing_content(mounter, tmp_path):
    target = tmp_path / "vol"
    target.write_text("data")
    mounter.make_file(str(target))
    assert target.read_text() == "data"


def test_make_file_missing_parent_raises(mounter, tmp_path):
    with pytest.raises(FileNotFoundError):
        mounter.make_file(str(tmp_path / "missing" / "vol"))


def test_make_dir_nested_and_idempotent(mounter, tmp_path):
    target = tmp_path / "a" / "b" / "c"
    mounter.make_dir(str(target))
    mounter.make_dir(str(target))
    assert target.is_dir()


def test_make_dir_over_file_raises(mounter, tmp_path):
    target = tmp_path / "file"
    target.write_text("x")
    with pytest.raises(OSError):
        mounter.make_dir(str(target))


def test_exists_path(mounter, tmp_path):
    present = tmp_path / "present"
    present.write_text("x")
    assert mounter.exists_path(str(present)) is True
    assert mounter.exists_path(str(tmp_path / "absent")) is False


def test_exists_path_broken_symlink(mounter, tmp_path):
    link = tmp_path / "link"
    os.symlink(tmp_path / "nowhere", link)
    assert mounter.exists_path(str(link)) is False


def test_get_device_name_counts_references(mounter):
    mounts = [
        Mount("/dev/sdb", "/var/lib/staging/pv1"),
        Mount("/dev/sdb", "/var/lib/pods/pv1/mount"),
        Mount("/dev/sdc", "/var/lib/staging/pv2"),
    ]
    device, refs = mounter.get_device_name("/var/lib/staging/pv1", mounts)
    assert device == "/dev/sdb"
    assert refs == 2


def test_get_device_name_single_reference(mounter):
    mounts = [Mount("/dev/sdb", "/a"), Mount("/dev/sdc", "/b")]
    assert mounter.get_device_name("/b", mounts) == ("/dev/sdc", 1)


def test_get_device_name_resolves_symlink(mounter, tmp_path):
    real = tmp_path / "real"
    real.mkdir()
    link = tmp_path / "link"
    os.symlink(real, link)
    mounts = [Mount("/dev/sdd", os.path.realpath(real))]
    assert mounter.get_device_name(str(link), mounts) == ("/dev/sdd", 1)