import pytest

from cstorcsi.version import VersionInfo


def test_get_returns_set_version(tmp_path):
    version_file = tmp_path / "VERSION"
    version_file.write_text("9.9.9\n")
    info = VersionInfo(version="2.4.0", version_file=version_file)
    assert info.get() == "2.4.0"


def test_get_reads_and_strips_version_file(tmp_path):
    version_file = tmp_path / "VERSION"
    version_file.write_text("  3.1.0-dev \n")
    assert VersionInfo(version_file=version_file).get() == "3.1.0-dev"


def test_get_missing_file_is_empty(tmp_path):
    assert VersionInfo(version_file=tmp_path / "absent").get() == ""


def test_get_without_file_is_empty():
    assert VersionInfo().get() == ""


def test_git_commit_prefers_set_value():
    assert VersionInfo(git_commit="abcdef0123").get_git_commit() == "abcdef0123"


def test_git_commit_outside_repository_is_empty(tmp_path):
    assert VersionInfo(repo_dir=tmp_path).get_git_commit() == ""


def test_verbose_joins_version_and_short_commit():
    info = VersionInfo(version="1.2.0", git_commit="abcdef0123456")
    assert info.verbose() == "1.2.0-abcdef0"


def test_details_matches_verbose():
    info = VersionInfo(version="1.2.0", git_commit="0123456789")
    assert info.details() == info.verbose()
    assert info.details().startswith("1.2.0-")


def test_verbose_short_commit_raises(tmp_path):
    info = VersionInfo(version="1.0.0", git_commit="abc")
    with pytest.raises(ValueError):
        info.verbose()


def test_verbose_no_commit_raises(tmp_path):
    info = VersionInfo(version="1.0.0", repo_dir=tmp_path)
    with pytest.raises(ValueError):
        info.details()