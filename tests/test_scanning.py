import os
import pytest
from pathlib import Path

from camera_sorter import config
from camera_sorter.exceptions import SourceDirectoryNotFound
from camera_sorter.scanning.filesystem import CandidateLocator
from conftest import touch


def test_video_pattern_is_case_insensitive(src):
    touch(src, "C0001.MP4", "c0002.mp4", "C0003.mov", "A0001.MP4", "2024-01-01 10.00.00.MP4")

    found = CandidateLocator(config.VIDEO_PATTERN).locate(src)

    assert [c.name for c in found] == ["C0001.MP4", "c0002.mp4"]


def test_photo_pattern_matches_any_extension(src):
    touch(src, "DSC0001.HIF", "dsc0002.jpg", "DSC0003.ARW", "IMG_0001.JPG")

    found = CandidateLocator(config.PHOTO_PATTERN).locate(src)

    assert sorted(c.name for c in found) == ["DSC0001.HIF", "DSC0003.ARW", "dsc0002.jpg"]


def test_locator_is_not_recursive(src):
    nested = src / "DSC_nested"
    nested.mkdir()
    touch(nested, "DSC0009.HIF")
    touch(src, "DSC0001.HIF")

    found = CandidateLocator(config.PHOTO_PATTERN).locate(src)

    # The directory itself matches DSC* but only regular files are returned
    assert [c.name for c in found] == ["DSC0001.HIF"]


def test_missing_root_is_fatal(tmp_path):
    with pytest.raises(SourceDirectoryNotFound):
        CandidateLocator(config.PHOTO_PATTERN).locate(tmp_path / "nope")


def test_enumeration_error_yields_empty(src, monkeypatch):
    touch(src, "DSC0001.HIF")

    def boom(path):
        raise PermissionError("denied")

    monkeypatch.setattr(os, "scandir", boom)

    assert CandidateLocator(config.PHOTO_PATTERN).locate(src) == []


def test_candidate_properties():
    from camera_sorter.models import CandidateFile

    c = CandidateFile(Path("/in/DSC0001_2.HIF"))
    assert c.ext == ".HIF"
    assert c.parent == Path("/in")
    assert c.has_retry_suffix
    assert c.canonical_name == "DSC0001.HIF"

    plain = CandidateFile(Path("/in/DSC0001.HIF"))
    assert not plain.has_retry_suffix
    assert plain.canonical_name == "DSC0001.HIF"


def test_symlinked_camera_files_are_found(src, tmp_path):
    elsewhere = tmp_path / "card"
    elsewhere.mkdir()
    (target,) = touch(elsewhere, "DSC0007.HIF")
    (src / "DSC0007.HIF").symlink_to(target)

    found = CandidateLocator(config.PHOTO_PATTERN).locate(src)

    assert [c.name for c in found] == ["DSC0007.HIF"]


def test_media_handler_base_is_abstract():
    from camera_sorter.media import MediaHandler

    with pytest.raises(TypeError):
        MediaHandler(CandidateLocator(config.PHOTO_PATTERN), config.PHOTO_NAME_FORMAT, with_millis=True)
