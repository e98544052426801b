import pytest
from datetime import datetime

from camera_sorter.metadata.extract import PhotoMetadataExtractor


@pytest.fixture
def src(tmp_path):
    """Unsorted directory as written by the camera's FTP upload."""
    d = tmp_path / "unsorted"
    d.mkdir()
    return d


@pytest.fixture
def dest(tmp_path):
    return tmp_path / "sorted"


@pytest.fixture
def photo_times(monkeypatch):
    """
    Maps file name -> capture datetime for PhotoMetadataExtractor.
    Names missing from the dict behave like files without EXIF.
    """
    times = {}

    def fake(self, path):
        return times.get(path.name)

    monkeypatch.setattr(PhotoMetadataExtractor, "get_capture_datetime", fake)
    return times


def touch(directory, *names, content=b"data"):
    paths = []
    for name in names:
        p = directory / name
        p.write_bytes(content)
        paths.append(p)
    return paths
