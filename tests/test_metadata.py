import json
import subprocess
from datetime import datetime, timedelta, timezone

import pytest

import camera_sorter.metadata.extract as extract_module
from camera_sorter.exceptions import MetadataToolError
from camera_sorter.metadata.extract import PhotoMetadataExtractor, VideoMetadataExtractor
from camera_sorter.metadata.tools import ToolConfig

ARIZONA = timezone(timedelta(hours=-7))


def fake_ffprobe(monkeypatch, tags):
    calls = []

    def check_output(cmd, **kwargs):
        calls.append(cmd)
        return json.dumps({"format": {"filename": cmd[-1], "tags": tags}})

    monkeypatch.setattr(subprocess, "check_output", check_output)
    return calls


class MockTrack:
    def __init__(self, track_type="General", **kwargs):
        self.track_type = track_type
        for k, v in kwargs.items():
            setattr(self, k, v)


class MockMediaInfo:
    tracks_to_return = []

    def __init__(self, tracks):
        self.tracks = tracks

    @classmethod
    def parse(cls, path):
        return cls(cls.tracks_to_return)


@pytest.fixture
def clip(tmp_path):
    p = tmp_path / "C0001.MP4"
    p.write_bytes(b"\x00" * 16)
    return p


def test_video_offset_is_kept_at_utc_minus_7(monkeypatch, clip):
    calls = fake_ffprobe(monkeypatch, {"creation_time": "2024-03-15T10:30:00-07:00"})

    dt = VideoMetadataExtractor(ToolConfig(ffprobe="/opt/ffprobe")).get_capture_datetime(clip)

    assert dt == datetime(2024, 3, 15, 10, 30, tzinfo=ARIZONA)
    assert dt.utcoffset() == timedelta(hours=-7)
    assert calls[0][0] == "/opt/ffprobe"
    assert calls[0][-1] == str(clip)


def test_video_utc_is_shifted_to_fixed_offset(monkeypatch, clip):
    fake_ffprobe(monkeypatch, {"creation_time": "2024-03-16T03:05:09.000000Z"})

    dt = VideoMetadataExtractor(ToolConfig()).get_capture_datetime(clip)

    assert (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second) == (2024, 3, 15, 20, 5, 9)
    assert dt.utcoffset() == timedelta(hours=-7)


def test_video_without_tag_falls_back_to_mediainfo(monkeypatch, clip):
    fake_ffprobe(monkeypatch, {"encoder": "Lavf"})
    MockMediaInfo.tracks_to_return = [MockTrack(encoded_date="2024-03-15 17:30:00 UTC")]
    monkeypatch.setattr(extract_module, "MediaInfo", MockMediaInfo)

    dt = VideoMetadataExtractor(ToolConfig()).get_capture_datetime(clip)

    assert dt == datetime(2024, 3, 15, 10, 30, tzinfo=ARIZONA)


def test_video_without_any_timestamp_returns_none(monkeypatch, clip):
    fake_ffprobe(monkeypatch, {})
    MockMediaInfo.tracks_to_return = [MockTrack(), MockTrack("Video", encoded_date="2020-01-01")]
    monkeypatch.setattr(extract_module, "MediaInfo", MockMediaInfo)

    assert VideoMetadataExtractor(ToolConfig()).get_capture_datetime(clip) is None


def test_video_probe_failure_is_not_fatal(monkeypatch, clip):
    def check_output(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr(subprocess, "check_output", check_output)

    assert VideoMetadataExtractor(ToolConfig()).get_capture_datetime(clip) is None


def test_video_garbage_timestamp_returns_none(monkeypatch, clip):
    fake_ffprobe(monkeypatch, {"creation_time": "yesterday-ish"})

    assert VideoMetadataExtractor(ToolConfig()).get_capture_datetime(clip) is None


def test_video_missing_binary_is_fatal(monkeypatch, clip):
    def check_output(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(subprocess, "check_output", check_output)

    with pytest.raises(MetadataToolError):
        VideoMetadataExtractor(ToolConfig(ffprobe="/missing/ffprobe")).get_capture_datetime(clip)


@pytest.fixture
def photo(tmp_path):
    p = tmp_path / "DSC0001.HIF"
    p.write_bytes(b"\x00" * 16)
    return p


def fake_exif(monkeypatch, tags):
    monkeypatch.setattr(extract_module.exifread, "process_file", lambda f, details=False: tags)


def test_photo_adds_subsecond_milliseconds(monkeypatch, photo):
    fake_exif(monkeypatch, {"EXIF DateTimeOriginal": "2024:03:15 10:30:00", "EXIF SubSecTime": "500"})

    dt = PhotoMetadataExtractor().get_capture_datetime(photo)

    assert dt == datetime(2024, 3, 15, 10, 30, 0, 500000)
    assert dt.tzinfo is None


def test_photo_without_subseconds(monkeypatch, photo):
    fake_exif(monkeypatch, {"EXIF DateTimeOriginal": "2024:03:15 10:30:00"})

    assert PhotoMetadataExtractor().get_capture_datetime(photo) == datetime(2024, 3, 15, 10, 30)


def test_photo_bad_subseconds_fall_back_to_zero(monkeypatch, photo):
    fake_exif(monkeypatch, {"EXIF DateTimeOriginal": "2024:03:15 10:30:00", "EXIF SubSecTime": "  ab"})

    assert PhotoMetadataExtractor().get_capture_datetime(photo) == datetime(2024, 3, 15, 10, 30)


def test_photo_without_date_original_returns_none(monkeypatch, photo):
    fake_exif(monkeypatch, {"Image DateTime": "2024:03:15 10:30:00"})

    assert PhotoMetadataExtractor().get_capture_datetime(photo) is None


def test_photo_read_error_returns_none(monkeypatch, photo):
    def boom(f, details=False):
        raise ValueError("not an image")

    monkeypatch.setattr(extract_module.exifread, "process_file", boom)

    assert PhotoMetadataExtractor().get_capture_datetime(photo) is None


def test_photo_missing_file_returns_none(tmp_path):
    assert PhotoMetadataExtractor().get_capture_datetime(tmp_path / "DSC9999.HIF") is None


def test_video_binary_for_wrong_platform_is_fatal(monkeypatch, clip):
    import errno

    def check_output(cmd, **kwargs):
        raise OSError(errno.ENOEXEC, "Exec format error", cmd[0])

    monkeypatch.setattr(subprocess, "check_output", check_output)

    with pytest.raises(MetadataToolError):
        VideoMetadataExtractor(ToolConfig(ffprobe="/bundle/ffprobe")).get_capture_datetime(clip)
