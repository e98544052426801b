import json
import logging
import subprocess
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import exifread
from pymediainfo import MediaInfo

from .. import config
from ..exceptions import MetadataToolError
from .tools import ToolConfig


class VideoMetadataExtractor:
    """
    Reads the container-level capture time of camera clips.

    Strategies:
      - 'ffprobe' format tags (creation_time), binary located via ToolConfig.
      - 'pymediainfo' General track dates when ffprobe has no tag.

    The result is always re-expressed at the fixed UTC-7 offset, whatever the
    host timezone is.
    """

    def __init__(self, tools: ToolConfig):
        self.tools = tools

    def get_capture_datetime(self, path: Path) -> Optional[datetime]:
        """
        Returns the capture time, or None when the file carries none.

        Raises:
            MetadataToolError: ffprobe itself cannot be executed. Every other
            file will fail the same way, so the caller aborts the run.
        """
        try:
            tags = self._probe_format_tags(path)
        except MetadataToolError:
            raise
        except Exception as e:
            logging.warning(f"ffprobe failed for {path}: {e}")
            return None

        raw = tags.get(config.VIDEO_CREATION_TAG)
        if raw:
            logging.debug(f"Discovered {config.VIDEO_CREATION_TAG} for {path.name}: {raw}")
        else:
            raw = self._mediainfo_date(path)

        if not raw:
            logging.info(f"{config.VIDEO_CREATION_TAG} metadata for '{path}' was not found.")
            return None

        dt = self._parse_flexible_date(raw)
        if dt is None:
            logging.warning(f"Unparseable capture time '{raw}' for {path}")
            return None
        return dt.astimezone(config.VIDEO_FIXED_OFFSET)

    # --- Internal Extraction Helpers ---

    def _probe_format_tags(self, path: Path) -> Dict[str, Any]:
        cmd = [self.tools.ffprobe, *config.FFPROBE_ARGS, str(path)]
        try:
            out = subprocess.check_output(cmd, stderr=subprocess.DEVNULL, text=True)
        except OSError as e:
            # Missing, not executable, or built for another platform (ENOEXEC)
            raise MetadataToolError(f"Cannot execute ffprobe at '{self.tools.ffprobe}': {e}") from e

        data = json.loads(out or "{}")
        return data.get("format", {}).get("tags", {}) or {}

    def _mediainfo_date(self, path: Path) -> Optional[str]:
        try:
            mi = MediaInfo.parse(str(path))
        except Exception as e:
            logging.debug(f"MediaInfo failed for {path}: {e}")
            return None

        for track in mi.tracks:
            if track.track_type != "General":
                continue
            for field in config.MEDIAINFO_DATE_FIELDS:
                val = getattr(track, field, None)
                if val:
                    logging.debug(f"MediaInfo {field} for {path.name}: {val}")
                    return str(val)
        return None

    def _parse_flexible_date(self, dt_str: str) -> Optional[datetime]:
        """
        Handles ffprobe ISO stamps ('...Z', '+00:00') and MediaInfo's
        'UTC 2024-01-01 12:00:00'. Values without an offset are UTC.
        """
        clean = dt_str.replace("UTC", "").strip()
        if clean.endswith("Z"):
            clean = clean[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(clean)
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt


class PhotoMetadataExtractor:
    """
    Reads DateTimeOriginal (plus optional sub-seconds) from still images via
    'exifread'.

    Sony bodies store DateTimeOriginal already shifted to the camera's
    configured zone, so the value is kept naive, as recorded.
    """

    def get_capture_datetime(self, path: Path) -> Optional[datetime]:
        try:
            logging.debug(f"Reading EXIF data for '{path}'...")
            with path.open('rb') as f:
                tags = exifread.process_file(f, details=False)

            if config.PHOTO_DATE_TAG not in tags:
                logging.warning(f"No EXIF DateTimeOriginal found for '{path}'.")
                return None

            base = datetime.strptime(str(tags[config.PHOTO_DATE_TAG]).strip(), config.EXIF_DATE_FORMAT)
            logging.debug(f"Found DateTimeOriginal for {path.name}: {base}")

            return base + self._subsecond_delta(path, tags)
        except Exception as e:
            logging.warning(f"Unable to read EXIF data for '{path}': {e}")
            return None

    def _subsecond_delta(self, path: Path, tags) -> timedelta:
        if config.PHOTO_SUBSEC_TAG not in tags:
            return timedelta()
        raw = str(tags[config.PHOTO_SUBSEC_TAG]).strip()
        try:
            delta = timedelta(milliseconds=float(raw))
        except (ValueError, OverflowError):
            logging.warning(f"Unable to parse sub-second EXIF value '{raw}' for '{path}'.")
            return timedelta()
        logging.debug(f"Sub-second EXIF data for {path.name}: {raw}")
        return delta
