"""
Configuration constants for the camera sorter.
"""
from datetime import timedelta, timezone

# --- Candidate Discovery ---
# Sony bodies name clips C0001.MP4 and stills DSC00001.HIF/JPG/ARW.
# Matching on the prefix keeps already-renamed files out of the next run.
VIDEO_PATTERN = "C*.MP4"
PHOTO_PATTERN = "DSC*"

# --- FTP Retry Handling ---
RETRY_SEPARATOR = "_"
QUARANTINE_DIR_NAME = "likely-corrupted"

# --- Metadata Parsing ---
VIDEO_CREATION_TAG = "creation_time"
MEDIAINFO_DATE_FIELDS = ["encoded_date", "tagged_date"]

# Capture times are always expressed in Arizona time (no DST).
VIDEO_FIXED_OFFSET = timezone(timedelta(hours=-7))

PHOTO_DATE_TAG = "EXIF DateTimeOriginal"
PHOTO_SUBSEC_TAG = "EXIF SubSecTime"
EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# --- External Tools ---
FFPROBE_BINARY = "ffprobe"
FFPROBE_ARGS = ["-v", "quiet", "-print_format", "json", "-show_format"]
RESOURCES_DIR_NAME = "Resources"
PLATFORM_DIRS = {
    "darwin": "macos",
    "linux": "linux",
}

# --- Organization ---
FOLDER_PATTERN = "{year}-{month:02d}"
VIDEO_NAME_FORMAT = "%Y-%m-%d %H.%M.%S"
PHOTO_NAME_FORMAT = "%Y-%m-%d %H.%M.%S"
