import logging
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .. import config
from ..exceptions import UnsupportedPlatformError


def _executable_dir() -> Path:
    """Directory of the running executable (frozen build) or of the package."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class ToolConfig:
    """
    Location of the ffprobe binary. Resolved once at startup and handed to
    the video extractor.
    """
    ffprobe: str = config.FFPROBE_BINARY

    @classmethod
    def for_platform(cls,
                     platform: Optional[str] = None,
                     tools_dir: Optional[Path] = None) -> "ToolConfig":
        """
        Picks Resources/<platform>/ffprobe next to the executable.

        Windows and unknown hosts raise UnsupportedPlatformError. When the
        bundled binary is missing, falls back to whatever ffprobe is on PATH.
        """
        platform = platform or sys.platform
        logging.debug(f"Detecting OS environment: {platform}")

        if platform.startswith("win") or platform == "cygwin":
            logging.error("Windows detected.")
            raise UnsupportedPlatformError("Windows platform not supported for this application at this time.")

        platform_dir = None
        for prefix, dirname in config.PLATFORM_DIRS.items():
            if platform.startswith(prefix):
                platform_dir = dirname
                break
        if platform_dir is None:
            logging.error(f"Unknown OS detected: {platform}")
            raise UnsupportedPlatformError(f"OS '{platform}' is not supported for this application at this time.")

        folder = tools_dir or _executable_dir() / config.RESOURCES_DIR_NAME / platform_dir
        bundled = folder / config.FFPROBE_BINARY
        if bundled.is_file():
            logging.debug(f"Using bundled ffprobe at {bundled}")
            return cls(ffprobe=str(bundled))

        on_path = shutil.which(config.FFPROBE_BINARY)
        if on_path:
            logging.debug(f"No bundled ffprobe in {folder}; using {on_path}")
            return cls(ffprobe=on_path)

        # Left unresolved; the first probe will fail and abort the run.
        logging.warning(f"ffprobe not found in {folder} or on PATH.")
        return cls(ffprobe=str(bundled))
