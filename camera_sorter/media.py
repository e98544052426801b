"""
Per-content-type behaviour. Videos and photos run through the same pipeline;
only discovery, timestamp extraction and naming differ.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from . import config
from .metadata.extract import PhotoMetadataExtractor, VideoMetadataExtractor
from .metadata.tools import ToolConfig
from .models import CandidateFile, DestinationPlan, RetryResolution
from .organization.rules import DestinationPlanner
from .scanning.filesystem import CandidateLocator
from .scanning.retries import RetryGroupResolver


class MediaHandler(ABC):
    label = "media"

    def __init__(self, locator: CandidateLocator, planner_format: str, with_millis: bool):
        self.locator = locator
        self.planner_format = planner_format
        self.with_millis = with_millis

    def locate(self, source_root: Path) -> List[CandidateFile]:
        return self.locator.locate(source_root)

    def resolve(self, source_root: Path, candidates: List[CandidateFile],
                dry_run: bool = False) -> RetryResolution:
        """Default: every candidate is authoritative."""
        return RetryResolution(survivors=list(candidates), quarantined=[])

    @abstractmethod
    def extract_timestamp(self, path: Path) -> Optional[datetime]:
        ...

    def planner(self, dest_root: Path) -> DestinationPlanner:
        return DestinationPlanner(dest_root, self.planner_format, self.with_millis)

    def plan(self, dest_root: Path, captured: datetime, candidate: CandidateFile) -> DestinationPlan:
        return self.planner(dest_root).plan(captured, candidate.ext)


class VideoHandler(MediaHandler):
    label = "video"

    def __init__(self, tools: ToolConfig):
        super().__init__(CandidateLocator(config.VIDEO_PATTERN), config.VIDEO_NAME_FORMAT, with_millis=False)
        self.extractor = VideoMetadataExtractor(tools)

    def extract_timestamp(self, path: Path) -> Optional[datetime]:
        return self.extractor.get_capture_datetime(path)


class PhotoHandler(MediaHandler):
    label = "photo"

    def __init__(self):
        super().__init__(CandidateLocator(config.PHOTO_PATTERN), config.PHOTO_NAME_FORMAT, with_millis=True)
        self.extractor = PhotoMetadataExtractor()

    def resolve(self, source_root: Path, candidates: List[CandidateFile],
                dry_run: bool = False) -> RetryResolution:
        return RetryGroupResolver(source_root, dry_run=dry_run).resolve(candidates)

    def extract_timestamp(self, path: Path) -> Optional[datetime]:
        return self.extractor.get_capture_datetime(path)
