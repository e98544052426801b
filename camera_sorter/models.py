from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from . import config


@dataclass(frozen=True)
class CandidateFile:
    """
    A camera file found in the unsorted directory.
    """
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def ext(self) -> str:
        return self.path.suffix

    @property
    def parent(self) -> Path:
        return self.path.parent

    @property
    def has_retry_suffix(self) -> bool:
        return config.RETRY_SEPARATOR in self.name

    @property
    def canonical_name(self) -> str:
        """DSC0001_2.HIF -> DSC0001.HIF; names without a suffix are returned as-is."""
        if not self.has_retry_suffix:
            return self.name
        return self.name[:self.name.rindex(config.RETRY_SEPARATOR)] + self.ext


@dataclass
class RetryGroup:
    """All candidates that share one canonical (suffix-less) name."""
    canonical_name: str
    members: List[CandidateFile] = field(default_factory=list)

    @property
    def has_retries(self) -> bool:
        return len(self.members) > 1 and any(m.has_retry_suffix for m in self.members)


@dataclass
class RetryResolution:
    survivors: List[CandidateFile]
    quarantined: List[CandidateFile]


@dataclass(frozen=True)
class DestinationPlan:
    directory: Path
    filename: str

    @property
    def path(self) -> Path:
        return self.directory / self.filename


class FileStatus(str, Enum):
    RENAMED = "renamed"
    PLANNED = "planned"
    NO_METADATA = "skipped-no-metadata"
    COLLISION = "skipped-collision"
    QUARANTINED = "quarantined"
    FAILED = "failed"


@dataclass
class FileResult:
    source: Path
    status: FileStatus
    destination: Optional[Path] = None
    detail: str = ""


@dataclass
class RunOutcome:
    """
    Tally for one invocation. Built up by the orchestrator, reported at the
    end, then discarded.
    """
    discovered: int = 0
    aborted: bool = False
    results: List[FileResult] = field(default_factory=list)

    def record(self, result: FileResult):
        self.results.append(result)

    def _count(self, status: FileStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def renamed(self) -> int:
        return self._count(FileStatus.RENAMED)

    @property
    def planned(self) -> int:
        return self._count(FileStatus.PLANNED)

    @property
    def skipped_no_metadata(self) -> int:
        return self._count(FileStatus.NO_METADATA)

    @property
    def skipped_collision(self) -> int:
        return self._count(FileStatus.COLLISION)

    @property
    def skipped(self) -> int:
        return self.skipped_no_metadata + self.skipped_collision

    @property
    def quarantined(self) -> int:
        return self._count(FileStatus.QUARANTINED)

    @property
    def failed(self) -> int:
        return self._count(FileStatus.FAILED)

    @property
    def exit_code(self) -> int:
        return 1 if self.aborted else 0
