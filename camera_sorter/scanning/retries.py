"""
Handling for files duplicated by interrupted FTP uploads.

Straight off an SD card, Sony stills are named DSC0001.HIF, DSC0002.HIF and so
on. When the camera's FTP transfer is interrupted (network drop, dead battery)
and later retried, the server keeps the partial first attempt under the
original name and the retry lands as DSC0001_1.HIF, DSC0001_2.HIF, ... The
highest "_N" variant is the complete image; the others are truncated.

Both variants carry identical DateTimeOriginal values, so renaming them
naively would move whichever comes first (often the broken one) and skip the
good one as a collision. The resolver keeps one authoritative file per
capture and moves the rest aside into a quarantine folder, so they are not
picked up again on the next run either.
"""
import logging
import shutil
from pathlib import Path
from typing import Dict, List

from .. import config
from ..exceptions import FileOperationError
from ..models import CandidateFile, RetryGroup, RetryResolution


def group_by_canonical_name(candidates: List[CandidateFile]) -> List[RetryGroup]:
    """Buckets candidates by suffix-less name, ignoring case."""
    groups: Dict[str, RetryGroup] = {}
    for candidate in candidates:
        key = candidate.canonical_name.casefold()
        if key not in groups:
            groups[key] = RetryGroup(candidate.canonical_name)
        groups[key].members.append(candidate)
    return list(groups.values())


def pick_authoritative(group: RetryGroup) -> CandidateFile:
    """
    Highest suffixed name wins, compared by code point.

    Plain string order, so DSC0001_9 beats DSC0001_10. Retry counts past 9
    have not been seen from real cameras.
    """
    suffixed = [m for m in group.members if m.has_retry_suffix]
    return sorted(suffixed, key=lambda m: m.name, reverse=True)[0]


def split_candidates(candidates: List[CandidateFile]) -> RetryResolution:
    """
    Pure half of the resolver: decides survivors and quarantine, touches
    nothing on disk.
    """
    if not any(c.has_retry_suffix for c in candidates):
        return RetryResolution(survivors=list(candidates), quarantined=[])

    survivors: List[CandidateFile] = []
    quarantined: List[CandidateFile] = []
    for group in group_by_canonical_name(candidates):
        if not group.has_retries:
            survivors.extend(group.members)
            continue
        keeper = pick_authoritative(group)
        survivors.append(keeper)
        quarantined.extend(m for m in group.members if m is not keeper)

    survivors.sort(key=lambda c: c.name)
    return RetryResolution(survivors=survivors, quarantined=quarantined)


class RetryGroupResolver:
    def __init__(self, source_root: Path, dry_run: bool = False):
        self.source_root = source_root
        self.quarantine_dir = source_root / config.QUARANTINE_DIR_NAME
        self.dry_run = dry_run

    def resolve(self, candidates: List[CandidateFile]) -> RetryResolution:
        """
        Returns the authoritative files and moves every other member of a
        retry group into <source>/likely-corrupted.

        `quarantined` on the result lists only files that actually moved;
        a file that could not be moved stays in the source directory.
        """
        resolution = split_candidates(candidates)
        if not resolution.quarantined:
            return resolution

        logging.info(f"Found {len(resolution.quarantined)} files that are possibly corrupted "
                     f"by retried FTP uploads.")

        if self.dry_run:
            for candidate in resolution.quarantined:
                logging.info(f"[DRY RUN] Quarantine {candidate.path} -> {self.quarantine_dir}")
            return RetryResolution(resolution.survivors, [])

        try:
            if not self.quarantine_dir.is_dir():
                logging.debug(f"Creating quarantine directory at {self.quarantine_dir}")
                self.quarantine_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logging.error(f"Cannot create quarantine directory {self.quarantine_dir}. "
                          f"{len(resolution.quarantined)} likely corrupted files will remain in the "
                          f"unsorted directory. Error: {e}")
            return RetryResolution(resolution.survivors, [])

        moved = []
        for candidate in resolution.quarantined:
            if self._quarantine(candidate):
                moved.append(candidate)

        logging.info(f"Moved {len(moved)} files to {self.quarantine_dir}")
        return RetryResolution(resolution.survivors, moved)

    def _quarantine(self, candidate: CandidateFile) -> bool:
        target = self.quarantine_dir / candidate.name
        try:
            if target.exists():
                raise FileOperationError(f"{target} already exists")
            shutil.move(str(candidate.path), str(target))
            logging.debug(f"Quarantined '{candidate.path}' -> '{target}'")
            return True
        except Exception as e:
            logging.error(f"Failed to move '{candidate.path}' to {self.quarantine_dir}. "
                          f"It will remain in the unsorted directory. Error: {e}")
            return False
