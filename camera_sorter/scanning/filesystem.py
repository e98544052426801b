import fnmatch
import logging
import os
from pathlib import Path
from typing import List

from ..exceptions import SourceDirectoryNotFound
from ..models import CandidateFile


class CandidateLocator:
    """Lists camera files directly inside one directory (no recursion)."""

    def __init__(self, pattern: str):
        self.pattern = pattern.lower()

    def locate(self, root: Path) -> List[CandidateFile]:
        """
        Returns files in root whose names match the pattern, case-insensitively.

        A missing root raises SourceDirectoryNotFound. Any other listing
        error is logged and treated as "nothing found".
        """
        if not root.is_dir():
            raise SourceDirectoryNotFound(f"Operating directory {root} not found.")

        logging.debug(f"Checking for files matching '{self.pattern}' in {root}")
        try:
            with os.scandir(root) as it:
                entries = [e for e in it
                           if e.is_file() and self.matches(e.name)]
        except OSError as e:
            logging.error(f"Error while searching for files in {root}: {e}")
            return []

        # Sort for stable processing order
        entries.sort(key=lambda e: e.name)
        return [CandidateFile(Path(e.path)) for e in entries]

    def matches(self, name: str) -> bool:
        return fnmatch.fnmatchcase(name.lower(), self.pattern)
