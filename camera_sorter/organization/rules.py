from datetime import datetime
from pathlib import Path

from .. import config
from ..models import DestinationPlan


class DestinationPlanner:
    """
    Sorted layout is always <root>/yyyy-MM/yyyy-MM-dd HH.mm.ss[.fff]<ext>.
    Example: /some/place/sorted/2069-04/2069-04-20 04.20.42.420.HIF
    """

    def __init__(self, dest_root: Path, name_format: str, with_millis: bool):
        self.dest_root = dest_root
        self.name_format = name_format
        self.with_millis = with_millis

    def plan(self, captured: datetime, ext: str) -> DestinationPlan:
        folder = self.dest_root / config.FOLDER_PATTERN.format(year=captured.year, month=captured.month)
        return DestinationPlan(folder, self.filename(captured, ext))

    def filename(self, captured: datetime, ext: str) -> str:
        stem = captured.strftime(self.name_format)
        if self.with_millis:
            stem += f".{captured.microsecond // 1000:03d}"
        return stem + ext
