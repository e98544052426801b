import logging
import shutil

from ..models import CandidateFile, DestinationPlan, FileResult, FileStatus


class FileMover:
    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def execute(self, candidate: CandidateFile, plan: DestinationPlan) -> FileResult:
        """
        Moves one file into its planned slot.

        Never overwrites: if the destination is taken (usually by an earlier
        run) the file is skipped and left where it is. Failures are logged and
        reported in the result; they never propagate to the batch.
        """
        src = candidate.path
        dest = plan.path

        if self.dry_run:
            if dest.exists():
                logging.warning(f"[DRY RUN] Destination already exists: {dest}. Would skip {src}.")
                return FileResult(src, FileStatus.COLLISION, dest, "destination exists")
            logging.info(f"[DRY RUN] Move {src} -> {dest}")
            return FileResult(src, FileStatus.PLANNED, dest)

        try:
            if not plan.directory.is_dir():
                logging.info(f"Year-month directory does not exist yet, creating {plan.directory}")
                plan.directory.mkdir(parents=True, exist_ok=True)

            if dest.exists():
                logging.warning(f"Destination file already exists: {dest}. Skipping this file {src}.")
                return FileResult(src, FileStatus.COLLISION, dest, "destination exists")

            shutil.move(str(src), str(dest))
            logging.info(f"Moved '{src}' -> '{dest}'")
            return FileResult(src, FileStatus.RENAMED, dest)
        except OSError as e:
            logging.error(f"I/O error while processing file '{src.name}'. Skipping. Error: {e}")
            return FileResult(src, FileStatus.FAILED, dest, str(e))
        except Exception as e:
            logging.exception(f"Unexpected error while processing file '{src.name}'. Skipping.")
            return FileResult(src, FileStatus.FAILED, dest, str(e))
