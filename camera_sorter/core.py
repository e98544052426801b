import logging
from pathlib import Path

from tqdm import tqdm

from .exceptions import MetadataToolError, SourceDirectoryNotFound
from .media import MediaHandler
from .models import FileResult, FileStatus, RunOutcome
from .organization.mover import FileMover


class CameraSorterApp:
    def __init__(self, handler: MediaHandler):
        self.handler = handler

    def run(self, src_root: Path, dest_root: Path, dry_run: bool = False) -> RunOutcome:
        """
        Executes one renaming pass.
        1. Verify source, prepare destination root
        2. Locate candidates
        3. Resolve FTP retry groups (photos)
        4. Per file: Extract -> Plan -> Move

        A missing source or an unusable metadata tool aborts the run
        (outcome.exit_code == 1); everything else is handled per file.
        """
        outcome = RunOutcome()
        label = self.handler.label

        if not src_root.is_dir():
            logging.error(f"Operating directory {src_root} not found.")
            outcome.aborted = True
            return outcome

        if not dest_root.is_dir() and not dry_run:
            logging.info(f"Sorted directory not found: {dest_root}. Creating it...")
            dest_root.mkdir(parents=True, exist_ok=True)

        try:
            candidates = self.handler.locate(src_root)
        except SourceDirectoryNotFound as e:
            logging.error(str(e))
            outcome.aborted = True
            return outcome
        outcome.discovered = len(candidates)

        resolution = self.handler.resolve(src_root, candidates, dry_run=dry_run)
        for candidate in resolution.quarantined:
            outcome.record(FileResult(candidate.path, FileStatus.QUARANTINED, detail="likely corrupted retry"))

        files = resolution.survivors
        if not files:
            logging.info(f"No {label} files matching rename criteria found in '{src_root}'.")
            return outcome

        logging.info(f"Found {len(files)} {label} files to process in '{src_root}'.")

        mover = FileMover(dry_run=dry_run)
        for candidate in tqdm(files, desc="Renaming", unit="file", disable=None):
            logging.info(f"Processing file: {candidate.name}")
            try:
                captured = self.handler.extract_timestamp(candidate.path)
            except MetadataToolError as e:
                logging.error(f"Metadata tool failure, aborting run: {e}")
                outcome.aborted = True
                break

            if captured is None:
                logging.warning(f"Could not determine capture time for '{candidate.name}'. Skipping.")
                outcome.record(FileResult(candidate.path, FileStatus.NO_METADATA, detail="no capture time"))
                continue

            plan = self.handler.plan(dest_root, captured, candidate)
            logging.debug(f"New file path will be {plan.path}")
            outcome.record(mover.execute(candidate, plan))

        return outcome
