import csv
import logging
from pathlib import Path

from .models import RunOutcome


class ReportGenerator:
    def __init__(self, outcome: RunOutcome):
        self.outcome = outcome

    def log_summary(self, label: str):
        o = self.outcome
        logging.info(
            f"{label.capitalize()} run summary: discovered={o.discovered} renamed={o.renamed} "
            f"planned={o.planned} skipped_no_metadata={o.skipped_no_metadata} "
            f"skipped_collision={o.skipped_collision} quarantined={o.quarantined} failed={o.failed}"
        )
        if o.aborted:
            logging.error(f"{label.capitalize()} run aborted before all files were processed.")

    def write_csv(self, output_csv: Path):
        """
        One row per file touched (or deliberately left alone) by the run.
        """
        headers = ["Source Path", "Status", "Destination Path", "Notes"]

        output_csv.parent.mkdir(parents=True, exist_ok=True)
        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            for result in self.outcome.results:
                writer.writerow([
                    str(result.source),
                    result.status.value,
                    str(result.destination) if result.destination else "",
                    result.detail,
                ])

        logging.info(f"Report written: {output_csv} ({len(self.outcome.results)} rows)")
