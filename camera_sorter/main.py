import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core import CameraSorterApp
from .exceptions import CameraSorterError
from .media import PhotoHandler, VideoHandler
from .metadata.tools import ToolConfig
from .reporting import ReportGenerator

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class _Parser(argparse.ArgumentParser):
    # Usage errors (including unknown commands) are fatal failures: exit 1.
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def setup_logging(level: str, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a file."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)


def _add_common_args(p: argparse.ArgumentParser):
    p.add_argument("-u", "--unsorted-path", type=Path, required=True,
                   help="Directory holding the camera files to rename")
    p.add_argument("-s", "--sorted-path", type=Path, required=True,
                   help="Root of the sorted yyyy-MM library (created if missing)")
    p.add_argument("-l", "--log-level", type=str.upper, choices=LOG_LEVELS, default="INFO",
                   help="Application log level (default: INFO)")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("--dry-run", action="store_true", help="Plan and log moves without touching disk")
    p.add_argument("--report-csv", type=Path, default=None, help="Write a per-file outcome CSV")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = _Parser(description="Camera Sorter: rename Sony camera files into a yyyy-MM library")
    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    video = sub.add_parser("video-renamer", help="Rename C*.MP4 clips by container creation_time")
    _add_common_args(video)
    video.add_argument("--tools-dir", type=Path, default=None,
                       help="Folder containing ffprobe (default: Resources/<platform>)")

    photo = sub.add_parser("photo-renamer", help="Rename DSC* stills by EXIF DateTimeOriginal")
    _add_common_args(photo)

    args = p.parse_args(argv)
    if not args.command:
        p.error("a command is required")
    return args


def run(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    logging.debug("Successfully parsed command line arguments.")

    src_root = args.unsorted_path.resolve()
    dest_root = args.sorted_path.resolve()

    try:
        if args.command == "video-renamer":
            handler = VideoHandler(ToolConfig.for_platform(tools_dir=args.tools_dir))
        else:
            handler = PhotoHandler()

        logging.info(f"=== Starting {handler.label} renamer ===")
        logging.info(f"Source: {src_root}")
        logging.info(f"Dest:   {dest_root}")

        outcome = CameraSorterApp(handler).run(src_root, dest_root, dry_run=args.dry_run)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except CameraSorterError as e:
        logging.error(f"Fatal: {e}")
        return 1
    except Exception:
        logging.exception("Fatal error during renaming.")
        return 1

    reporter = ReportGenerator(outcome)
    reporter.log_summary(handler.label)
    if args.report_csv:
        reporter.write_csv(args.report_csv)

    logging.info(f"{handler.label.capitalize()} renamer finished with exit code {outcome.exit_code}.")
    return outcome.exit_code


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
