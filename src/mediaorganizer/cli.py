#!/usr/bin/env python3
"""
Media Organizer CLI: copies photos and videos into a date-partitioned library.
Dry run by default: nothing is written unless --execute is given, and existing
files are never overwritten, moved or deleted.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import json
import os
import sys
import time
from typing import Any, Dict, List, NoReturn, Optional
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from mediaorganizer import __version__
from mediaorganizer.aliases import (
    ACTION_LABELS, EPILOG_TEXT, EXTENSIONS_TEXT, MAX_DEPTH_HELP_TEXT, TIMEZONE_HELP_TEXT
)
from mediaorganizer.commands import OrganizeCommand, OrganizeReport, ScanCommand
from mediaorganizer.config import OrganizerConfig, load_config, parse_timezone
from mediaorganizer.core.models import Action, OrganizeParams, SourceFile, TimestampEvidence
from mediaorganizer.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


def evidence_to_dict(evidence: TimestampEvidence) -> Dict[str, str]:
    """created_at candidates as RFC 3339 strings; absent candidates are omitted."""
    created_at = {}
    for key in ("metadata", "filename", "filestat"):
        value = getattr(evidence, key)
        if value is not None:
            created_at[key] = ConvertUtils.to_rfc3339(value)
    return created_at


def file_to_dict(file: SourceFile) -> Dict[str, Any]:
    return {
        "source_path": file.path,
        "created_at": evidence_to_dict(file.evidence),
        "file_size_bytes": file.size,
        "mod_time": file.mtime.isoformat() if file.mtime else None,
    }


def report_to_json(report: OrganizeReport) -> List[Dict[str, Any]]:
    """One JSON object per decision, in scan order."""
    files = report.file_by_path()
    records = []
    for d in report.decisions:
        record = file_to_dict(files[d.source_path])
        if d.destination_path:
            record["destination_path"] = d.destination_path
        record["action"] = d.action.value
        if d.final_destination_path and d.final_destination_path != d.destination_path:
            record["final_destination_path"] = d.final_destination_path
        if d.duplicate_of:
            record["duplicate_of"] = d.duplicate_of
        if d.error:
            record["error"] = d.error
        records.append(record)
    return records


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: int = 0
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            "--max-depth",
            default=None,
            type=int,
            metavar='N',
            help=MAX_DEPTH_HELP_TEXT
        )
        common.add_argument(
            "--json",
            action="store_true",
            help="Output records as JSON"
        )
        common.add_argument(
            "--timezone",
            default=None,
            type=str,
            metavar='ZONE',
            help=TIMEZONE_HELP_TEXT
        )
        common.add_argument(
            "--config",
            default=None,
            type=str,
            metavar='PATH',
            help="TOML config file (default: $MEDIAORGANIZER_CONFIG or ./mediaorganizer.toml)"
        )
        common.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        common.add_argument(
            "--verbose", "-v",
            action="count",
            default=0,
            help="Show progress and statistics (-vv for debug logging)"
        )

        parser = argparse.ArgumentParser(
            prog="mediaorganizer",
            description="Media Organizer: sort photos and videos into YYYY/MM/DD folders",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )
        parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

        subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
        subparsers.required = True

        organize = subparsers.add_parser(
            "organize",
            parents=[common],
            formatter_class=argparse.RawTextHelpFormatter,
            help="Organize media files from source to destination",
            description="Organize media files from SOURCE into DESTINATION by creation date.\n"
                        "Dry run unless --execute is given.\n\n" + EXTENSIONS_TEXT
        )
        organize.add_argument("source", help="Directory to read media files from")
        organize.add_argument("destination", help="Root of the organized library")
        organize.add_argument(
            "--execute", "-x",
            action="store_true",
            help="Execute copy operations (default: dry run)"
        )
        organize.add_argument(
            "--overwrite",
            action="store_true",
            default=None,
            help="Allow overwriting existing destination files (only with --execute)"
        )

        scan = subparsers.add_parser(
            "scan",
            parents=[common],
            formatter_class=argparse.RawTextHelpFormatter,
            help="Scan a directory for media files",
            description="Print all media files found, relative to the scan root.\n\n" + EXTENSIONS_TEXT
        )
        scan.add_argument("directory", help="Directory to scan")

        return parser.parse_args(args)

    def configure_logging(self) -> None:
        if self.verbose >= 2:
            level = logging.DEBUG
        elif self.verbose == 1:
            level = logging.INFO
        else:
            level = logging.ERROR
        logging.getLogger().setLevel(level)

    def load_config(self, args: argparse.Namespace) -> OrganizerConfig:
        try:
            return load_config(args.config)
        except (OSError, ValueError) as e:
            self.error_exit(f"Config error: {e}")

    def create_params(self, args: argparse.Namespace, config: OrganizerConfig) -> OrganizeParams:
        """Create OrganizeParams from CLI arguments; flags override the config file."""
        source = args.source if args.command == "organize" else args.directory
        destination = args.destination if args.command == "organize" else None
        execute = getattr(args, "execute", False)
        overwrite = getattr(args, "overwrite", None)
        if overwrite is None:
            # The config file may enable overwriting only for executed runs
            overwrite = config.overwrite and execute

        try:
            return OrganizeParams(
                source_dir=source,
                destination_dir=destination,
                execute=execute,
                overwrite=overwrite,
                max_depth=args.max_depth if args.max_depth is not None else config.max_depth,
                photo_extensions=config.photo_extensions,
                video_extensions=config.video_extensions,
                timezone=parse_timezone(args.timezone if args.timezone is not None else config.timezone),
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def validate_params(self, params: OrganizeParams) -> None:
        """Validate directories before anything is read."""
        if not os.path.exists(params.source_dir):
            self.error_exit(f"Directory not found: {params.source_dir}")
        if not os.path.isdir(params.source_dir):
            self.error_exit(f"Path is not a directory: {params.source_dir}")
        if params.destination_dir and os.path.exists(params.destination_dir) \
                and not os.path.isdir(params.destination_dir):
            self.error_exit(f"Destination is not a directory: {params.destination_dir}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose or self.quiet:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def _end_progress(self) -> None:
        if self.verbose and not self.quiet:
            sys.stderr.write("\n")

    def run_scan(self, params: OrganizeParams, as_json: bool) -> None:
        try:
            files = ScanCommand().execute(params, progress_callback=self.progress_callback)
        except (OSError, RuntimeError, ValueError) as e:
            self._end_progress()
            self.error_exit(f"Scan failed: {e}")
        self._end_progress()

        if as_json:
            self.print_json([file_to_dict(f) for f in files])
            return

        for file in files:
            print(file.relative_path)

        if self.verbose and not self.quiet:
            print(f"found {len(files)} media files", file=sys.stderr)

    def run_organize(self, params: OrganizeParams, as_json: bool) -> None:
        try:
            report = OrganizeCommand().execute(params, progress_callback=self.progress_callback)
        except (OSError, RuntimeError, ValueError) as e:
            self._end_progress()
            self.error_exit(f"Organize failed: {e}")
        self._end_progress()

        if as_json:
            self.print_json(report_to_json(report))
            return

        self.output_decisions(report)

        if self.verbose and not self.quiet:
            if report.resolution is not None:
                print(report.resolution.stats.print_summary(), file=sys.stderr)
            for action, count in report.summary.items():
                print(f"  {action.display_name}: {count}", file=sys.stderr)
            files = report.file_by_path()
            to_write = sum(files[d.source_path].size for d in report.decisions
                           if d.action in (Action.COPY, Action.COPY_RENAMED, Action.COPIED, Action.COPIED_RENAMED))
            print(f"  Data: {ConvertUtils.bytes_to_human(to_write)}", file=sys.stderr)

    def output_decisions(self, report: OrganizeReport) -> None:
        """One line per decision; failures go to stderr."""
        processed = 0
        for d in report.decisions:
            if d.action == Action.FAILED:
                print(f"failed {d.source_path}: {d.error}", file=sys.stderr)
                continue

            if d.action not in (Action.COPY, Action.COPY_RENAMED):
                processed += 1
            if self.quiet:
                continue
            line = ACTION_LABELS[d.action.value]
            print(line.format(src=d.source_path, dst=d.final_destination_path, dup=d.duplicate_of))

        if self.verbose and not self.quiet:
            print(f"processed {processed} of {len(report.decisions)} files", file=sys.stderr)

    @staticmethod
    def print_json(data: Any) -> None:
        print(json.dumps(data, indent=2, ensure_ascii=False))

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.configure_logging()

        config = self.load_config(args)
        params = self.create_params(args, config)
        self.validate_params(params)

        if args.command == "scan":
            self.run_scan(params, args.json)
        else:
            self.run_organize(params, args.json)

        if self.verbose and not self.quiet:
            elapsed = time.time() - self.start_time
            print(f"✅ Completed in {elapsed:.2f} seconds", file=sys.stderr)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
