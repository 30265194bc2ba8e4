"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

commands.py
Unified command orchestrators for scanning and organizing.
This is the SINGLE source of truth for the workflow: the CLI only parses arguments
and renders results.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from mediaorganizer.core.interfaces import (
    DestinationPlanner,
    DestinationReconciler,
    DuplicateResolver,
    ProgressCallback,
    TimestampAttributor,
)
from mediaorganizer.core.models import (
    Action,
    Decision,
    OrganizeParams,
    ResolutionResult,
    SourceFile,
)
from mediaorganizer.core.planner import DestinationPlannerImpl
from mediaorganizer.core.reconciler import DestinationReconcilerImpl
from mediaorganizer.core.resolver import DuplicateResolverImpl
from mediaorganizer.core.scanner import FileScannerImpl
from mediaorganizer.core.timestamps import TimestampAttributorImpl
from mediaorganizer.services.decision_service import DecisionService
from mediaorganizer.services.file_service import FileService

logger = logging.getLogger(__name__)


@dataclass
class OrganizeReport:
    """Everything an organize run produced, in scan order."""
    files: List[SourceFile]
    decisions: List[Decision]
    resolution: Optional[ResolutionResult] = None
    executed: bool = False
    summary: Dict[Action, int] = field(default_factory=dict)

    def file_by_path(self) -> Dict[str, SourceFile]:
        return {f.path: f for f in self.files}


class ScanCommand:
    """
    Scans a directory and attributes a creation timestamp to every media file.

    Usage:
        params = OrganizeParams(source_dir="/photos")
        files = ScanCommand().execute(params)
    """

    def __init__(self, attributor: Optional[TimestampAttributor] = None):
        self.attributor = attributor

    def execute(
            self,
            params: OrganizeParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[SourceFile]:
        scanner = FileScannerImpl(params.source_dir, params.extensions, params.max_depth)
        files = scanner.scan(progress_callback=progress_callback)

        attributor = self.attributor or TimestampAttributorImpl(
            tz=params.timezone, video_extensions=params.video_extensions)
        attributed = []
        for index, file in enumerate(files, start=1):
            evidence = attributor.attribute(file.path, file.mtime)
            attributed.append(replace(file, evidence=evidence))
            if progress_callback:
                progress_callback("attributing", index, len(files))

        logger.info(f"Scanned {len(attributed)} media files in {params.source_dir}")
        return attributed


class OrganizeCommand:
    """
    Orchestrates the whole organize workflow:
    1. Scan and attribute timestamps
    2. Resolve duplicate sources
    3. Plan destinations for kept files
    4. Reconcile against the real destination tree
    5. Copy (only when params.execute is set)

    Steps 1-4 are read-only, so a fatal error there leaves the destination untouched.
    """

    def __init__(
            self,
            scan_command: Optional[ScanCommand] = None,
            resolver: Optional[DuplicateResolver] = None,
            planner: Optional[DestinationPlanner] = None,
            reconciler: Optional[DestinationReconciler] = None
    ):
        self.scan_command = scan_command or ScanCommand()
        self.resolver = resolver or DuplicateResolverImpl()
        self.planner = planner or DestinationPlannerImpl()
        self.reconciler = reconciler or DestinationReconcilerImpl()

    def execute(
            self,
            params: OrganizeParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> OrganizeReport:
        """
        Args:
            params: Validated parameters (destination_dir required)
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
        Raises:
            ValueError: destination directory missing
            RuntimeError: source directory missing or not a directory
            OSError: fatal I/O error while resolving or reconciling
        """
        if not params.destination_dir:
            raise ValueError("Destination directory is required")

        files = self.scan_command.execute(params, progress_callback=progress_callback)

        resolution = self.resolver.resolve(files, progress_callback=progress_callback)
        operations = self.planner.plan(params.destination_dir, resolution.kept)
        destination_decisions = self.reconciler.reconcile(operations)

        decisions = DecisionService.merge(
            [f.path for f in files], resolution.decisions, destination_decisions)

        if params.execute:
            to_copy = DecisionService.operations_to_copy(decisions)
            logger.info(f"Copying {len(to_copy)} files to {params.destination_dir}")
            results = FileService.execute(to_copy, overwrite=params.overwrite)
            decisions = DecisionService.apply_copy_results(decisions, results)

        return OrganizeReport(
            files=files,
            decisions=decisions,
            resolution=resolution,
            executed=params.execute,
            summary=DecisionService.summarize(decisions),
        )
