"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/planner.py
Maps kept sources to date-partitioned destination paths.

Layout:
    <root>/YYYY/MM/DD/<name>   when a best timestamp exists (calendar date in its own zone)
    <root>/unknown/<name>      otherwise

Name collisions within one run are resolved with gapless "_N" suffixes
against the reservation set. The planner never touches the filesystem.
"""

import logging
import os
from datetime import datetime
from typing import List, Optional, Set

from mediaorganizer.core.models import Operation, SourceFile

logger = logging.getLogger(__name__)

UNKNOWN_DIR = "unknown"


def destination_dir(root: str, created_at: Optional[datetime]) -> str:
    """Date bucket directory for a timestamp (or the unknown bucket)."""
    if created_at is None:
        return os.path.join(root, UNKNOWN_DIR)
    return os.path.join(root, f"{created_at.year:04d}", f"{created_at.month:02d}", f"{created_at.day:02d}")


def with_suffix(path: str, n: int) -> str:
    """
    Insert a numeric suffix before the extension.
    n == 0 returns the path unchanged. Only the last extension counts:
        a/photo.tar.gz, 1 → a/photo.tar_1.gz
    """
    if n == 0:
        return path
    base, ext = os.path.splitext(path)
    return f"{base}_{n}{ext}"


class DestinationPlannerImpl:
    """Pure destination planner: one Operation per source, in input order."""

    def plan(
        self,
        destination_root: str,
        sources: List[SourceFile],
        reserved: Optional[Set[str]] = None
    ) -> List[Operation]:
        """
        Args:
            destination_root: Root of the date-partitioned tree
            sources: Kept files in processing order
            reserved: Paths already claimed (updated in place when given)
        Returns:
            List[Operation] with pairwise distinct destination paths
        """
        if reserved is None:
            reserved = set()

        operations = []
        for file in sources:
            base = os.path.join(destination_dir(destination_root, file.evidence.best), file.name)
            candidate = base
            n = 0
            while candidate in reserved:
                n += 1
                candidate = with_suffix(base, n)

            reserved.add(candidate)
            operations.append(Operation(source_path=file.path, destination_path=candidate))
            if n:
                logger.debug(f"Planned {file.path} -> {candidate} (name taken {n} time(s))")

        return operations
