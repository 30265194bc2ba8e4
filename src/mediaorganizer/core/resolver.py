"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/resolver.py
Implements a pipeline-based duplicate source resolver using SourceFile objects:
    size → header hash (pre-filter) → exact content clusters → canonical pick

Files that are alone in their size group or header-hash group are kept without
any byte comparison, which keeps the common case cheap.
"""
import logging
import time
from typing import Dict, List, Optional

from mediaorganizer.core.grouper import FileGrouperImpl
from mediaorganizer.core.interfaces import ProgressCallback
from mediaorganizer.core.models import (
    Action,
    Decision,
    DuplicateGroup,
    ResolutionResult,
    ResolutionStats,
    SourceFile,
)

logger = logging.getLogger(__name__)


def pick_oldest(members: List[SourceFile]) -> SourceFile:
    """
    Canonical tie-break for a cluster of identical files.

    Earliest known best timestamp wins, ties go to the lexicographically smallest path.
    A member with an unknown timestamp never beats one with a known timestamp.
    If every timestamp is unknown, the smallest path wins (stability only).
    """
    known = [f for f in members if f.evidence.best is not None]
    if known:
        return min(known, key=lambda f: (f.evidence.best, f.path))
    return min(members, key=lambda f: f.path)


# =============================
# Main Resolver Class
# =============================
class DuplicateResolverImpl:
    """
    Partitions a batch of sources into identical-content groups and picks one
    canonical member per group. Collects per-stage statistics.

    Any I/O error aborts the whole batch: acting on a partial duplicate
    determination would be unsafe.
    """

    def __init__(self, grouper: Optional[FileGrouperImpl] = None):
        self.grouper = grouper or FileGrouperImpl()

    def resolve(
        self,
        files: List[SourceFile],
        progress_callback: Optional[ProgressCallback] = None
    ) -> ResolutionResult:
        """
        Args:
            files: Scanned files with sizes and timestamp evidence
            progress_callback: Reports (stage, processed, total)
        Returns:
            ResolutionResult: kept files and decisions (both in input order), groups, stats
        """
        stats = ResolutionStats()
        total_start_time = time.time()

        start_time = time.time()
        size_groups = self.grouper.group_by_size(files)
        candidates = [g for g in size_groups.values() if len(g) >= 2]
        stats.update_stage("size", len(candidates), sum(len(g) for g in candidates), time.time() - start_time)
        if progress_callback:
            progress_callback("Size grouping", len(files), len(files))

        clusters = self._cluster(candidates, stats, progress_callback)

        duplicate_of: Dict[str, str] = {}
        groups: List[DuplicateGroup] = []
        for cluster in clusters:
            canonical = pick_oldest(cluster)
            members = sorted(cluster, key=lambda f: f.path)
            groups.append(DuplicateGroup(size=canonical.size, files=members, canonical=canonical.path))
            for member in members:
                if member.path != canonical.path:
                    duplicate_of[member.path] = canonical.path
            logger.debug(f"Duplicate group of {len(members)} files, keeping {canonical.path}")

        kept: List[SourceFile] = []
        decisions: List[Decision] = []
        for file in files:
            if file.path in duplicate_of:
                decisions.append(Decision(
                    source_path=file.path,
                    action=Action.SKIPPED_DUPLICATE_SOURCE,
                    duplicate_of=duplicate_of[file.path],
                ))
            else:
                kept.append(file)
                decisions.append(Decision(source_path=file.path, action=Action.COPY))

        stats.total_time = time.time() - total_start_time
        logger.info(f"Resolved {len(files)} sources: {len(kept)} kept, {len(duplicate_of)} duplicates")
        return ResolutionResult(kept=kept, decisions=decisions, groups=groups, stats=stats)

    def _cluster(
        self,
        size_groups: List[List[SourceFile]],
        stats: ResolutionStats,
        progress_callback: Optional[ProgressCallback]
    ) -> List[List[SourceFile]]:
        """Header-hash and content stages. Returns clusters of 2+ identical files."""
        total_files = sum(len(g) for g in size_groups)
        processed_files = 0
        clusters: List[List[SourceFile]] = []

        for group in size_groups:
            start_time = time.time()
            header_groups = [g for g in self.grouper.group_by_header_hash(group).values() if len(g) >= 2]
            stats.update_stage("header", len(header_groups), sum(len(g) for g in header_groups),
                               time.time() - start_time)

            start_time = time.time()
            found = []
            for candidates in header_groups:
                found.extend(c for c in self.grouper.cluster_by_content(candidates) if len(c) >= 2)
            stats.update_stage("content", len(found), sum(len(c) for c in found), time.time() - start_time)
            clusters.extend(found)

            processed_files += len(group)
            if progress_callback:
                progress_callback("Content comparison", processed_files, total_files)

        return clusters
