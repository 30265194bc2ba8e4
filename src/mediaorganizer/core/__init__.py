"""
Core organizer engine: scanner, timestamp attribution, content equality,
duplicate resolution, destination planning and reconciliation.

This package contains the read-only foundation of mediaorganizer:
- FileScannerImpl: directory traversal with extension/depth filters
- TimestampAttributorImpl: metadata > filename > mtime evidence
- ContentComparatorImpl: the single byte-for-byte equality engine
- DuplicateResolverImpl: size → header hash → content clusters → oldest wins
- DestinationPlannerImpl / DestinationReconcilerImpl: YYYY/MM/DD layout with _N suffixes

Nothing here writes to the filesystem; copying lives in services.
"""

from .scanner import FileScannerImpl
from .timestamps import TimestampAttributorImpl
from .patterns import FilenamePatternMatcher
from .metadata import CompositeMetadataExtractor, ExifMetadataExtractor, ContainerMetadataExtractor
from .hasher import HasherImpl, Sha256AlgorithmImpl
from .comparator import ContentComparatorImpl
from .grouper import FileGrouperImpl
from .resolver import DuplicateResolverImpl, pick_oldest
from .planner import DestinationPlannerImpl
from .reconciler import DestinationReconcilerImpl
from .models import (
    Action, Decision, DuplicateGroup, Operation, OrganizeParams, SourceFile,
    TimestampEvidence, TimestampSource, ResolutionResult, ResolutionStats)

__all__ = [
    "FileScannerImpl",
    "TimestampAttributorImpl",
    "FilenamePatternMatcher",
    "CompositeMetadataExtractor",
    "ExifMetadataExtractor",
    "ContainerMetadataExtractor",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "ContentComparatorImpl",
    "FileGrouperImpl",
    "DuplicateResolverImpl",
    "pick_oldest",
    "DestinationPlannerImpl",
    "DestinationReconcilerImpl",
    "Action",
    "Decision",
    "DuplicateGroup",
    "Operation",
    "OrganizeParams",
    "SourceFile",
    "TimestampEvidence",
    "TimestampSource",
    "ResolutionResult",
    "ResolutionStats",
]
