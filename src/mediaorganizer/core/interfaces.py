"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the organizer.
These protocols enforce structural typing using Python's `typing.Protocol` so that
every capability (metadata decoding, filename matching, content comparison, hashing)
can be swapped for a fake in tests.

Key Components:
---------------
- MetadataExtractor: Reads an embedded creation timestamp from a media stream.
- FilenameMatcher: Derives a creation timestamp from a camera-style filename.
- TimestampAttributor: Collects timestamp evidence for a single file.
- HashAlgorithm: Standardized interface for hash functions (e.g., SHA-256).
- Hasher: Computes the header fingerprint of a file.
- ContentComparator: Answers "are these two files byte-for-byte identical".
- DuplicateResolver / DestinationPlanner / DestinationReconciler: pipeline stages.
"""

from datetime import datetime, tzinfo
from typing import BinaryIO, Callable, List, Optional, Protocol, Set

from mediaorganizer.core.models import (
    Decision,
    Operation,
    ResolutionResult,
    SourceFile,
    TimestampEvidence,
)

ProgressCallback = Callable[[str, int, Optional[int]], None]


# ===== Timestamp attribution =====

class MetadataExtractor(Protocol):
    """
    Extracts an embedded creation timestamp from a media stream.

    Implementations return None when no timestamp exists. Raising is allowed:
    callers treat any exception as "no metadata timestamp".
    """
    def extract(self, path: str, stream: BinaryIO) -> Optional[datetime]:
        ...


class FilenameMatcher(Protocol):
    """Derives a timestamp from a base filename, interpreted in the given zone (None = local)."""
    def match(self, filename: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
        ...


class TimestampAttributor(Protocol):
    def attribute(self, path: str, mtime: Optional[datetime] = None) -> TimestampEvidence:
        """
        Collect metadata/filename/filestat evidence for one file.

        Raises:
            FileNotFoundError: if the file does not exist.
            IsADirectoryError: if the path is a directory.
        """
        ...


# ===== Hashing and comparison =====

class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions without affecting the
    rest of the duplicate resolution logic.
    """

    @staticmethod
    def hash(data: bytes) -> bytes:
        """Computes the hash of the provided byte data."""
        ...


class Hasher(Protocol):
    """Interface for fingerprinting the header window of a file."""
    def compute_header_hash(self, file: SourceFile) -> bytes: ...


class ContentComparator(Protocol):
    """
    Single source of truth for "identical content".
    Must never report a false positive.
    """
    def are_identical(
        self,
        path1: str,
        path2: str,
        size1: Optional[int] = None,
        size2: Optional[int] = None
    ) -> bool:
        ...


# =============================
# Stage Interfaces
# =============================

class DuplicateResolver(Protocol):
    def resolve(
        self,
        files: List[SourceFile],
        progress_callback: Optional[ProgressCallback] = None
    ) -> ResolutionResult:
        """
        Partition files into identical-content groups and pick one canonical file per group.

        Returns:
            ResolutionResult with the kept files (input order) and one Decision per input.
        """
        ...


class DestinationPlanner(Protocol):
    def plan(
        self,
        destination_root: str,
        sources: List[SourceFile],
        reserved: Optional[Set[str]] = None
    ) -> List[Operation]:
        """Compute a collision-free destination path per source, without filesystem I/O."""
        ...


class DestinationReconciler(Protocol):
    def reconcile(
        self,
        operations: List[Operation],
        reserved: Optional[Set[str]] = None
    ) -> List[Decision]:
        """Probe the real destination tree and decide copy / copy_renamed / skipped_identical."""
        ...
