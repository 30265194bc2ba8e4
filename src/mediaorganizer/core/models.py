"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and domain logic for media scanning, deduplication and destination planning.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from enum import Enum
from typing import Dict, List, Optional, Union


# =============================
# Enums
# =============================

class TimestampSource(str, Enum):
    """
    Provenance of the best creation timestamp.
    Priority order: metadata > filename > mtime > unknown.
    """
    METADATA = "metadata"
    FILENAME = "filename"
    MTIME = "mtime"
    UNKNOWN = "unknown"

    def __repr__(self) -> str:
        return self.value


class Action(str, Enum):
    """Per-source verdict produced by the planning stages (and flipped by the copy stage)."""
    COPY = "copy"
    COPY_RENAMED = "copy_renamed"
    COPIED = "copied"
    COPIED_RENAMED = "copied_renamed"
    SKIPPED_IDENTICAL = "skipped_identical"
    SKIPPED_DUPLICATE_SOURCE = "skipped_duplicate_source"
    FAILED = "failed"

    @property
    def is_pending_copy(self) -> bool:
        return self in (Action.COPY, Action.COPY_RENAMED)

    @property
    def display_name(self) -> str:
        """Human-readable name for summaries."""
        mapping = {
            Action.COPY: "To copy",
            Action.COPY_RENAMED: "To copy (renamed)",
            Action.COPIED: "Copied",
            Action.COPIED_RENAMED: "Copied (renamed)",
            Action.SKIPPED_IDENTICAL: "Already in destination",
            Action.SKIPPED_DUPLICATE_SOURCE: "Duplicate source",
            Action.FAILED: "Failed",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class TimestampEvidence:
    """
    Candidate creation timestamps of a single file.
    None means "absent"; there is no zero/epoch placeholder.
    """
    metadata: Optional[datetime] = None
    filename: Optional[datetime] = None
    filestat: Optional[datetime] = None

    @property
    def best(self) -> Optional[datetime]:
        for value in (self.metadata, self.filename, self.filestat):
            if value is not None:
                return value
        return None

    @property
    def source(self) -> TimestampSource:
        if self.metadata is not None:
            return TimestampSource.METADATA
        if self.filename is not None:
            return TimestampSource.FILENAME
        if self.filestat is not None:
            return TimestampSource.MTIME
        return TimestampSource.UNKNOWN


@dataclass(frozen=True)
class SourceFile:
    """
    Represents a single discovered media file.
    Identity is the path; the record is immutable once discovered.
    """
    path: str
    size: int  # in bytes
    relative_path: Optional[str] = None
    mtime: Optional[datetime] = None
    evidence: TimestampEvidence = field(default_factory=TimestampEvidence)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def __repr__(self):
        return f"<SourceFile path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    A set of byte-for-byte identical files with exactly one canonical member.
    Ephemeral: computed fresh on each run.
    """
    size: int
    files: List[SourceFile]
    canonical: str

    def __repr__(self):
        return f"<DuplicateGroup size={self.size}, count={len(self.files)}, canonical={self.canonical}>"


@dataclass(frozen=True)
class Operation:
    """A planned write: not yet verified against the real destination."""
    source_path: str
    destination_path: str


@dataclass
class Decision:
    """
    Final per-source verdict of a run.
    Only the copy stage may change it afterwards (copy → copied / failed).
    """
    source_path: str
    action: Action
    destination_path: Optional[str] = None  # planned destination
    final_destination_path: Optional[str] = None
    duplicate_of: Optional[str] = None
    error: Optional[str] = None

    def __repr__(self):
        return f"<Decision {self.action.value} {self.source_path}>"


@dataclass
class CopyResult:
    """Outcome of a single copy operation."""
    operation: Operation
    success: bool
    error: Optional[str] = None


@dataclass
class ResolutionStats:
    """
    Statistics collected while resolving duplicate sources.
    """
    total_time: float = 0.0
    stage_stats: Dict[str, Dict[str, Union[int, float]]] = field(default_factory=dict)

    def update_stage(
            self,
            stage_name: str,
            groups_found: int,
            files_processed: int,
            duration: float
    ) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {
                "groups": 0,
                "files": 0,
                "time": 0.0
            }
        self.stage_stats[stage_name]["groups"] += groups_found
        self.stage_stats[stage_name]["files"] += files_processed
        self.stage_stats[stage_name]["time"] += duration

    def print_summary(self) -> str:
        labels = {
            "size": "Size Groups",
            "header": "Header Hash Groups",
            "content": "Identical Content Clusters",
        }

        lines = [
            "Duplicate Resolution Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: GROUPS / FILES / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            if data["groups"] > 0 or data["time"] > 0:
                lines.append(f"{label}: {data['groups']} / {data['files']} / {data['time']:.3f}s")

        return "\n".join(lines)


@dataclass
class ResolutionResult:
    """Output of the duplicate resolver."""
    kept: List[SourceFile]
    decisions: List[Decision]
    groups: List[DuplicateGroup]
    stats: ResolutionStats


# =============================
# Parameters
# =============================

DEFAULT_PHOTO_EXTENSIONS = [".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic", ".tif", ".tiff", ".bmp"]
DEFAULT_VIDEO_EXTENSIONS = [".mp4", ".mov", ".m4v", ".mkv", ".avi", ".webm", ".mts", ".3gp"]


def normalize_extensions(extensions: List[str]) -> List[str]:
    """Lowercase, ensure a leading dot, drop empties and repeats (order preserved)."""
    normalized = []
    for ext in extensions:
        ext = ext.strip().lower()
        if ext and not ext.startswith('.'):
            ext = f".{ext}"
        if ext and ext not in normalized:
            normalized.append(ext)
    return normalized


@dataclass
class OrganizeParams:
    """
    Parameters for an organize/scan run with built-in validation.
    Interface-agnostic: built by the CLI from flags and the TOML config.
    """
    source_dir: str
    destination_dir: Optional[str] = None
    execute: bool = False
    overwrite: bool = False
    max_depth: int = -1
    photo_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_PHOTO_EXTENSIONS))
    video_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_VIDEO_EXTENSIONS))
    timezone: Optional[tzinfo] = None  # None → process local zone

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.source_dir:
            raise ValueError("Source directory cannot be empty")

        if self.destination_dir is not None:
            if not self.destination_dir:
                raise ValueError("Destination directory cannot be empty")
            if os.path.abspath(self.source_dir) == os.path.abspath(self.destination_dir):
                raise ValueError("Source and destination directories must differ")

        if self.max_depth < -1:
            raise ValueError("Maximum depth cannot be less than -1")

        if self.overwrite and not self.execute:
            raise ValueError("--overwrite only makes sense together with --execute")

        self.photo_extensions = normalize_extensions(self.photo_extensions)
        self.video_extensions = normalize_extensions(self.video_extensions)

    @property
    def extensions(self) -> List[str]:
        return self.photo_extensions + [e for e in self.video_extensions if e not in self.photo_extensions]
