"""
Media Organizer: copies photos and videos into a date-partitioned library.

Core features:
- Creation timestamp attribution: embedded metadata → filename pattern → mtime
- Byte-exact duplicate detection (size → header hash → full comparison)
- Destination layout <root>/YYYY/MM/DD (or <root>/unknown) with _N collision suffixes
- Dry run by default; copies never overwrite existing files
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("mediaorganizer")
except Exception:
    import os as _os
    import tomli as _tomllib

    _pyproject = _os.path.join(_os.path.dirname(__file__), "..", "..", "pyproject.toml")
    with open(_pyproject, "rb") as f:
        __version__ = _tomllib.load(f)["project"]["version"]

# Public API: only what users should import directly
from mediaorganizer.commands import OrganizeCommand, OrganizeReport, ScanCommand
from mediaorganizer.core import (
    Action, Decision, DuplicateGroup, Operation, OrganizeParams, SourceFile, TimestampEvidence)
from mediaorganizer.utils.convert_utils import ConvertUtils
from mediaorganizer.services import DecisionService, FileService

__all__ = [
    "OrganizeCommand",
    "OrganizeReport",
    "ScanCommand",
    "OrganizeParams",
    "Action",
    "Decision",
    "DuplicateGroup",
    "Operation",
    "SourceFile",
    "TimestampEvidence",
    "ConvertUtils",
    "DecisionService",
    "FileService",
    "__version__",
]
