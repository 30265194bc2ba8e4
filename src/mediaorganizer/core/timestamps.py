"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/timestamps.py
Best-effort creation timestamp attribution for a single file.

Priority: embedded metadata > filename pattern > filesystem mtime > unknown.
"""

import logging
import os
import stat
from datetime import datetime, tzinfo
from typing import Iterable, Optional

from mediaorganizer.core.interfaces import FilenameMatcher, MetadataExtractor
from mediaorganizer.core.metadata import CompositeMetadataExtractor
from mediaorganizer.core.models import TimestampEvidence
from mediaorganizer.core.patterns import FilenamePatternMatcher
from mediaorganizer.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


class TimestampAttributorImpl:
    """
    Collects metadata/filename/filestat evidence for a file.

    Attributes:
        metadata_extractor: Embedded metadata capability (EXIF/container by default)
        filename_matcher: Filename pattern capability
        tz: Zone for wall-clock timestamps without an offset (None = process local zone)
        video_extensions: Extensions read as video containers by the default extractor
    """

    def __init__(
        self,
        metadata_extractor: Optional[MetadataExtractor] = None,
        filename_matcher: Optional[FilenameMatcher] = None,
        tz: Optional[tzinfo] = None,
        video_extensions: Optional[Iterable[str]] = None
    ):
        self.metadata_extractor = metadata_extractor or CompositeMetadataExtractor(tz, video_extensions)
        self.filename_matcher = filename_matcher or FilenamePatternMatcher()
        self.tz = tz

    def attribute(self, path: str, mtime: Optional[datetime] = None) -> TimestampEvidence:
        """
        Args:
            path: File to inspect
            mtime: Modification time already known from scanning (stat'd otherwise)
        Raises:
            FileNotFoundError: the file does not exist
            IsADirectoryError: the path is a directory
            OSError: the file cannot be stat'd or opened
        """
        st = os.stat(path)
        if stat.S_ISDIR(st.st_mode):
            raise IsADirectoryError(f"Is a directory: {path}")

        metadata = self._from_metadata(path)
        from_name = self.filename_matcher.match(os.path.basename(path), self.tz)

        if mtime is None:
            mtime = ConvertUtils.from_timestamp(st.st_mtime)

        evidence = TimestampEvidence(metadata=metadata, filename=from_name, filestat=mtime)
        logger.debug(f"Timestamp for {path}: {evidence.best} ({evidence.source.value})")
        return evidence

    def _from_metadata(self, path: str) -> Optional[datetime]:
        with open(path, "rb") as stream:
            try:
                found = self.metadata_extractor.extract(path, stream)
            except Exception as e:
                # Metadata errors never abort the run
                logger.debug(f"Metadata extraction failed for {path}: {e}")
                return None

        if found is None:
            return None
        return ConvertUtils.localize(found, self.tz)
