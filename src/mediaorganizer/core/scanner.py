"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements the media directory walker.
Features:
- Walks the tree with os.walk (no symlink following)
- Case-insensitive extension allow-list
- Maximum recursion depth (-1 = unlimited, 0 = top level only)
- Returns files sorted by POSIX relative path, so runs are reproducible
"""

import logging
import os
import time
from pathlib import Path
from typing import List, Optional

from mediaorganizer.core.interfaces import ProgressCallback
from mediaorganizer.core.models import SourceFile, normalize_extensions
from mediaorganizer.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


def relative_depth(relative_path: str) -> int:
    """Number of directories between the scan root and the entry ("a.jpg" → 0, "x/a.jpg" → 1)."""
    return relative_path.count("/")


class FileScannerImpl:
    """
    Scans a directory tree for media files.

    Attributes:
        root_dir: Root directory to scan
        extensions: Allowed file extensions (e.g., [".jpg", ".mp4"]); empty = everything
        max_depth: Maximum depth of accepted files, -1 for unlimited
    """

    def __init__(
        self,
        root_dir: str,
        extensions: Optional[List[str]] = None,
        max_depth: int = -1
    ):
        if max_depth < -1:
            raise ValueError(f"Invalid maximum depth: {max_depth}")
        self.root_dir = root_dir
        self.extensions = normalize_extensions(extensions) if extensions else []
        self.max_depth = max_depth

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[SourceFile]:
        """
        Returns matching files sorted by relative path.
        Raises:
            RuntimeError: root is missing or not a directory
            OSError: a directory cannot be listed or a file cannot be stat'd
        """
        logger.debug("Starting scan operation")
        logger.debug(f"Root directory: {self.root_dir}")
        logger.debug(f"Filters: max_depth={self.max_depth}, extensions={self.extensions}")

        root_path = Path(self.root_dir)
        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        root = str(root_path.absolute())
        found_files = []
        processed_files = 0

        # Progress throttling: update every N files
        progress_interval = 5000
        progress_counter = 0

        start_time = time.time()
        for current, dirs, files in os.walk(root, onerror=self._raise_walk_error):
            rel_dir = os.path.relpath(current, root)
            rel_dir = "" if rel_dir == "." else Path(rel_dir).as_posix()

            # Files below a subdirectory are one level deeper than the subdirectory itself
            if self.max_depth >= 0:
                child_depth = relative_depth(rel_dir) + 1 if rel_dir else 0
                if child_depth >= self.max_depth:
                    dirs[:] = []
            dirs.sort()

            for filename in sorted(files):
                relative_path = f"{rel_dir}/{filename}" if rel_dir else filename
                file_info = self._process_file(os.path.join(current, filename), relative_path)
                if file_info:
                    found_files.append(file_info)
                processed_files += 1
                progress_counter += 1

                if progress_callback and progress_counter >= progress_interval:
                    progress_callback("scanning", processed_files, None)
                    progress_counter = 0

        if progress_callback and progress_counter > 0:
            progress_callback("scanning", processed_files, None)

        found_files.sort(key=lambda f: f.relative_path)
        logger.debug(f"Total scan time: {time.time() - start_time:.2f} seconds")
        logger.debug(f"Scan completed. Found {len(found_files)} matching files.")
        return found_files

    @staticmethod
    def _raise_walk_error(error: OSError) -> None:
        raise error

    def _process_file(self, path: str, relative_path: str) -> Optional[SourceFile]:
        """
        Returns a SourceFile if the entry passes all filters, else None.
        """
        if os.path.islink(path):
            logger.debug(f"Skipping symbolic link: {path}")
            return None

        if self.max_depth >= 0 and relative_depth(relative_path) > self.max_depth:
            return None

        if not self._extension_passes(path):
            logger.debug(f"Skipping {path} (extension not allowed)")
            return None

        st = os.stat(path)
        if not os.path.isfile(path):
            logger.debug(f"Skipping non-regular file: {path}")
            return None

        logger.debug(f"Accepted file: {relative_path} ({st.st_size} bytes)")
        return SourceFile(
            path=path,
            size=st.st_size,
            relative_path=relative_path,
            mtime=ConvertUtils.from_timestamp(st.st_mtime),
        )

    def _extension_passes(self, path: str) -> bool:
        if not self.extensions:
            return True
        return os.path.splitext(path)[1].lower() in self.extensions
