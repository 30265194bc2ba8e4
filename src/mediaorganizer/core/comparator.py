"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparator.py
Content equality engine: the single definition of "identical" for the whole organizer.
Used both for in-run duplicate resolution and for probing the destination tree.

Cost-ascending tiers:
  1. Size     : different sizes are never equal (no I/O beyond stat)
  2. Header   : first HEADER_SIZE bytes (whole file when smaller)
  3. Stream   : remainder compared in CHUNK_SIZE blocks until both hit EOF together
"""

import logging
import os
from typing import BinaryIO, Optional

from mediaorganizer.core.hasher import HEADER_SIZE, Opener, open_binary

logger = logging.getLogger(__name__)

CHUNK_SIZE = 32 * 1024


class ContentComparatorImpl:
    """
    Byte-for-byte file comparison. Never reports a false positive.
    Stat and read errors propagate; end-of-file is expected.
    """

    def __init__(
        self,
        header_size: int = HEADER_SIZE,
        chunk_size: int = CHUNK_SIZE,
        opener: Opener = open_binary
    ):
        self.header_size = header_size
        self.chunk_size = chunk_size
        self.opener = opener

    def are_identical(
        self,
        path1: str,
        path2: str,
        size1: Optional[int] = None,
        size2: Optional[int] = None
    ) -> bool:
        """
        Args:
            path1, path2: Files to compare
            size1, size2: Sizes already known to the caller (stat'd otherwise)
        Raises:
            OSError: if either file cannot be stat'd, opened or read
        """
        if size1 is None:
            size1 = os.stat(path1).st_size
        if size2 is None:
            size2 = os.stat(path2).st_size

        if size1 != size2:
            return False

        limit = min(self.header_size, size1)
        with self.opener(path1) as f1, self.opener(path2) as f2:
            if f1.read(limit) != f2.read(limit):
                return False

            if size1 <= self.header_size:
                return True

            return self._compare_remainder(f1, f2)

    def _compare_remainder(self, f1: BinaryIO, f2: BinaryIO) -> bool:
        while True:
            chunk1 = f1.read(self.chunk_size)
            chunk2 = f2.read(self.chunk_size)
            if chunk1 != chunk2:
                # Covers both differing bytes and a length mismatch (one side hit EOF)
                return False
            if not chunk1:
                return True
