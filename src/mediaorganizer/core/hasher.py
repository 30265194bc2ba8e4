"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Header-window fingerprinting used as a cheap pre-filter before exact comparison.

This implementation ensures predictable behavior:
- The fingerprint covers only the first HEADER_SIZE bytes (the whole file if smaller)
- A matching fingerprint is never treated as proof of equality
- Read errors propagate to the caller
"""

import hashlib
import logging
from typing import BinaryIO, Callable, Optional

from mediaorganizer.core.interfaces import HashAlgorithm
from mediaorganizer.core.models import SourceFile

logger = logging.getLogger(__name__)

HEADER_SIZE = 64 * 1024

Opener = Callable[[str], BinaryIO]


def open_binary(path: str) -> BinaryIO:
    return open(path, "rb")


class Sha256AlgorithmImpl(HashAlgorithm):
    """SHA-256 implementation of the HashAlgorithm interface."""

    @staticmethod
    def hash(data: bytes) -> bytes:
        return hashlib.sha256(data).digest()


class HasherImpl:
    """
    Computes header fingerprints of files.
    The byte source is injectable (defaults to open(path, "rb")).
    """

    def __init__(
        self,
        algorithm: Optional[HashAlgorithm] = None,
        header_size: int = HEADER_SIZE,
        opener: Opener = open_binary
    ):
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.header_size = header_size
        self.opener = opener

    def compute_header_hash(self, file: SourceFile) -> bytes:
        """
        Hash of the first min(header_size, file.size) bytes.

        Raises:
            OSError: if the file cannot be opened or read
        """
        limit = min(self.header_size, file.size)
        with self.opener(file.path) as f:
            data = f.read(limit)
        return self.algorithm.hash(data)
