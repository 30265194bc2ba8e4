"""
Unit tests for HasherImpl with Sha256AlgorithmImpl.
Verifies the header fingerprint covers only the first window of a file.
"""
import hashlib

import pytest

from mediaorganizer.core.hasher import HEADER_SIZE, HasherImpl, Sha256AlgorithmImpl
from mediaorganizer.core.models import SourceFile


def as_source(path):
    return SourceFile(path=str(path), size=path.stat().st_size)


class TestHasherImpl:
    """SHA-256 of the header window."""

    def test_small_file_hashes_whole_content(self, make_file):
        path = make_file("a.jpg", b"small content")
        digest = HasherImpl().compute_header_hash(as_source(path))
        assert digest == hashlib.sha256(b"small content").digest()
        assert len(digest) == 32

    def test_only_header_window_is_hashed(self, make_file):
        """Files differing after the window share a fingerprint (pre-filter only)."""
        header = b"H" * HEADER_SIZE
        a = make_file("a.mp4", header + b"tail one")
        b = make_file("b.mp4", header + b"tail two")
        hasher = HasherImpl()

        assert hasher.compute_header_hash(as_source(a)) == hasher.compute_header_hash(as_source(b))
        assert hasher.compute_header_hash(as_source(a)) == hashlib.sha256(header).digest()

    def test_different_headers_differ(self, make_file):
        a = make_file("a.jpg", b"A" * 1024)
        b = make_file("b.jpg", b"B" * 1024)
        hasher = HasherImpl(Sha256AlgorithmImpl())
        assert hasher.compute_header_hash(as_source(a)) != hasher.compute_header_hash(as_source(b))

    def test_custom_window(self, make_file):
        path = make_file("a.jpg", b"0123456789")
        digest = HasherImpl(header_size=4).compute_header_hash(as_source(path))
        assert digest == hashlib.sha256(b"0123").digest()

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HasherImpl().compute_header_hash(SourceFile(path=str(tmp_path / "gone.jpg"), size=10))
