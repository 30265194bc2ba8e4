"""
Unit tests for ContentComparatorImpl (the content equality engine).
Verifies exactness, the size short-circuit and the header/stream tiers.
"""
import io

import pytest

from mediaorganizer.core.comparator import ContentComparatorImpl


def failing_opener(path):
    raise AssertionError(f"{path} must not be opened")


class CountingOpener:
    """Opener that records every read so tests can check which tier ran."""

    def __init__(self):
        self.reads = []

    def __call__(self, path):
        with open(path, "rb") as f:
            return RecordingStream(f.read(), path, self.reads)


class RecordingStream(io.BytesIO):
    def __init__(self, data, path, reads):
        super().__init__(data)
        self.path = path
        self.reads = reads

    def read(self, size=-1):
        data = super().read(size)
        self.reads.append((self.path, size, len(data)))
        return data


class TestContentComparator:
    """Byte-for-byte comparison through all tiers."""

    def test_identical_small_files(self, make_file):
        a = make_file("a.jpg", b"hello world")
        b = make_file("b.jpg", b"hello world")
        assert ContentComparatorImpl().are_identical(str(a), str(b))

    def test_different_small_files(self, make_file):
        a = make_file("a.jpg", b"hello world")
        b = make_file("b.jpg", b"hello World")
        assert not ContentComparatorImpl().are_identical(str(a), str(b))

    def test_empty_files_are_identical(self, make_file):
        a = make_file("a.jpg")
        b = make_file("b.jpg")
        assert ContentComparatorImpl().are_identical(str(a), str(b))

    def test_size_short_circuit_never_reads(self, make_file):
        """Files of different sizes are never opened."""
        a = make_file("a.jpg", b"x" * 10)
        b = make_file("b.jpg", b"x" * 11)
        comparator = ContentComparatorImpl(opener=failing_opener)

        assert not comparator.are_identical(str(a), str(b))
        assert not comparator.are_identical(str(a), str(b), 10, 11)

    def test_difference_after_header(self, make_file):
        """Same header window, different tail: only the streaming tier can tell."""
        header = b"H" * 64
        a = make_file("a.mov", header + b"A" * 100)
        b = make_file("b.mov", header + b"A" * 99 + b"B")
        comparator = ContentComparatorImpl(header_size=64, chunk_size=16)

        assert not comparator.are_identical(str(a), str(b))

    def test_large_identical_files_stream_to_eof(self, make_file):
        content = bytes(range(256)) * 1024  # 256 KiB, larger than the 64 KiB window
        a = make_file("a.mp4", content)
        b = make_file("b.mp4", content)
        assert ContentComparatorImpl().are_identical(str(a), str(b))

    def test_header_mismatch_skips_streaming(self, make_file):
        a = make_file("a.mov", b"A" + b"x" * 200)
        b = make_file("b.mov", b"B" + b"x" * 200)
        opener = CountingOpener()
        comparator = ContentComparatorImpl(header_size=64, chunk_size=16, opener=opener)

        assert not comparator.are_identical(str(a), str(b))
        assert [size for _, size, _ in opener.reads] == [64, 64]

    def test_small_file_compared_by_header_only(self, make_file):
        a = make_file("a.jpg", b"tiny")
        b = make_file("b.jpg", b"tiny")
        opener = CountingOpener()
        comparator = ContentComparatorImpl(header_size=64, opener=opener)

        assert comparator.are_identical(str(a), str(b))
        assert [size for _, size, _ in opener.reads] == [4, 4]

    def test_transitivity(self, make_file):
        """A≡B and B≡C implies A≡C."""
        content = b"z" * 70000
        a, b, c = (make_file(f"{n}.jpg", content) for n in "abc")
        comparator = ContentComparatorImpl()

        assert comparator.are_identical(str(a), str(b))
        assert comparator.are_identical(str(b), str(c))
        assert comparator.are_identical(str(a), str(c))

    def test_symmetry(self, make_file):
        a = make_file("a.jpg", b"one")
        b = make_file("b.jpg", b"two")
        comparator = ContentComparatorImpl()
        assert comparator.are_identical(str(a), str(b)) == comparator.are_identical(str(b), str(a))

    def test_missing_file_raises(self, make_file, tmp_path):
        a = make_file("a.jpg", b"data")
        with pytest.raises(FileNotFoundError):
            ContentComparatorImpl().are_identical(str(a), str(tmp_path / "missing.jpg"))

    def test_read_error_propagates(self, make_file):
        a = make_file("a.jpg", b"data")
        b = make_file("b.jpg", b"data")

        class BrokenStream(io.BytesIO):
            def read(self, size=-1):
                raise OSError("I/O error")

        comparator = ContentComparatorImpl(opener=lambda path: BrokenStream())
        with pytest.raises(OSError, match="I/O error"):
            comparator.are_identical(str(a), str(b))
