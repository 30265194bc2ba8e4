"""
Unit tests for TimestampAttributorImpl.
Covers the metadata > filename > mtime priority, best-effort metadata and fatal stat errors.
"""
import os
from datetime import datetime, timezone

import pytest

from mediaorganizer.core.models import TimestampEvidence, TimestampSource
from mediaorganizer.core.timestamps import TimestampAttributorImpl

UTC = timezone.utc


class FakeExtractor:
    """Metadata capability returning a fixed value (or raising)."""

    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error
        self.calls = []

    def extract(self, path, stream):
        self.calls.append(path)
        assert stream.read(1) is not None
        if self.error:
            raise self.error
        return self.value


class TestTimestampAttributor:
    """Priority order and failure semantics."""

    def test_filename_timestamp_without_metadata(self, make_file):
        path = make_file("IMG_20250102_030405.jpg", b"no exif here")
        attributor = TimestampAttributorImpl(metadata_extractor=FakeExtractor(), tz=UTC)

        evidence = attributor.attribute(str(path))

        assert evidence.best == datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert evidence.source == TimestampSource.FILENAME
        assert evidence.metadata is None
        assert evidence.filestat is not None

    def test_metadata_wins_over_filename(self, make_file):
        path = make_file("IMG_20250102_030405.jpg", b"x")
        taken = datetime(2019, 5, 6, 7, 8, 9, tzinfo=UTC)
        attributor = TimestampAttributorImpl(metadata_extractor=FakeExtractor(taken), tz=UTC)

        evidence = attributor.attribute(str(path))

        assert evidence.best == taken
        assert evidence.source == TimestampSource.METADATA
        assert evidence.filename == datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)

    def test_naive_metadata_is_localized(self, make_file):
        path = make_file("photo.jpg", b"x")
        attributor = TimestampAttributorImpl(metadata_extractor=FakeExtractor(datetime(2019, 5, 6)), tz=UTC)

        assert attributor.attribute(str(path)).metadata == datetime(2019, 5, 6, tzinfo=UTC)

    def test_metadata_errors_are_swallowed(self, make_file):
        """A broken container never aborts attribution."""
        path = make_file("IMG_20250102_030405.jpg", b"x")
        extractor = FakeExtractor(error=ValueError("corrupt header"))
        attributor = TimestampAttributorImpl(metadata_extractor=extractor, tz=UTC)

        evidence = attributor.attribute(str(path))

        assert extractor.calls == [str(path)]
        assert evidence.metadata is None
        assert evidence.source == TimestampSource.FILENAME

    def test_mtime_fallback(self, make_file):
        stamp = datetime(2021, 5, 6, 12, 0, tzinfo=UTC)
        path = make_file("holiday.jpg", b"x", mtime=stamp.timestamp())
        attributor = TimestampAttributorImpl(metadata_extractor=FakeExtractor(), tz=UTC)

        evidence = attributor.attribute(str(path))

        assert evidence.source == TimestampSource.MTIME
        assert evidence.best == stamp

    def test_supplied_mtime_is_used(self, make_file):
        path = make_file("holiday.jpg", b"x")
        known = datetime(2000, 1, 1, tzinfo=UTC)
        attributor = TimestampAttributorImpl(metadata_extractor=FakeExtractor(), tz=UTC)

        assert attributor.attribute(str(path), mtime=known).filestat == known

    def test_zero_mtime_means_unknown(self, make_file):
        path = make_file("holiday.jpg", b"x", mtime=0)
        attributor = TimestampAttributorImpl(metadata_extractor=FakeExtractor(), tz=UTC)

        evidence = attributor.attribute(str(path))

        assert evidence == TimestampEvidence()
        assert evidence.best is None
        assert evidence.source == TimestampSource.UNKNOWN

    def test_missing_file_raises(self, tmp_path):
        attributor = TimestampAttributorImpl(metadata_extractor=FakeExtractor(), tz=UTC)
        with pytest.raises(FileNotFoundError):
            attributor.attribute(str(tmp_path / "missing.jpg"))

    def test_directory_raises(self, tmp_path):
        attributor = TimestampAttributorImpl(metadata_extractor=FakeExtractor(), tz=UTC)
        with pytest.raises(IsADirectoryError):
            attributor.attribute(str(tmp_path))

    def test_default_extractor_handles_non_images(self, make_file):
        """The real EXIF extractor treats undecodable bytes as "no metadata"."""
        path = make_file("IMG_20250102_030405.jpg", b"definitely not a jpeg")
        evidence = TimestampAttributorImpl(tz=UTC).attribute(str(path))
        assert evidence.source == TimestampSource.FILENAME
