"""
Unit tests for FilenamePatternMatcher.
Verifies every supported camera/phone naming scheme and the first-match-wins rule.
"""
from datetime import datetime, timedelta, timezone

import pytest

from mediaorganizer.core.patterns import FilenamePatternMatcher, match_filename

UTC = timezone.utc


class TestFilenamePatterns:
    """Each naming scheme produces the expected wall-clock time in the given zone."""

    @pytest.mark.parametrize("filename, expected", [
        ("IMG_20250102_030405.jpg", datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)),
        ("VID_20250102_030405.mp4", datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)),
        ("img_20250102_030405_HDR.jpg", datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)),
        ("PXL_20250102_030405123.jpg", datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)),
        ("2025-01-02 03.04.05.jpg", datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)),
        ("2025-01-02_03.04.05.heic", datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)),
        ("IMG-20250102-WA0001.jpg", datetime(2025, 1, 2, 0, 0, 0, tzinfo=UTC)),
        ("Screenshot_2025-01-02-03-04-05.png", datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)),
    ])
    def test_known_patterns(self, filename, expected):
        assert match_filename(filename, UTC) == expected

    @pytest.mark.parametrize("filename", [
        "holiday.jpg",
        "DSC_0001.JPG",
        "PXL_20250102_030405.jpg",  # sub-second digits are required
        "my IMG_20250102_030405.jpg",  # patterns are anchored at the start
        "",
    ])
    def test_unmatched_names(self, filename):
        assert match_filename(filename, UTC) is None

    def test_uses_supplied_zone(self):
        """Filenames carry no offset: the configured zone is attached as-is."""
        plus_two = timezone(timedelta(hours=2))
        result = match_filename("IMG_20250102_030405.jpg", plus_two)
        assert result.utcoffset() == timedelta(hours=2)
        assert (result.hour, result.minute, result.second) == (3, 4, 5)

    def test_defaults_to_local_zone(self):
        result = match_filename("IMG_20250102_030405.jpg")
        assert result.tzinfo is not None
        assert result.replace(tzinfo=None) == datetime(2025, 1, 2, 3, 4, 5)

    @pytest.mark.parametrize("filename, expected", [
        ("IMG_20251302_030405.jpg", datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)),
        ("Screenshot_2025-02-30-03-04-05.png", datetime(2025, 3, 2, 3, 4, 5, tzinfo=UTC)),
        ("IMG_20250100_250000.jpg", datetime(2025, 1, 1, 1, 0, 0, tzinfo=UTC)),
        ("2024-00-10 00.61.00.jpg", datetime(2023, 12, 10, 1, 1, 0, tzinfo=UTC)),
    ])
    def test_out_of_range_fields_roll_over(self, filename, expected):
        """The first matching pattern decides; overflowing fields carry into the next unit."""
        assert match_filename(filename, UTC) == expected

    def test_year_zero_yields_none(self):
        assert match_filename("IMG_00000102_030405.jpg", UTC) is None

    def test_custom_pattern_list(self):
        import re
        matcher = FilenamePatternMatcher([("dsc", re.compile(r'^DSC(\d{4})(\d{2})(\d{2})'))])
        assert matcher.match("DSC20200304.jpg", UTC) == datetime(2020, 3, 4, tzinfo=UTC)
        assert matcher.match("IMG_20250102_030405.jpg", UTC) is None
