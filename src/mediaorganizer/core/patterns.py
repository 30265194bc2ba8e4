"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/patterns.py
Derives capture timestamps from camera/phone generated filenames.
"""

import re
from datetime import datetime, timedelta, tzinfo
from typing import List, Optional, Tuple

from mediaorganizer.utils.convert_utils import ConvertUtils

# Pre-compiled regex patterns, tried in order. First match wins.
_PATTERN_IMG_VID = re.compile(r'^(?:IMG|VID)_(\d{4})(\d{2})(\d{2})_(\d{2})(\d{2})(\d{2})', re.IGNORECASE)
_PATTERN_PXL = re.compile(r'^PXL_(\d{4})(\d{2})(\d{2})_(\d{2})(\d{2})(\d{2})\d{3,}', re.IGNORECASE)
_PATTERN_DASH_DOTS = re.compile(r'^(\d{4})-(\d{2})-(\d{2})[ _](\d{2})\.(\d{2})\.(\d{2})')
_PATTERN_WHATSAPP = re.compile(r'^IMG-(\d{4})(\d{2})(\d{2})-WA\d+', re.IGNORECASE)
_PATTERN_SCREENSHOT = re.compile(r'^Screenshot_(\d{4})-(\d{2})-(\d{2})-(\d{2})-(\d{2})-(\d{2})', re.IGNORECASE)

FilenamePattern = Tuple[str, "re.Pattern[str]"]

DEFAULT_PATTERNS: List[FilenamePattern] = [
    ("img_vid", _PATTERN_IMG_VID),
    ("pixel", _PATTERN_PXL),
    ("dash_dots", _PATTERN_DASH_DOTS),
    ("whatsapp", _PATTERN_WHATSAPP),  # date only
    ("screenshot", _PATTERN_SCREENSHOT),
]


class FilenamePatternMatcher:
    """
    Matches a base filename against an ordered list of patterns.

    Every pattern captures year, month, day and optionally hour, minute, second.
    Sub-second digits (Pixel) are not captured, so they are truncated.
    Filenames carry no UTC offset; the caller supplies the zone
    (None means the process local zone).

    Examples:
        "IMG_20250102_030405.jpg"          → 2025-01-02 03:04:05
        "PXL_20250102_030405123.jpg"       → 2025-01-02 03:04:05
        "2025-01-02 03.04.05.jpg"          → 2025-01-02 03:04:05
        "IMG-20250102-WA0001.jpg"          → 2025-01-02 00:00:00
        "Screenshot_2025-01-02-03-04-05"   → 2025-01-02 03:04:05
    """

    def __init__(self, patterns: Optional[List[FilenamePattern]] = None):
        self.patterns = patterns if patterns is not None else DEFAULT_PATTERNS

    def match(self, filename: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
        if not filename:
            return None

        for _, pattern in self.patterns:
            m = pattern.match(filename)
            if m is None:
                continue
            # The first match decides, even when its digits overflow the calendar.
            return self._build(m.groups(), tz)
        return None

    @staticmethod
    def _build(groups: Tuple[str, ...], tz: Optional[tzinfo]) -> Optional[datetime]:
        parts = [int(g) for g in groups]
        parts += [0] * (6 - len(parts))
        year, month, day, hour, minute, second = parts[:6]
        # Out-of-range fields roll over: month 13 is January of the next year,
        # February 30 is March 1 or 2.
        year_offset, month_index = divmod(month - 1, 12)
        try:
            naive = datetime(year + year_offset, month_index + 1, 1) + timedelta(
                days=day - 1, hours=hour, minutes=minute, seconds=second)
        except (ValueError, OverflowError):
            return None
        return ConvertUtils.localize(naive, tz)


def match_filename(filename: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Module-level shortcut using the default pattern list."""
    return FilenamePatternMatcher().match(filename, tz)
