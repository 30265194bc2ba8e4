"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
from datetime import datetime, timedelta, tzinfo
from typing import Optional


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to human-readable string (e.g., 1.5KB, 3.2MB).
        """
        if size_bytes < 0:
            return "0B"

        units = ["B", "KB", "MB", "GB", "TB", "PB"]
        for unit in units:
            if size_bytes < 1024:
                return f"{size_bytes:.2f}{unit}"
            size_bytes /= 1024
        return f"{size_bytes:.2f}EB"

    @staticmethod
    def localize(naive: datetime, tz: Optional[tzinfo] = None) -> datetime:
        """
        Attach a zone to a wall-clock datetime.
        tz=None uses the process local zone, including its DST rules for that date.
        Already-aware values are returned unchanged.
        """
        if naive.tzinfo is not None:
            return naive
        if tz is None:
            return naive.astimezone()
        return naive.replace(tzinfo=tz)

    @staticmethod
    def from_timestamp(seconds: float) -> Optional[datetime]:
        """
        Convert a POSIX timestamp (e.g. st_mtime) to a local-zone aware datetime.
        Zero means "unset" and yields None.
        """
        if not seconds:
            return None
        return datetime.fromtimestamp(seconds).astimezone()

    @staticmethod
    def to_rfc3339(value: Optional[datetime]) -> str:
        """
        Format an aware datetime as RFC 3339 with whole seconds ('Z' for UTC).
        Returns an empty string for None.
        """
        if value is None:
            return ""
        text = value.isoformat(timespec="seconds")
        if value.utcoffset() == timedelta(0) and text.endswith("+00:00"):
            text = text[:-6] + "Z"
        return text
