"""
Shared fixtures for organizer tests.
Creates isolated temporary directories with controlled media files.
"""
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import pytest

from mediaorganizer.core.models import SourceFile, TimestampEvidence

UTC = timezone.utc


@pytest.fixture
def make_file(tmp_path) -> Callable[..., Path]:
    """Writes a file below tmp_path (parents created) and returns its path."""
    def _make(relative: str, content: bytes = b"", mtime: Optional[float] = None) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path
    return _make


def source_file(path, created_at: Optional[datetime] = None, source: str = "filename") -> SourceFile:
    """SourceFile for an existing path with a single timestamp candidate."""
    path = str(path)
    evidence = TimestampEvidence(**{source: created_at}) if created_at else TimestampEvidence()
    return SourceFile(path=path, size=os.path.getsize(path), evidence=evidence)


@pytest.fixture
def media_tree(make_file):
    """
    Source tree for end-to-end scenarios:
    - IMG_20250102_030405.jpg and copy/IMG_20250102_030405.jpg: identical content
    - 2019-07-08 09.10.11.png: unique, dated by filename
    - notes.txt: not media (ignored)
    - clip.mp4: garbage container, falls back to mtime
    """
    files = {
        "img": make_file("src/IMG_20250102_030405.jpg", b"same photo bytes"),
        "img_copy": make_file("src/copy/IMG_20250102_030405.jpg", b"same photo bytes"),
        "png": make_file("src/2019-07-08 09.10.11.png", b"unique png bytes"),
        "txt": make_file("src/notes.txt", b"not media"),
        "clip": make_file("src/clip.mp4", b"not really a video", mtime=datetime(2021, 5, 6, 12, tzinfo=UTC).timestamp()),
    }
    return files
