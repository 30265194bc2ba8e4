"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/metadata.py
Embedded creation timestamp extractors.

- ExifMetadataExtractor: still images via Pillow (HEIC/HEIF through pillow-heif)
- ContainerMetadataExtractor: video containers via hachoir
- CompositeMetadataExtractor: picks one of the above by file extension

All extractors return None when no usable timestamp exists. Decoder errors may
propagate; the timestamp attributor treats them as "no metadata".
"""

import logging
import os
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import BinaryIO, Iterable, Optional

from PIL import Image, UnidentifiedImageError
from pillow_heif import register_heif_opener
from hachoir.core import config as hachoir_config
from hachoir.metadata import extractMetadata
from hachoir.parser import createParser

from mediaorganizer.core.models import DEFAULT_VIDEO_EXTENSIONS
from mediaorganizer.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

register_heif_opener()
hachoir_config.quiet = True

# EXIF tag ids
_TAG_DATETIME = 0x0132            # IFD0
_TAG_EXIF_IFD = 0x8769
_TAG_DATETIME_ORIGINAL = 0x9003   # Exif IFD
_TAG_DATETIME_DIGITIZED = 0x9004
_TAG_OFFSET_TIME = 0x9010
_TAG_OFFSET_TIME_ORIGINAL = 0x9011
_TAG_OFFSET_TIME_DIGITIZED = 0x9012

_EXIF_FORMAT = "%Y:%m:%d %H:%M:%S"
_OFFSET_RE = re.compile(r'^([+\-])(\d{2}):?(\d{2})$')

# QuickTime stores seconds since 1904-01-01; zero decodes to that epoch.
_CONTAINER_ZERO_YEAR = 1904


def parse_exif_datetime(value, offset=None, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """
    Parse an EXIF "YYYY:MM:DD HH:MM:SS" value.
    Sentinels such as "0000:00:00 00:00:00" or blanks yield None.
    An OffsetTime* value ("+02:00") wins over the fallback zone.
    """
    if value is None:
        return None
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    text = str(value).strip().strip("\x00").strip()
    if not text:
        return None

    try:
        naive = datetime.strptime(text[:19], _EXIF_FORMAT)
    except ValueError:
        return None

    offset_tz = _parse_offset(offset)
    if offset_tz is not None:
        return naive.replace(tzinfo=offset_tz)
    return ConvertUtils.localize(naive, tz)


def _parse_offset(offset) -> Optional[tzinfo]:
    if offset is None:
        return None
    if isinstance(offset, bytes):
        offset = offset.decode("ascii", errors="ignore")
    m = _OFFSET_RE.match(str(offset).strip().strip("\x00"))
    if not m:
        return None
    sign = -1 if m.group(1) == "-" else 1
    delta = timedelta(hours=int(m.group(2)), minutes=int(m.group(3)))
    return timezone(sign * delta)


class ExifMetadataExtractor:
    """
    Reads DateTimeOriginal, then DateTimeDigitized, then DateTime.
    EXIF timestamps usually carry no zone; they are interpreted in `tz` (None = local).
    """

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz

    def extract(self, path: str, stream: BinaryIO) -> Optional[datetime]:
        try:
            with Image.open(stream) as img:
                exif = img.getexif()
        except UnidentifiedImageError:
            logger.debug(f"Not a decodable image: {path}")
            return None

        if not exif:
            return None

        exif_ifd = exif.get_ifd(_TAG_EXIF_IFD)
        candidates = [
            (exif_ifd.get(_TAG_DATETIME_ORIGINAL), exif_ifd.get(_TAG_OFFSET_TIME_ORIGINAL)),
            (exif_ifd.get(_TAG_DATETIME_DIGITIZED), exif_ifd.get(_TAG_OFFSET_TIME_DIGITIZED)),
            (exif.get(_TAG_DATETIME), exif_ifd.get(_TAG_OFFSET_TIME)),
        ]
        for value, offset in candidates:
            parsed = parse_exif_datetime(value, offset, self.tz)
            if parsed is not None:
                return parsed
        return None


class ContainerMetadataExtractor:
    """
    Reads the creation date of video containers (MP4, MOV, MKV, AVI, ...).
    Container dates are stored in UTC.
    """

    def extract(self, path: str, stream: BinaryIO) -> Optional[datetime]:
        parser = createParser(path)
        if not parser:
            return None

        with parser:
            metadata = extractMetadata(parser)
        if not metadata or not metadata.has("creation_date"):
            return None

        created = metadata.get("creation_date")
        if not isinstance(created, datetime):
            return None
        if created.year <= _CONTAINER_ZERO_YEAR:
            return None
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return created


class CompositeMetadataExtractor:
    """
    Dispatches to the container extractor for video extensions and to the
    EXIF extractor for everything else.
    """

    def __init__(
        self,
        tz: Optional[tzinfo] = None,
        video_extensions: Optional[Iterable[str]] = None
    ):
        self.image_extractor = ExifMetadataExtractor(tz)
        self.video_extractor = ContainerMetadataExtractor()
        if video_extensions is None:
            video_extensions = DEFAULT_VIDEO_EXTENSIONS
        self.video_extensions = {e.lower() for e in video_extensions}

    def extract(self, path: str, stream: BinaryIO) -> Optional[datetime]:
        ext = os.path.splitext(path)[1].lower()
        if ext in self.video_extensions:
            return self.video_extractor.extract(path, stream)
        return self.image_extractor.extract(path, stream)
