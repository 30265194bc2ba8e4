"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

config.py
TOML configuration file support.

Lookup order: explicit path (--config) → $MEDIAORGANIZER_CONFIG → ./mediaorganizer.toml.
A missing file means defaults; a malformed one is an error.

Example:
    [scan]
    max_depth = -1
    photo_extensions = [".jpg", ".heic"]
    video_extensions = [".mp4", ".mov"]

    [organize]
    timezone = "Europe/Amsterdam"

    [copy]
    overwrite = false
"""
import logging
import os
import re
from dataclasses import dataclass, field
from datetime import timedelta, timezone, tzinfo
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tomli as tomllib

from mediaorganizer.core.models import DEFAULT_PHOTO_EXTENSIONS, DEFAULT_VIDEO_EXTENSIONS, normalize_extensions

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MEDIAORGANIZER_CONFIG"
DEFAULT_CONFIG_NAME = "mediaorganizer.toml"

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


@dataclass
class OrganizerConfig:
    """Values read from the config file (CLI flags override them)."""
    max_depth: int = -1
    photo_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_PHOTO_EXTENSIONS))
    video_extensions: List[str] = field(default_factory=lambda: list(DEFAULT_VIDEO_EXTENSIONS))
    timezone: Optional[str] = None
    overwrite: bool = False
    source: Optional[str] = None  # path the values came from, None for defaults


def find_config_path(explicit: Optional[str] = None) -> Optional[str]:
    """
    Returns the config file to load, or None when no file applies.
    An explicitly requested file must exist.
    """
    if explicit:
        if not os.path.isfile(explicit):
            raise ValueError(f"Config file not found: {explicit}")
        return explicit

    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        if not os.path.isfile(from_env):
            raise ValueError(f"Config file from ${CONFIG_ENV_VAR} not found: {from_env}")
        return from_env

    if os.path.isfile(DEFAULT_CONFIG_NAME):
        return DEFAULT_CONFIG_NAME
    return None


def load_config(path: Optional[str] = None) -> OrganizerConfig:
    """
    Loads and validates the configuration.
    Raises:
        ValueError: the file cannot be parsed or holds values of the wrong type
    """
    config_path = find_config_path(path)
    if config_path is None:
        return OrganizerConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from e

    logger.info(f"Loaded config from {config_path}")
    return _from_dict(data, config_path)


def _from_dict(data: Dict[str, Any], config_path: str) -> OrganizerConfig:
    scan = _section(data, "scan", config_path)
    organize = _section(data, "organize", config_path)
    copy = _section(data, "copy", config_path)

    config = OrganizerConfig(source=config_path)

    if "max_depth" in scan:
        max_depth = scan["max_depth"]
        if not isinstance(max_depth, int) or isinstance(max_depth, bool) or max_depth < -1:
            raise ValueError(f"{config_path}: scan.max_depth must be an integer >= -1")
        config.max_depth = max_depth

    for key in ("photo_extensions", "video_extensions"):
        if key in scan:
            value = scan[key]
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"{config_path}: scan.{key} must be a list of strings")
            setattr(config, key, normalize_extensions(value))

    if "timezone" in organize:
        value = organize["timezone"]
        if not isinstance(value, str):
            raise ValueError(f"{config_path}: organize.timezone must be a string")
        parse_timezone(value)
        config.timezone = value

    if "overwrite" in copy:
        if not isinstance(copy["overwrite"], bool):
            raise ValueError(f"{config_path}: copy.overwrite must be true or false")
        config.overwrite = copy["overwrite"]

    return config


def _section(data: Dict[str, Any], name: str, config_path: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"{config_path}: [{name}] must be a table")
    return section


def parse_timezone(value: Optional[str]) -> Optional[tzinfo]:
    """
    Parses a zone given on the command line or in the config file.

    Accepts "local" (or empty, meaning the process local zone → None), "UTC"/"Z",
    fixed offsets like "+02:00" and IANA names like "Europe/Amsterdam".
    Raises:
        ValueError: unknown zone
    """
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() == "local":
        return None
    if value.upper() in ("UTC", "Z"):
        return timezone.utc

    match = _OFFSET_RE.match(value)
    if match:
        sign, hours, minutes = match.groups()
        delta = timedelta(hours=int(hours), minutes=int(minutes))
        return timezone(-delta if sign == "-" else delta)

    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown time zone: {value}") from e
