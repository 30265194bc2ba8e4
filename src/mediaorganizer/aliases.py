from mediaorganizer.core.models import DEFAULT_PHOTO_EXTENSIONS, DEFAULT_VIDEO_EXTENSIONS

MAX_DEPTH_HELP_TEXT = (
    "Maximum recursion depth:\n"
    "  -1 : unlimited (default)\n"
    "   0 : only files directly in the directory\n"
    "   N : files at most N directories deep\n"
)

TIMEZONE_HELP_TEXT = (
    "Zone for timestamps that carry no offset (filenames, most EXIF):\n"
    "  local            : process local zone (default)\n"
    "  UTC              : Coordinated Universal Time\n"
    "  +02:00           : fixed offset\n"
    "  Europe/Amsterdam : IANA zone name\n"
)

EXTENSIONS_TEXT = (
    f"Photos: {' '.join(DEFAULT_PHOTO_EXTENSIONS)}\n"
    f"Videos: {' '.join(DEFAULT_VIDEO_EXTENSIONS)}\n"
)

ACTION_LABELS = {
    "copy": "{src} -> {dst}",
    "copy_renamed": "{src} -> {dst}",
    "copied": "copied {src} -> {dst}",
    "copied_renamed": "copied {src} -> {dst}",
    "skipped_identical": "skipped {src} -> {dst} (identical)",
    "skipped_duplicate_source": "skipped {src} (duplicate of {dup})",
}

EPILOG_TEXT = """
Examples:
  Preview where every photo and video would go (dry run, nothing is written)
  %(prog)s organize ~/Camera ~/Pictures/Library

  Copy for real, printing one line per file
  %(prog)s organize ~/Camera ~/Pictures/Library --execute

  Same as above with JSON output (for scripts)
  %(prog)s organize ~/Camera ~/Pictures/Library -x --json > ~/organize-report.json

  Interpret filename timestamps as UTC
  %(prog)s organize ~/Camera ~/Pictures/Library --timezone UTC

  List media files found in a directory, top level only
  %(prog)s scan ~/Camera --max-depth 0

Layout of the destination:
  <destination>/YYYY/MM/DD/<name>     files with a known creation date
  <destination>/unknown/<name>        files without one
  Name clashes get a numeric suffix: photo.jpg, photo_1.jpg, photo_2.jpg ...

Files are never overwritten, moved or deleted; identical files already present
in the destination are skipped.
"""
