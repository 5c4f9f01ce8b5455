"""
Configuration constants for the renamer.
"""

# --- Fragment Keys (seeded from file metadata) ---
FRAGMENT_FILENAME = 'filename'          # stem, e.g. "report"
FRAGMENT_EXTENSION = 'extension'        # suffix without the dot, e.g. "txt"
FRAGMENT_BASENAME = 'basename'          # full name, e.g. "report.txt"
FRAGMENT_PATH = 'path'
FRAGMENT_ABSOLUTE_PATH = 'absolute_path'
FRAGMENT_ACCESSED = 'accessed'
FRAGMENT_CREATED = 'created'
FRAGMENT_MODIFIED = 'modified'
FRAGMENT_FILESIZE = 'filesize'

# --- Fragment Keys (seeded from image metadata) ---
FRAGMENT_EXIF_DATETIME = 'exif_datetime'
FRAGMENT_CAMERA = 'camera'
FRAGMENT_LENS = 'lens'
FRAGMENT_WIDTH = 'width'
FRAGMENT_HEIGHT = 'height'

# Timestamps have second precision. Filesystem times are UTC and carry a
# trailing "Z", so the value doesn't depend on TZ. EXIF times have no zone
# (camera clock) and are written as-is without a suffix.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
UTC_SUFFIX = "Z"

# --- Media Metadata ---
IMAGE_EXTS = {'.jpg', '.jpeg', '.jpe', '.png', '.gif', '.tif', '.tiff',
              '.cr2', '.cr3', '.nef', '.arw', '.orf', '.rw2', '.dng'}

# Pillow can't open most RAW containers; only ask it for dimensions on these
PIL_SIZE_EXTS = {'.jpg', '.jpeg', '.jpe', '.png', '.gif', '.tif', '.tiff'}

DATE_TAGS = [
    'EXIF DateTimeOriginal',
    'EXIF DateTimeDigitized',
    'Image DateTime',
]

# --- Scripts ---
SCRIPT_DELIMITER = ","
SCRIPT_COMMENT_PREFIX = "#"
SCRIPT_PAIR_SEPARATOR = "="

ENV_FILE = "JRENAMER_FILE"
ENV_FRAGMENTS = "JRENAMER_FRAGMENTS"
ENV_FRAGMENT_PREFIX = "JRENAMER_FRAGMENT_"

# --- Reporting ---
REPORT_HEADERS = ["Source Path", "Status", "Destination Path", "Error"]
