from datetime import datetime, timezone
from typing import Dict, Iterable, Iterator, Optional, Tuple

from .. import config
from ..models import FileMetadata, MediaInfo


class FragmentStore:
    """
    Ordered mapping of fragment keys to string values for one file.

    Writes always overwrite (last writer wins). An overwritten key keeps its
    original position, so display order reflects when a key first appeared.
    """

    def __init__(self):
        self._fragments: Dict[str, str] = {}

    def set(self, key: str, value) -> None:
        if not key:
            raise ValueError("Fragment key must be a non-empty string")
        self._fragments[key] = str(value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._fragments.get(key, default)

    def update(self, pairs: Iterable[Tuple[str, str]]) -> None:
        for key, value in pairs:
            self.set(key, value)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._fragments)

    def __contains__(self, key) -> bool:
        return key in self._fragments

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[str]:
        return iter(self._fragments)

    # --- Seeding ---

    def seed_from_metadata(self, meta: FileMetadata) -> None:
        """
        Writes one fragment per metadata attribute. Attributes that are None
        are omitted rather than written as empty strings.
        """
        self.set(config.FRAGMENT_FILENAME, meta.stem)
        self.set(config.FRAGMENT_BASENAME, meta.filename)
        self.set(config.FRAGMENT_PATH, meta.path)
        self.set(config.FRAGMENT_FILESIZE, meta.filesize)

        self._set_optional(config.FRAGMENT_EXTENSION, meta.extension)
        self._set_optional(config.FRAGMENT_ABSOLUTE_PATH, meta.absolute_path)
        self._set_optional(config.FRAGMENT_ACCESSED, meta.accessed)
        self._set_optional(config.FRAGMENT_CREATED, meta.created)
        self._set_optional(config.FRAGMENT_MODIFIED, meta.modified)

    def seed_from_media(self, media: MediaInfo) -> None:
        self._set_optional(config.FRAGMENT_EXIF_DATETIME, media.capture_datetime)
        self._set_optional(config.FRAGMENT_CAMERA, media.camera_model)
        self._set_optional(config.FRAGMENT_LENS, media.lens_model)
        self._set_optional(config.FRAGMENT_WIDTH, media.width)
        self._set_optional(config.FRAGMENT_HEIGHT, media.height)

    def _set_optional(self, key: str, value) -> None:
        if value is None:
            return
        if isinstance(value, datetime):
            value = format_timestamp(value)
        self.set(key, value)

    # --- Display ---

    def format_table(self) -> str:
        if not self._fragments:
            return "  (none)"
        width = max(len(k) for k in self._fragments)
        return "\n".join(f"  {k.ljust(width)} : {v}" for k, v in self._fragments.items())

    def __str__(self) -> str:
        return self.format_table()

    def __repr__(self) -> str:
        return f"FragmentStore({self._fragments!r})"


def format_timestamp(dt: datetime) -> str:
    if dt.tzinfo is None:
        return dt.strftime(config.TIMESTAMP_FORMAT)
    return dt.astimezone(timezone.utc).strftime(config.TIMESTAMP_FORMAT) + config.UTC_SUFFIX
