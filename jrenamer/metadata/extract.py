import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from ..exceptions import MetadataUnavailableError, NotAFileError
from ..models import FileMetadata


def extract_metadata(path: Union[str, Path]) -> FileMetadata:
    """
    Builds a FileMetadata snapshot for `path`.

    Fails outright if the path has no filename or can't be stat'ed. The
    absolute path and the three timestamps are looked up independently and
    simply left as None when their own lookup fails.
    """
    path = Path(path)

    filename = path.name
    if filename in ("", ".", ".."):
        raise NotAFileError(f"Path \"{path}\" has no filename")

    try:
        st = path.stat()
    except OSError as e:
        raise MetadataUnavailableError(
            f"File \"{filename}\" probably doesn't exist: {e}"
        ) from e

    # Path.suffix ignores leading dots, so ".bashrc" has no extension
    suffix = Path(filename).suffix
    extension = suffix[1:] if suffix else None

    return FileMetadata(
        filename=filename,
        path=path,
        filesize=st.st_size,
        extension=extension,
        absolute_path=_resolve(path),
        accessed=_timestamp(getattr(st, "st_atime", None)),
        # st_birthtime only exists where the filesystem reports creation time
        created=_timestamp(getattr(st, "st_birthtime", None)),
        modified=_timestamp(getattr(st, "st_mtime", None)),
    )


def _resolve(path: Path) -> Optional[Path]:
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        # Broken symlinks, permission problems, symlink loops
        logging.debug(f"Could not resolve {path}: {e}")
        return None


def _timestamp(ts: Optional[float]) -> Optional[datetime]:
    if ts is None:
        return None
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
