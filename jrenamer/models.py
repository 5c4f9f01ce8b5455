from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

@dataclass(frozen=True)
class FileMetadata:
    """
    Read-only snapshot of a file's intrinsic attributes.
    """
    filename: str                   # base name, e.g. "report.txt"
    path: Path                      # as provided by the caller
    filesize: int
    extension: Optional[str] = None  # without the leading dot

    # Each of these may be missing independently
    absolute_path: Optional[Path] = None
    accessed: Optional[datetime] = None
    created: Optional[datetime] = None
    modified: Optional[datetime] = None

    @property
    def stem(self) -> str:
        if self.extension is None:
            return self.filename
        return self.filename[:-(len(self.extension) + 1)]


@dataclass
class MediaInfo:
    """
    Image attributes read from EXIF / the image header. All optional.
    """
    capture_datetime: Optional[datetime] = None
    camera_model: Optional[str] = None
    lens_model: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class RunConfig:
    """
    Options for one run, built once from the command line.
    """
    scripts: Tuple[Path, ...] = ()
    template: Optional[str] = None
    dry_run: bool = False
    media_fragments: bool = True
    report_path: Optional[Path] = None
    progress: bool = False


@dataclass
class SessionResult:
    source: Path
    status: str                     # renamed/dry-run/unchanged/skipped/failed
    destination: Optional[Path] = None
    error: Optional[str] = None
