import logging
import os
from pathlib import Path

from ..exceptions import RenameError


def plan_destination(source: Path, new_name: str) -> Path:
    """
    Resolves a rendered name to a destination path. Relative names land next
    to the source file; absolute names are used as given.
    """
    if not new_name or not new_name.strip():
        raise RenameError(f"Rendered name for {source} is empty")
    if "\0" in new_name:
        raise RenameError(f"Rendered name for {source} contains a NUL byte")
    return source.parent / new_name


def same_path(a: Path, b: Path) -> bool:
    return os.path.abspath(a) == os.path.abspath(b)


class FileRenamer:
    """
    Performs renames for one run and remembers what the run has done so far.

    Dry-run mode never touches the disk, so it keeps the same bookkeeping as
    real mode: names claimed by earlier renames count as taken, and sources
    already renamed away count as free. Both modes therefore accept and
    refuse exactly the same renames.
    """

    def __init__(self):
        self.reset()

    def reset(self):
        self.claimed = set()
        self.vacated = set()

    def rename(self, src: Path, dest: Path, dry_run: bool = False) -> Path:
        """
        Renames `src` to `dest`. Never overwrites an existing file.
        In dry-run mode only logs what would happen.
        """
        if self._is_taken(dest):
            raise RenameError(f"Cannot rename {src} -> {dest}: destination already exists")

        if dry_run:
            logging.info(f"[DRY RUN] Rename {src} -> {dest}")
        else:
            try:
                # Path.rename is atomic within a filesystem; cross-device moves fail
                src.rename(dest)
            except (OSError, ValueError) as e:
                raise RenameError(f"Failed to rename {src} -> {dest}: {e}") from e
            logging.info(f"Renamed {src} -> {dest}")

        self.claimed.add(os.path.abspath(dest))
        self.vacated.add(os.path.abspath(src))
        self.vacated.discard(os.path.abspath(dest))
        return dest

    def _is_taken(self, dest: Path) -> bool:
        key = os.path.abspath(dest)
        if key in self.claimed:
            return True
        if key in self.vacated:
            return False
        return dest.exists() or dest.is_symlink()
