import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import exifread
from PIL import Image, UnidentifiedImageError

from .. import config
from ..models import MediaInfo


class MediaExtractor:
    """
    Pulls image attributes that are useful in filenames.

    Strategies:
      - EXIF date/camera/lens: 'exifread' (fast, Python-native, handles RAW).
      - Pixel dimensions: Pillow, only for formats it can actually open.

    Failures here never abort a rename; the affected fields just stay None.
    """

    def extract(self, path: Path) -> MediaInfo:
        ext = path.suffix.lower()
        if ext not in config.IMAGE_EXTS:
            return MediaInfo()

        dt, camera, lens = self.get_exif_metadata(path)

        width = height = None
        if ext in config.PIL_SIZE_EXTS:
            width, height = self.get_image_size(path)

        return MediaInfo(
            capture_datetime=dt,
            camera_model=camera,
            lens_model=lens,
            width=width,
            height=height,
        )

    def get_exif_metadata(self, path: Path) -> Tuple[Optional[datetime], Optional[str], Optional[str]]:
        """
        Returns:
            (capture_datetime, camera_model, lens_model)
        """
        try:
            with path.open('rb') as f:
                # details=False skips makernotes and thumbnails
                tags = exifread.process_file(f, details=False)
        except Exception as e:
            # exifread raises all sorts of things on truncated or odd files
            logging.warning(f"ExifRead failed for {path}: {e}")
            return None, None, None

        dt = self._parse_exif_date(tags)

        camera = None
        if 'Image Model' in tags:
            camera = str(tags['Image Model']).strip() or None

        lens = None
        if 'EXIF LensModel' in tags:
            lens = str(tags['EXIF LensModel']).strip() or None

        return dt, camera, lens

    def get_image_size(self, path: Path) -> Tuple[Optional[int], Optional[int]]:
        try:
            with Image.open(path) as im:
                return im.size
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
            logging.debug(f"Pillow could not read size of {path}: {e}")
            return None, None

    def _parse_exif_date(self, tags) -> Optional[datetime]:
        for tag in config.DATE_TAGS:
            if tag in tags:
                try:
                    # EXIF format is "YYYY:MM:DD HH:MM:SS"
                    dt_str = str(tags[tag]).strip().replace(':', '-', 2)
                    return datetime.strptime(dt_str, "%Y-%m-%d %H:%M:%S")
                except ValueError:
                    continue
        return None
