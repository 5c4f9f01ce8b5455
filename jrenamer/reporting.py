import csv
import logging
from pathlib import Path
from typing import Iterable

from . import config
from .models import SessionResult


class ReportGenerator:
    def write(self, results: Iterable[SessionResult], output_csv: Path) -> int:
        """
        Writes one row per processed file. Returns the number of rows written.
        """
        output_csv = Path(output_csv)
        output_csv.parent.mkdir(parents=True, exist_ok=True)

        count = 0
        with output_csv.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(config.REPORT_HEADERS)
            for res in results:
                writer.writerow([
                    str(res.source),
                    res.status,
                    str(res.destination) if res.destination else "",
                    res.error or "",
                ])
                count += 1

        logging.info(f"Report written: {output_csv} ({count} files)")
        return count
