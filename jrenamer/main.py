import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .core import RenamerApp
from .exceptions import RenamerError
from .models import RunConfig
from .scripts.runner import resolve_scripts

def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, optionally, a file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers
    )

    # Silence chatty libraries
    logging.getLogger("exifread").setLevel(logging.ERROR)
    logging.getLogger("PIL").setLevel(logging.WARNING)

def split_scripts(value: str) -> List[str]:
    return [s.strip() for s in value.split(config.SCRIPT_DELIMITER) if s.strip()]

def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(prog="jrenamer", description="Renames files scriptingly")

    p.add_argument("input", nargs="+", type=Path, help="Names of the files to rename")

    p.add_argument("-s", "--script", dest="scripts", type=split_scripts, action="extend",
                   default=[], metavar="SCRIPT[,SCRIPT...]",
                   help="Comma-separated list of scripts to run, in order")
    p.add_argument("-f", "--format", dest="template", default=None, metavar="FORMAT_STRING",
                   help="Use this string instead of prompting for input")
    p.add_argument("-d", "--dry-run", action="store_true",
                   help="Files will be accessed, but no renaming will take place")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    p.add_argument("--no-media", action="store_true",
                   help="Don't read EXIF/image fragments from image files")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("--report", type=Path, default=None,
                   help="Write a CSV of per-file outcomes to this path")

    return p.parse_args(argv)

def user_fstring() -> str:
    try:
        return input("Enter your format string: ").strip()
    except EOFError:
        raise RenamerError("No format string entered (stdin closed)")

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    setup_logging(args.verbose, args.log_file)
    logging.info("=== Renamer Started ===")

    # Scripts are checked once; missing ones are dropped with a warning
    scripts = resolve_scripts(args.scripts)

    run_config = RunConfig(
        scripts=tuple(scripts),
        template=args.template,
        dry_run=args.dry_run,
        media_fragments=not args.no_media,
        report_path=args.report,
        # A progress bar would fight with the interactive prompt
        progress=args.template is not None and len(args.input) > 1,
    )

    app = RenamerApp(run_config, prompt=user_fstring)

    try:
        results = app.run(args.input)
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 130

    return 1 if any(r.status == "failed" for r in results) else 0

if __name__ == "__main__":
    sys.exit(main())
