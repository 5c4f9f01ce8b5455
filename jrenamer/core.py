import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from tqdm import tqdm

from .exceptions import RenamerError
from .fragments.store import FragmentStore
from .metadata.extract import extract_metadata
from .metadata.media import MediaExtractor
from .models import RunConfig, SessionResult
from .renaming.mover import FileRenamer, plan_destination, same_path
from .reporting import ReportGenerator
from .scripts.runner import ScriptRunner
from .template.render import placeholders, render


class SessionState(Enum):
    START = "start"
    EXISTENCE_CHECKED = "existence-checked"
    METADATA_SEEDED = "metadata-seeded"
    SCRIPTS_RUN = "scripts-run"
    RENDERED = "rendered"
    RENAMED = "renamed"
    DRY_RUN_REPORTED = "dry-run"
    ABORTED = "aborted"


@dataclass
class Session:
    """
    One file on its way through the pipeline. Owns its fragments; the
    script tuple is shared read-only with every other session.
    """
    path: Path
    scripts: Tuple[Path, ...]
    fragments: FragmentStore = field(default_factory=FragmentStore)
    state: SessionState = SessionState.START
    new_name: Optional[str] = None
    destination: Optional[Path] = None


class RenamerApp:
    def __init__(self,
                 config: RunConfig,
                 prompt: Optional[Callable[[], str]] = None,
                 renamer: Optional[FileRenamer] = None,
                 media: Optional[MediaExtractor] = None,
                 runner: Optional[ScriptRunner] = None):
        self.config = config
        self.prompt = prompt
        self.renamer = renamer or FileRenamer()
        self.media = media or MediaExtractor()
        self.runner = runner or ScriptRunner()

    def run(self, paths: Iterable[Path]) -> List[SessionResult]:
        """
        Processes every input file in order. A failure only ends the session
        it happened in; the remaining files are still attempted.
        """
        paths = [Path(p) for p in paths]
        logging.info(f"Processing {len(paths)} file(s) (DryRun={self.config.dry_run}, "
                     f"Scripts={len(self.config.scripts)})")

        self.renamer.reset()
        results = []
        for path in tqdm(paths, desc="Renaming", disable=not self.config.progress):
            results.append(self.process(path))

        failed = sum(1 for r in results if r.status == "failed")
        skipped = sum(1 for r in results if r.status == "skipped")
        logging.info(f"Done. {len(results) - failed - skipped} ok, "
                     f"{skipped} skipped, {failed} failed.")

        if self.config.report_path:
            ReportGenerator().write(results, self.config.report_path)

        return results

    def process(self, path: Path) -> SessionResult:
        session = Session(path=Path(path), scripts=tuple(self.config.scripts))
        try:
            return self._drive(session)
        except RenamerError as e:
            session.state = SessionState.ABORTED
            logging.error(f"Skipping {session.path}: {e}")
            return SessionResult(
                source=session.path,
                status="failed",
                destination=session.destination,
                error=str(e),
            )

    def _drive(self, session: Session) -> SessionResult:
        # --- Existence ---
        if not session.path.exists():
            session.state = SessionState.ABORTED
            logging.warning(f"File {session.path} doesn't exist, skipping")
            return SessionResult(source=session.path, status="skipped",
                                 error="File does not exist")
        session.state = SessionState.EXISTENCE_CHECKED
        logging.info(f"File: {session.path}")

        # --- Metadata ---
        meta = extract_metadata(session.path)
        session.fragments.seed_from_metadata(meta)
        if self.config.media_fragments:
            session.fragments.seed_from_media(self.media.extract(session.path))
        session.state = SessionState.METADATA_SEEDED

        # --- Scripts ---
        for script in session.scripts:
            self.runner.run(script, session)
        session.state = SessionState.SCRIPTS_RUN

        logging.info(f"Fragments available:\n{session.fragments}")

        # --- Render ---
        template = self._get_template()
        logging.debug(f"Template {template!r} needs fragments: {placeholders(template)}")
        session.new_name = render(template, session.fragments)
        session.destination = plan_destination(session.path, session.new_name)
        session.state = SessionState.RENDERED

        # --- Rename ---
        if same_path(session.path, session.destination):
            # Nothing to do; both modes report it the same way
            session.state = SessionState.RENAMED
            logging.info(f"{session.path} already has the rendered name, leaving it alone")
            return SessionResult(source=session.path, status="unchanged",
                                 destination=session.destination)

        self.renamer.rename(session.path, session.destination, dry_run=self.config.dry_run)
        if self.config.dry_run:
            session.state = SessionState.DRY_RUN_REPORTED
            status = "dry-run"
        else:
            session.state = SessionState.RENAMED
            status = "renamed"

        return SessionResult(source=session.path, status=status,
                             destination=session.destination)

    def _get_template(self) -> str:
        if self.config.template is not None:
            return self.config.template
        if self.prompt is None:
            raise RenamerError("No format string given and no way to prompt for one")
        # Asked again for every file when no --format was given
        return self.prompt()
