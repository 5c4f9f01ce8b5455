import json
import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Dict, Iterable, List, Union

from .. import config
from ..exceptions import ScriptExecutionError, ScriptNotFoundError


def check_script(path: Union[str, Path]) -> Path:
    """
    Returns the absolute path of an existing script file. A bare name like
    "tagger.sh" means the file in the working directory, never one on $PATH.
    """
    path = Path(path)
    if not path.is_file():
        raise ScriptNotFoundError(f"Script {path} doesn't exist or is not a file")
    return path.resolve()


def resolve_scripts(raw_paths: Iterable[Union[str, Path]]) -> List[Path]:
    """
    Validates the configured scripts once, before any file is touched.
    Missing scripts are dropped with a warning; order is preserved.
    """
    scripts = []
    for raw in raw_paths:
        try:
            scripts.append(check_script(raw))
        except ScriptNotFoundError as e:
            logging.warning(f"{e}; it will not be run")
    return scripts


def parse_script_output(output: str) -> Dict[str, str]:
    """
    Parses `key=value` lines.

    Blank lines and '#' comments are ignored. The line is split on the first
    '=', the key is trimmed, the value is kept verbatim. Malformed lines are
    logged and skipped. A repeated key keeps its last value.
    """
    pairs: Dict[str, str] = {}
    for lineno, line in enumerate(output.splitlines(), start=1):
        if not line.strip() or line.lstrip().startswith(config.SCRIPT_COMMENT_PREFIX):
            continue

        key, sep, value = line.partition(config.SCRIPT_PAIR_SEPARATOR)
        key = key.strip()
        if not sep or not key:
            logging.warning(f"Ignoring malformed script output line {lineno}: {line!r}")
            continue
        if "\0" in line:
            # Can't be passed on through the environment or used in a filename
            logging.warning(f"Ignoring script output line {lineno} with a NUL byte: {line!r}")
            continue

        pairs[key] = value
    return pairs


def fragment_env_name(key: str) -> str:
    return config.ENV_FRAGMENT_PREFIX + re.sub(r'[^A-Za-z0-9]', '_', key).upper()


class ScriptRunner:
    """
    Runs helper scripts against a session and folds their output into the
    session's fragments.

    A script is invoked directly (never through a shell) as
    `<script> <file path>`. The current fragments are exposed in the
    environment, both as one JSON object and as one variable per key.
    """

    def run(self, script: Path, session) -> Dict[str, str]:
        # Always an explicit path so the name is never looked up on $PATH
        cmd = [str(Path(script).absolute()), str(session.path)]
        logging.debug(f"Running script: {cmd}")

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                env=self._build_env(session),
            )
        except (OSError, ValueError) as e:
            # ValueError: NUL bytes in the arguments or environment
            raise ScriptExecutionError(
                script, f"Could not execute script {script}: {e}"
            ) from e

        if proc.returncode != 0:
            stderr = proc.stderr.strip()
            if stderr:
                logging.warning(f"{script.name} stderr:\n{stderr}")
            raise ScriptExecutionError(
                script,
                f"Script {script} exited with status {proc.returncode}",
                returncode=proc.returncode,
                stderr=stderr,
            )

        if proc.stderr.strip():
            logging.debug(f"{script.name} stderr:\n{proc.stderr.strip()}")

        pairs = parse_script_output(proc.stdout)
        session.fragments.update(pairs.items())
        logging.debug(f"{script.name} produced {len(pairs)} fragment(s)")
        return pairs

    def _build_env(self, session) -> Dict[str, str]:
        env = dict(os.environ)
        fragments = session.fragments.as_dict()

        env[config.ENV_FILE] = str(session.path)
        env[config.ENV_FRAGMENTS] = json.dumps(fragments)
        for key, value in fragments.items():
            env[fragment_env_name(key)] = value
        return env
