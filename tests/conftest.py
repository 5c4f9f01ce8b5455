import stat
import pytest
from pathlib import Path

@pytest.fixture
def sample_file(tmp_path):
    """A 42-byte report.txt in its own directory."""
    p = tmp_path / "report.txt"
    p.write_bytes(b"x" * 42)
    return p

@pytest.fixture
def make_script(tmp_path):
    """Returns a factory that writes an executable /bin/sh helper script."""
    script_dir = tmp_path / "scripts"
    script_dir.mkdir()

    def _make(name: str, body: str) -> Path:
        p = script_dir / name
        p.write_text("#!/bin/sh\n" + body + "\n")
        p.chmod(p.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return p

    return _make
