import json
import logging
import pytest
from pathlib import Path

from jrenamer.core import Session
from jrenamer.exceptions import ScriptExecutionError, ScriptNotFoundError
from jrenamer.scripts.runner import (
    ScriptRunner, check_script, fragment_env_name, parse_script_output, resolve_scripts,
)

@pytest.fixture
def session(sample_file):
    s = Session(path=sample_file, scripts=())
    s.fragments.set("filename", "report")
    return s

def test_parse_key_value_lines():
    out = "a=1\n\n# comment\nb = two words \nc=x=y\r\nd=\n"
    assert parse_script_output(out) == {"a": "1", "b": " two words ", "c": "x=y", "d": ""}

def test_parse_skips_malformed_lines(caplog):
    with caplog.at_level(logging.WARNING):
        pairs = parse_script_output("no separator here\n=value\nok=1\n")
    assert pairs == {"ok": "1"}
    assert "malformed" in caplog.text

def test_parse_repeated_key_keeps_last():
    assert parse_script_output("k=1\nk=2\n") == {"k": "2"}

def test_fragment_env_name():
    assert fragment_env_name("exif_datetime") == "JRENAMER_FRAGMENT_EXIF_DATETIME"
    assert fragment_env_name("my-key.x") == "JRENAMER_FRAGMENT_MY_KEY_X"

def test_check_script(make_script, tmp_path):
    s = make_script("ok.sh", "true")
    assert check_script(str(s)) == s
    with pytest.raises(ScriptNotFoundError):
        check_script(tmp_path / "missing.sh")

def test_resolve_scripts_drops_missing(make_script, tmp_path, caplog):
    a = make_script("a.sh", "true")
    b = make_script("b.sh", "true")
    missing = tmp_path / "missing.sh"

    with caplog.at_level(logging.WARNING):
        scripts = resolve_scripts([b, missing, a])

    assert scripts == [b, a]
    assert "missing.sh" in caplog.text

def test_run_merges_output(make_script, session):
    script = make_script("tags.sh", 'echo "artist=Someone"\necho "title=Song"')
    pairs = ScriptRunner().run(script, session)

    assert pairs == {"artist": "Someone", "title": "Song"}
    assert session.fragments.get("artist") == "Someone"
    assert session.fragments.get("filename") == "report"

def test_run_passes_file_path_argument(make_script, session):
    script = make_script("arg.sh", 'echo "arg=$1"')
    ScriptRunner().run(script, session)
    assert session.fragments.get("arg") == str(session.path)

def test_script_sees_existing_fragments(make_script, session):
    script = make_script("env.sh", 'echo "seen=$JRENAMER_FRAGMENT_FILENAME"\necho "file=$JRENAMER_FILE"')
    ScriptRunner().run(script, session)
    assert session.fragments.get("seen") == "report"
    assert session.fragments.get("file") == str(session.path)

def test_fragments_json_in_environment(make_script, session):
    script = make_script("json.sh", 'printf "raw=%s\\n" "$JRENAMER_FRAGMENTS"')
    ScriptRunner().run(script, session)
    assert json.loads(session.fragments.get("raw")) == {"filename": "report"}

def test_script_can_override_metadata(make_script, session):
    script = make_script("override.sh", 'echo "filename=renamed"')
    ScriptRunner().run(script, session)
    assert session.fragments.get("filename") == "renamed"

@pytest.mark.parametrize("order,expected", [(("a", "b"), "from-b"), (("b", "a"), "from-a")])
def test_later_script_wins(make_script, session, order, expected):
    scripts = {
        "a": make_script("a.sh", 'echo "k=from-a"'),
        "b": make_script("b.sh", 'echo "k=from-b"'),
    }
    runner = ScriptRunner()
    for name in order:
        runner.run(scripts[name], session)
    assert session.fragments.get("k") == expected

def test_nonzero_exit_raises(make_script, session):
    script = make_script("fail.sh", 'echo "k=v"\necho "boom" >&2\nexit 3')

    with pytest.raises(ScriptExecutionError) as exc:
        ScriptRunner().run(script, session)

    assert exc.value.returncode == 3
    assert exc.value.stderr == "boom"
    assert exc.value.script == script
    # Nothing from a failed script reaches the store
    assert "k" not in session.fragments

def test_unexecutable_script_raises(tmp_path, session):
    script = tmp_path / "plain.txt"
    script.write_text("echo k=v\n")  # no exec bit

    with pytest.raises(ScriptExecutionError):
        ScriptRunner().run(script, session)

def test_bare_relative_script_runs_validated_file(make_script, session, monkeypatch):
    script = make_script("tagger.sh", 'echo "tag=local"')
    monkeypatch.chdir(script.parent)

    scripts = resolve_scripts(["tagger.sh"])
    assert scripts == [script]
    assert scripts[0].is_absolute()

    ScriptRunner().run(scripts[0], session)
    assert session.fragments.get("tag") == "local"

def test_directory_is_not_a_script(tmp_path, caplog):
    (tmp_path / "somedir").mkdir()
    with pytest.raises(ScriptNotFoundError):
        check_script(tmp_path / "somedir")
    with caplog.at_level(logging.WARNING):
        assert resolve_scripts([tmp_path / "somedir"]) == []

def test_parse_drops_nul_values(caplog):
    with caplog.at_level(logging.WARNING):
        pairs = parse_script_output("k=a\0b\nok=1\n")
    assert pairs == {"ok": "1"}
    assert "NUL" in caplog.text

def test_nul_in_environment_is_a_script_failure(make_script, session):
    session.fragments.set("bad", "a\0b")
    script = make_script("noop.sh", "true")
    with pytest.raises(ScriptExecutionError):
        ScriptRunner().run(script, session)
