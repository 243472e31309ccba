"""Env file rendering, quoting and atomic writes."""

import os
import stat

import pytest
from dotenv import dotenv_values

from flattener.flattener import EnvEntry
from flattener.merger import merge_sources
from orchestrator.env_writer import format_value, render_env, write_env_file


def _table(*pairs):
    return merge_sources([("t.yaml", [EnvEntry(k, v, "t.yaml") for k, v in pairs])])


def test_format_value_cases() -> None:
    cases = [
        ("plain", "plain"),
        ("", ""),
        ("3", "3"),
        ("postgres://u@h:5432/db", "postgres://u@h:5432/db"),
        ("two words", '"two words"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("it's", '"it\'s"'),
        ("a=b", '"a=b"'),
        ("C:\\tmp", '"C:\\\\tmp"'),
        ("#notacomment", '"#notacomment"'),
    ]

    for raw, expected in cases:
        actual = format_value(raw)
        assert actual == expected, f"{raw!r} -> {actual!r}, expected {expected!r}"


def test_render_env_keeps_table_order() -> None:
    table = _table(("B", "2"), ("A", "1"), ("C", "x y"))
    assert render_env(table) == 'B=2\nA=1\nC="x y"\n'


def test_render_empty_table() -> None:
    assert render_env(_table()) == ""


def test_write_env_file_creates_parents_and_leaves_no_temp(tmp_path) -> None:
    out = tmp_path / "nested" / "dir" / ".env"
    written = write_env_file(_table(("A", "1")), out)
    assert written == out
    assert out.read_text(encoding="utf-8") == "A=1\n"
    assert [p.name for p in out.parent.iterdir()] == [".env"]


def test_write_env_file_replaces_existing(tmp_path) -> None:
    out = tmp_path / ".env"
    out.write_text("OLD=1\n", encoding="utf-8")
    write_env_file(_table(("NEW", "2")), out)
    assert out.read_text(encoding="utf-8") == "NEW=2\n"


def test_output_reads_back_with_dotenv(tmp_path) -> None:
    values = {
        "PLAIN": "plain",
        "EMPTY": "",
        "SPACED": "two words",
        "QUOTED": 'say "hi"',
        "SINGLE": "it's",
        "EQUALS": "a=b=c",
        "HASH": "x #y",
        "BACKSLASH": "C:\\tmp\\new",
    }
    out = write_env_file(_table(*values.items()), tmp_path / ".env")
    assert dotenv_values(out, interpolate=False) == values


def test_shell_specials_are_quoted_verbatim(tmp_path) -> None:
    """$ and backticks are quoted but not escaped; interpolation is out of scope."""
    assert format_value("$HOME/x") == '"$HOME/x"'
    assert format_value("`id`") == '"`id`"'
    values = {"DOLLAR": "$HOME/x", "TICKS": "`id`"}
    out = write_env_file(_table(*values.items()), tmp_path / ".env")
    assert dotenv_values(out, interpolate=False) == values


def _mode(path) -> int:
    return stat.S_IMODE(path.stat().st_mode)


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_replacing_keeps_existing_mode(tmp_path) -> None:
    out = tmp_path / ".env"
    out.write_text("OLD=1\n", encoding="utf-8")
    out.chmod(0o640)
    write_env_file(_table(("NEW", "2")), out)
    assert _mode(out) == 0o640


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_new_file_gets_umask_default_mode(tmp_path) -> None:
    umask = os.umask(0o022)
    try:
        out = write_env_file(_table(("A", "1")), tmp_path / ".env")
    finally:
        os.umask(umask)
    assert _mode(out) == 0o644
