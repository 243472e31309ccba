"""Shared fixtures: write YAML sources and the list-of-files config into tmp_path."""

import textwrap

import pytest


@pytest.fixture
def write_yaml(tmp_path):
    def _write(name: str, content: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_config(tmp_path):
    def _make(*names: str, name: str = "sources.txt"):
        path = tmp_path / name
        path.write_text("\n".join(names) + "\n", encoding="utf-8")
        return path

    return _make
