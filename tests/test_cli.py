"""Tests for the plantuml-render command line."""

import io
import sys
from unittest.mock import patch

import pytest

from plantuml_core import cli
from plantuml_core.encoding import encode
from plantuml_core.executor import PlantUMLExecutor

from conftest import FakeEngine


@pytest.fixture
def fake_executor(engine_config):
    engine = FakeEngine()
    with patch("plantuml_core.cli.PlantUMLExecutor",
               side_effect=lambda: PlantUMLExecutor(engine=engine, config=engine_config)):
        yield engine


def test_decode(capsys, sample_source):
    assert cli.main(["decode", encode(sample_source)]) == 0
    assert capsys.readouterr().out == sample_source + "\n"


def test_decode_invalid_token(capsys):
    assert cli.main(["decode", "abc!"]) == 1
    assert "Invalid character" in capsys.readouterr().err


def test_encode_file(tmp_path, capsys, sample_source):
    source_file = tmp_path / "diagram.puml"
    source_file.write_text(sample_source, encoding="utf-8")

    assert cli.main(["encode", str(source_file)]) == 0
    assert capsys.readouterr().out.strip() == encode(sample_source)


def test_render_to_file(tmp_path, fake_executor, sample_source):
    source_file = tmp_path / "diagram.puml"
    source_file.write_text(sample_source, encoding="utf-8")
    out_file = tmp_path / "diagram.png"

    assert cli.main(["render", str(source_file), "-f", "png", "-o", str(out_file)]) == 0
    assert out_file.read_bytes() == b"<svg>" + sample_source.encode("utf-8") + b"</svg>"
    assert fake_executor.calls[0][1] == "-tpng"


def test_render_from_stdin(monkeypatch, capsysbinary, fake_executor, sample_source):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(sample_source.encode("utf-8"))))

    assert cli.main(["render"]) == 0
    assert capsysbinary.readouterr().out.startswith(b"<svg>@startuml")
    assert fake_executor.calls[0][1] == "-tsvg"


def test_render_empty_source(tmp_path, capsys, fake_executor):
    source_file = tmp_path / "empty.puml"
    source_file.write_text("  \n", encoding="utf-8")

    assert cli.main(["render", str(source_file)]) == 1
    assert "Empty PlantUML source" in capsys.readouterr().err
    assert fake_executor.calls == []


def test_validate(tmp_path, capsys, fake_executor, sample_source):
    source_file = tmp_path / "diagram.puml"
    source_file.write_text(sample_source, encoding="utf-8")

    assert cli.main(["validate", str(source_file)]) == 0
    assert "Alice -> Bob" in capsys.readouterr().out
    assert fake_executor.calls[0][1] == "-txt"


def test_missing_input_file(tmp_path, capsys):
    assert cli.main(["encode", str(tmp_path / "missing.puml")]) == 1
    assert "Error" in capsys.readouterr().err
