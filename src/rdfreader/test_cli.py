"""
Tests for the owl-read command line tool.

HOW TO RUN:
    pytest src/rdfreader/test_cli.py
"""

import runpy
import sys
from pathlib import Path

import pytest

from rdfreader.cli import main


ONT_DIR = Path(__file__).resolve().parents[2] / "ont"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["RDFREADER_UNMATCHED", "RDFREADER_FORMAT", "RDFREADER_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)


def test_summary(capsys):
    """Test the summary printed for an RDF/XML document."""
    assert main([str(ONT_DIR / "owl-rdf" / "one-some.owl")]) == 0

    out = capsys.readouterr().out
    assert "Ontology IRI: http://example.com/iri" in out
    assert "Axioms:       4" in out
    assert "Declaration" in out
    assert "SubClassOf" in out


def test_owx_summary(capsys):
    """Test that --format owx uses the OWL/XML reader."""
    assert main(["--format", "owx", str(ONT_DIR / "owl-xml" / "ont-with-version.owx")]) == 0

    out = capsys.readouterr().out
    assert "Version IRI:  http://example.com/iri/1.0" in out


def test_annotated_count(capsys):
    assert main([str(ONT_DIR / "owl-rdf" / "annotation-on-subclass.owl")]) == 0
    assert "(of which annotated: 1)" in capsys.readouterr().out


def test_strict_failure(tmp_path, capsys):
    """Test that --strict turns an unrecognised triple into an error exit."""
    document = tmp_path / "stray.ttl"
    document.write_text(
        "@prefix owl: <http://www.w3.org/2002/07/owl#> .\n"
        "<http://example.com/a> owl:versionIRI <http://example.com/b> .\n"
    )

    assert main(["--format", "turtle", str(document)]) == 0
    capsys.readouterr()

    assert main(["--format", "turtle", "--strict", str(document)]) == 1
    assert "❌ Error reading" in capsys.readouterr().out


def test_missing_file(capsys):
    assert main([str(ONT_DIR / "missing.owl")]) == 1
    assert "❌" in capsys.readouterr().out


def test_format_from_environment(monkeypatch, tmp_path, capsys):
    """Test that RDFREADER_FORMAT sets the default format."""
    document = tmp_path / "one.nt"
    document.write_text(
        "<http://example.com/iri#A> <http://www.w3.org/1999/02/22-rdf-syntax-ns#type> "
        "<http://www.w3.org/2002/07/owl#Class> .\n"
    )
    monkeypatch.setenv("RDFREADER_FORMAT", "nt")

    assert main([str(document)]) == 0
    assert "Axioms:       1" in capsys.readouterr().out


def test_module_entry_point_exits_with_status(monkeypatch, capsys):
    """Test that running the module as a script exits with main()'s status."""
    monkeypatch.setattr(sys, "argv", ["owl-read", str(ONT_DIR / "owl-rdf" / "one-class.owl")])

    with pytest.raises(SystemExit) as exit_info:
        runpy.run_module("rdfreader.cli", run_name="__main__")

    assert exit_info.value.code == 0
    assert "Ontology IRI" in capsys.readouterr().out
