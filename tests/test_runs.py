"""Tests for run folders, JSON input and the CLI argument types."""

import sys
import os
import io
import json
import argparse
from datetime import datetime
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from wolprep.cli import parse_article_url
from wolprep.errors import InputError
from wolprep.runs import (
    artifact_name, create_run_dir, create_runs_dir, read_json_input, write_json, write_text,
)


class FakeStdin(io.StringIO):
    def __init__(self, text="", tty=False):
        super().__init__(text)
        self.tty = tty

    def isatty(self):
        return self.tty


class TestRunFolders:
    def test_create_runs_dir_is_idempotent(self, tmp_path):
        path = str(tmp_path / "runs" / "pub_w_scrape")
        assert create_runs_dir(path) == path
        assert create_runs_dir(path) == path
        assert os.path.isdir(path)

    def test_run_dir_timestamp_has_no_colons(self, tmp_path):
        run_dir = create_run_dir(str(tmp_path), now=datetime(2024, 9, 2, 18, 30, 5, 123000))
        assert os.path.basename(run_dir) == "2024-09-02T18-30-05.123"
        assert os.path.isdir(run_dir)

    def test_artifact_name(self):
        assert artifact_name("ARTÍCULO DE ESTUDIO 10", "¿Jehová escucha?") == \
            "articulo-de-estudio-10--jehova-escucha.json"

    def test_artifact_name_fallback(self):
        assert artifact_name("", ext="md") == "result.md"

    def test_write_json_keeps_accents(self, tmp_path):
        path = write_json(str(tmp_path), "a.json", {"titulo": "Jehová"})
        with open(path, encoding="utf-8") as f:
            assert "Jehová" in f.read()

    def test_write_text(self, tmp_path):
        path = write_text(str(tmp_path), "result.md", "# Hola\n")
        with open(path, encoding="utf-8") as f:
            assert f.read() == "# Hola\n"


class TestJsonInput:
    def test_read_file(self, tmp_path):
        path = tmp_path / "in.json"
        path.write_text(json.dumps({"entries": []}), encoding="utf-8")
        assert read_json_input(str(path)) == {"entries": []}

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError):
            read_json_input(str(tmp_path / "nope.json"))

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InputError):
            read_json_input(str(path))

    def test_read_stdin(self):
        assert read_json_input(stream=FakeStdin('{"title": "x"}')) == {"title": "x"}

    def test_tty_stdin_rejected(self):
        with pytest.raises(InputError):
            read_json_input(stream=FakeStdin(tty=True))

    def test_empty_object_rejected(self):
        with pytest.raises(InputError):
            read_json_input(stream=FakeStdin("{}"))


class TestArticleUrl:
    def test_valid(self):
        url = "https://wol.jw.org/es/wol/d/r4/lp-s/2024/1"
        assert parse_article_url(url) == url

    def test_other_host(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_article_url("https://example.com/es/wol/d/r4")

    def test_not_a_url(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_article_url("wol.jw.org/es")
