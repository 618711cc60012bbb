"""Unit tests for shared utility functions (crudgen.utils).

Tests cover:
- ucfirst, to_pascal, to_camel
- load_json (JSON, YAML, lists, errors)
- Rich print helpers
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from rich.console import Console

from crudgen.utils import (
    load_json,
    print_error,
    print_success,
    print_warning,
    to_camel,
    to_pascal,
    ucfirst,
)


# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------


class TestNameHelpers:
    @pytest.mark.unit
    def test_ucfirst(self):
        assert ucfirst("book") == "Book"
        assert ucfirst("bookReview") == "BookReview"
        assert ucfirst("Book") == "Book"

    @pytest.mark.unit
    def test_ucfirst_empty(self):
        assert ucfirst("") == ""

    @pytest.mark.unit
    def test_to_pascal(self):
        assert to_pascal("book-review") == "BookReview"
        assert to_pascal("book_review") == "BookReview"
        assert to_pascal("book review") == "BookReview"
        assert to_pascal("bookReview") == "BookReview"

    @pytest.mark.unit
    def test_to_camel(self):
        assert to_camel("book-review") == "bookReview"
        assert to_camel("Book") == "book"
        assert to_camel("") == ""


# ---------------------------------------------------------------------------
# load_json
# ---------------------------------------------------------------------------


class TestLoadJson:
    @pytest.mark.unit
    def test_load_json_dict(self, tmp_path: Path):
        data = {"entrypoint": "https://localhost", "resources": []}
        filepath = tmp_path / "api.json"
        filepath.write_text(json.dumps(data))

        assert load_json(filepath) == data

    @pytest.mark.unit
    def test_load_yaml(self, tmp_path: Path):
        filepath = tmp_path / "api.yaml"
        filepath.write_text(
            "entrypoint: https://localhost\n"
            "resources:\n"
            "  - name: books\n"
            "    title: Book\n"
        )

        result = load_json(filepath)
        assert result["entrypoint"] == "https://localhost"
        assert result["resources"][0]["title"] == "Book"

    @pytest.mark.unit
    def test_load_yml_suffix(self, tmp_path: Path):
        filepath = tmp_path / "api.YML"
        filepath.write_text("entrypoint: https://localhost\n")
        assert load_json(filepath) == {"entrypoint": "https://localhost"}

    @pytest.mark.unit
    def test_list_wraps_as_resources(self, tmp_path: Path):
        filepath = tmp_path / "api.json"
        filepath.write_text(json.dumps([{"name": "books", "title": "Book"}]))

        assert load_json(filepath) == {"resources": [{"name": "books", "title": "Book"}]}

    @pytest.mark.unit
    def test_empty_yaml(self, tmp_path: Path):
        filepath = tmp_path / "api.yaml"
        filepath.write_text("")
        assert load_json(filepath) == {"resources": []}

    @pytest.mark.unit
    def test_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_invalid_json(self, tmp_path: Path):
        filepath = tmp_path / "bad.json"
        filepath.write_text("not valid json")

        with pytest.raises(json.JSONDecodeError):
            load_json(filepath)

    @pytest.mark.unit
    def test_invalid_yaml(self, tmp_path: Path):
        filepath = tmp_path / "bad.yaml"
        filepath.write_text("resources: [unclosed\n")

        with pytest.raises(yaml.YAMLError):
            load_json(filepath)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestPrintHelpers:
    @pytest.mark.unit
    @pytest.mark.parametrize("helper", [print_success, print_error, print_warning])
    def test_brackets_printed_literally(self, helper):
        recorder = Console(record=True, width=200)
        with patch("crudgen.utils.console", recorder):
            helper('Query parameter "exists[deletedAt]" [bold]kept')

        assert 'Query parameter "exists[deletedAt]" [bold]kept' in recorder.export_text()
