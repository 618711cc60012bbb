"""Shared pytest fixtures for the crudgen test suite.

Provides reusable fixtures for:
- Temporary output directories
- A sample ``Book`` resource with scalar, date and relation fields
- Pre-parsed API descriptions (with and without pre-fetched parameters)
- A mocked ``TemplateRenderer`` that records instead of writing
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from crudgen.resource.models import Api, Resource


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Temporary Quasar ``src/`` directory (auto-cleanup)."""
    out = tmp_path / "src"
    out.mkdir()
    yield out


# ---------------------------------------------------------------------------
# Resource data
# ---------------------------------------------------------------------------

@pytest.fixture
def book_data() -> dict[str, Any]:
    """Raw ``Book`` resource as found in an API description file."""
    return {
        "name": "books",
        "title": "Book",
        "url": "https://localhost/books",
        "writableFields": [
            {
                "name": "title",
                "range": "http://www.w3.org/2001/XMLSchema#string",
                "required": True,
                "description": 'The "main" title',
            },
            {"name": "isbn", "range": "xmls:string"},
            {"name": "price", "type": "number", "range": "http://www.w3.org/2001/XMLSchema#decimal"},
            {"name": "publishedAt", "type": "dateTime", "range": "xmls:dateTime"},
            {"name": "author", "reference": "authors", "maxCardinality": 1},
            {"name": "tags", "reference": "tags"},
        ],
        "readableFields": [
            {"name": "id", "id": True},
            {"name": "title", "required": False},
            {"name": "reviews", "embedded": {"name": "reviews"}},
        ],
        "parameters": [
            {"variable": "title", "property": "title"},
            {"variable": "author", "property": "author"},
            {"variable": "author[]", "property": "author"},
            {"variable": "order[title]", "property": "title"},
            {"variable": "order[publishedAt]", "property": "publishedAt"},
            {"variable": "exists[deletedAt]", "property": "deletedAt"},
        ],
    }


@pytest.fixture
def book(book_data: dict[str, Any]) -> Resource:
    """Parsed ``Book`` resource with pre-fetched parameters."""
    return Resource.model_validate(book_data)


@pytest.fixture
def book_without_parameters(book_data: dict[str, Any]) -> Resource:
    """``Book`` resource whose parameters must be fetched."""
    data = dict(book_data)
    data.pop("parameters")
    return Resource.model_validate(data)


@pytest.fixture
def api(book: Resource) -> Api:
    """API description exposing the ``Book`` resource."""
    return Api(entrypoint="https://localhost", title="Bookshop", resources=[book])


@pytest.fixture
def api_file(tmp_path: Path, book_data: dict[str, Any]) -> Path:
    """API description written to a JSON file."""
    path = tmp_path / "api.json"
    path.write_text(
        json.dumps({"entrypoint": "https://localhost", "resources": [book_data]}),
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Mocked renderer
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_renderer() -> MagicMock:
    """``TemplateRenderer`` stand-in: directories are "created", files "written".

    ``render_to_file`` returns the output path, like the real renderer does
    for a file it wrote.
    """
    renderer = MagicMock()
    renderer.create_dir = AsyncMock(return_value=True)

    async def _render_to_file(template_id, output_path, context, *, overwrite=True):
        return Path(output_path)

    renderer.render_to_file = AsyncMock(side_effect=_render_to_file)
    return renderer
