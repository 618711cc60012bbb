"""Shared utility functions for crudgen.

Provides Rich-based console output, API description loading (JSON or YAML),
and the small name helpers used both by the context assembler and by the
Jinja2 filters.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def ucfirst(value: str) -> str:
    """Upper-case the first character and leave the rest untouched.

    Examples::

        ucfirst("book") -> "Book"
        ucfirst("bookReview") -> "BookReview"
    """
    return value[:1].upper() + value[1:]


def to_pascal(name: str) -> str:
    """Convert ``some-thing``, ``some_thing`` or ``some thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", name)
    return "".join(ucfirst(word) for word in parts if word)


def to_camel(name: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = to_pascal(name)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


# ---------------------------------------------------------------------------
# API description I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load an API description file.

    ``.yaml`` / ``.yml`` files are parsed with PyYAML, anything else as JSON.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If a JSON file is malformed.
        yaml.YAMLError: If a YAML file is malformed.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(raw)
    else:
        data = json.loads(raw)
    if not isinstance(data, dict):
        return {"resources": data or []}
    return data


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
