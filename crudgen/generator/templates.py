"""Jinja2 template rendering for resource scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``crudgen/generator/templates/`` catalog and writes them into the target
project. The catalog is split into three layers searched in order:
``quasar/`` (framework components), ``vue-common/`` (Vue composables) and
``common/`` (framework-agnostic types and utils). A template id such as
``components/foo/FooList.vue`` resolves to the first ``<id>.j2`` found.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from crudgen.config import DEFAULT_TEMPLATE_DIR
from crudgen.utils import print_warning, to_camel, to_pascal, ucfirst


# ---------------------------------------------------------------------------
# Template layers
# ---------------------------------------------------------------------------

TEMPLATE_LAYERS: tuple[str, ...] = ("quasar", "vue-common", "common")

TEMPLATE_SUFFIX = ".j2"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the template catalog into a Quasar project.

    This is the only component touching the filesystem: the generator hands
    it directories to create and ``(template id, output path, context,
    overwrite)`` entries to render.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(
                [str(self.template_dir / layer) for layer in TEMPLATE_LAYERS]
            ),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["lowercase"] = str.lower
        self.env.filters["capitalize"] = ucfirst
        self.env.filters["camel_case"] = to_camel
        self.env.filters["pascal_case"] = to_pascal
        self.env.filters["json"] = _json_filter

    # -- Lookup ------------------------------------------------------------

    def has_template(self, template_id: str) -> bool:
        """Return ``True`` if *template_id* exists in one of the layers."""
        try:
            self.env.get_template(template_id + TEMPLATE_SUFFIX)
        except TemplateNotFound:
            return False
        return True

    def list_templates(self) -> list[str]:
        """Return the sorted ids of every template across all layers."""
        ids: set[str] = set()
        for layer in TEMPLATE_LAYERS:
            layer_dir = self.template_dir / layer
            if not layer_dir.is_dir():
                continue
            for path in layer_dir.rglob("*" + TEMPLATE_SUFFIX):
                rel = path.relative_to(layer_dir).as_posix()
                ids.add(rel[: -len(TEMPLATE_SUFFIX)])
        return sorted(ids)

    # -- Rendering ---------------------------------------------------------

    def render(self, template_id: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_id: Catalog id without the ``.j2`` suffix (e.g.
                ``"router/foo.ts"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_id + TEMPLATE_SUFFIX)
        return template.render(**context)

    # -- Filesystem (async) ------------------------------------------------

    async def create_dir(self, path: str | Path, *, warn_if_exists: bool = True) -> bool:
        """Create *path* (and parents). Returns ``False`` if it already existed."""
        directory = Path(path)
        existed = await asyncio.to_thread(directory.is_dir)
        if existed:
            if warn_if_exists:
                print_warning(f'The directory "{directory}" already exists')
            return False
        await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
        return True

    async def render_to_file(
        self,
        template_id: str,
        output_path: str | Path,
        context: dict[str, Any],
        *,
        overwrite: bool = True,
    ) -> Path | None:
        """Render a template and write the result to *output_path*.

        When the file exists and *overwrite* is ``False`` nothing is rendered
        and ``None`` is returned. Parent directories are created
        automatically.
        """
        out = Path(output_path)
        if not overwrite and await asyncio.to_thread(out.exists):
            return None
        content = self.render(template_id, context)
        await asyncio.to_thread(_write_file, out, content)
        return out


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _json_filter(value: Any) -> str:
    """Serialize a value as a JS/TS literal (double-quoted strings)."""
    return json.dumps(value, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
