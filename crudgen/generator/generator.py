"""Quasar CRUD generator.

Takes an ``Api`` and one of its ``Resource``s and renders list, show, create,
update and filter components, Pinia stores, a route module and translations
for it into a Quasar app's ``src/`` directory.

Generation runs in four steps: fetch the resource's query parameters (the
only I/O wait), normalize its fields, classify and join the parameters into a
``RenderContext``, then build and execute the ``FilePlan``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Iterable, Optional

from pydantic import BaseModel, Field

from crudgen.config import GeneratorConfig
from crudgen.resource.client import HydraClient
from crudgen.resource.models import Api, RawParameter, Resource
from crudgen.utils import console, print_error, print_success

from .context import RenderContext, assemble_context
from .fields import normalize_fields
from .file_plan import FilePlan, build_file_plan
from .parameters import classify_parameters, with_input_hint
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class GenerationResult(BaseModel):
    """Outcome of generating one resource."""

    resource: str = Field(..., description="Resource name")
    success: bool = Field(default=True)
    written: list[Path] = Field(default_factory=list, description="Files rendered")
    skipped: list[Path] = Field(default_factory=list, description="Existing shared files left alone")
    error: Optional[str] = Field(default=None, description="Error message on failure")


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class QuasarGenerator:
    """Scaffolds Quasar CRUD code for API resources.

    Each ``generate`` call builds its own fields, parameters and context, so
    several resources can be generated concurrently with ``generate_all``.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        client: HydraClient | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.client = client
        self.renderer = renderer or TemplateRenderer(self.config.template_dir)

    # -- Public API --------------------------------------------------------

    async def generate(
        self,
        api: Api,
        resource: Resource,
        output_dir: str | Path | None = None,
    ) -> GenerationResult:
        """Generate every file for *resource*.

        Failures (parameter fetch, ambiguous parameters, template errors) are
        reported in red and returned as an unsuccessful result; they never
        propagate, so one broken resource does not stop the others.
        """
        out = Path(output_dir) if output_dir is not None else self.config.output_dir
        try:
            raw_params = await resource.get_parameters(self._client_for(api))
            plan = self.plan(api, resource, raw_params, out)
            written, skipped = await self._execute(plan)
        except Exception as exc:  # noqa: BLE001
            print_error(f'Generation failed for "{resource.title}": {exc}')
            return GenerationResult(resource=resource.name, success=False, error=str(exc))

        return GenerationResult(resource=resource.name, written=written, skipped=skipped)

    async def generate_all(
        self,
        api: Api,
        resources: Iterable[Resource],
        output_dir: str | Path | None = None,
    ) -> list[GenerationResult]:
        """Generate several resources concurrently, in input order."""
        return list(
            await asyncio.gather(
                *[self.generate(api, resource, output_dir) for resource in resources]
            )
        )

    def build_context(
        self,
        api: Api,
        resource: Resource,
        raw_params: Iterable[RawParameter],
    ) -> RenderContext:
        """Normalize fields, classify parameters and assemble the context.

        Fields are normalized first: resolving ``order[...]`` parameters marks
        entries of the complete field list as sortable.
        """
        fields = normalize_fields(resource.writable_fields, resource.readable_fields)
        parameters = classify_parameters(with_input_hint(p) for p in raw_params)
        return assemble_context(
            resource,
            fields,
            parameters,
            hydra_prefix=self.config.hydra_prefix,
            entrypoint=api.entrypoint or self.config.entrypoint,
        )

    def plan(
        self,
        api: Api,
        resource: Resource,
        raw_params: Iterable[RawParameter],
        output_dir: str | Path,
    ) -> FilePlan:
        """Return the file plan for *resource* without touching the filesystem."""
        return build_file_plan(self.build_context(api, resource, raw_params), output_dir)

    def help(self, resource: Resource) -> None:
        """Print how to wire the generated routes and translations into the app."""
        print_success(f'Code for the "{resource.title}" resource type has been generated!')
        console.print("Paste the following definitions in your application configuration:")
        console.print(usage_snippet(resource), style="green", markup=False, highlight=False)

    # -- Internals ---------------------------------------------------------

    def _client_for(self, api: Api) -> HydraClient | None:
        if self.client is not None:
            return self.client
        if api.entrypoint:
            return HydraClient(
                api.entrypoint,
                timeout=self.config.timeout,
                hydra_prefix=self.config.hydra_prefix,
            )
        return None

    async def _execute(self, plan: FilePlan) -> tuple[list[Path], list[Path]]:
        """Create the plan's directories, then render its files in order."""
        for directory in plan.directories:
            await self.renderer.create_dir(
                directory.path, warn_if_exists=directory.warn_if_exists
            )

        written: list[Path] = []
        skipped: list[Path] = []
        for entry in plan.files:
            path = await self.renderer.render_to_file(
                entry.template_id,
                entry.output_path,
                entry.context,
                overwrite=entry.overwrite,
            )
            if path is None:
                skipped.append(entry.output_path)
            else:
                written.append(path)
        return written, skipped


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def usage_snippet(resource: Resource) -> str:
    """Router and i18n wiring for *resource*, ready to paste."""
    lc = resource.title.lower()
    return f"""
// Import routes in src/router/routes.ts
import {lc}Routes from './{lc}';

const routes: RouteRecordRaw[] = [
  // ...
  ...{lc}Routes,
];

// import translations in src/i18n/en-US/index.ts
import {lc} from './{lc}';

export default {{
  // ...
  {lc},
}}
"""
