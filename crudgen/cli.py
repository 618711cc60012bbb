"""Command-line entry point.

Usage::

    python -m crudgen api.json
    python -m crudgen api.yaml -o ./src --resource books --resource authors
    python -m crudgen api.json --entrypoint https://localhost/api

The API description file lists the entrypoint and the resources::

    {
      "entrypoint": "https://localhost/api",
      "resources": [
        {
          "name": "books",
          "title": "Book",
          "url": "https://localhost/api/books",
          "writableFields": [{"name": "title", "required": true}],
          "readableFields": [{"name": "id"}, {"name": "title"}],
          "parameters": [{"variable": "title"}, {"variable": "order[title]"}]
        }
      ]
    }

Resources without ``parameters`` have them fetched from their collection URL.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from crudgen.config import GeneratorConfig
from crudgen.generator import GenerationResult, QuasarGenerator
from crudgen.resource.models import Api
from crudgen.utils import console, load_json, print_error


async def run(api: Api, config: GeneratorConfig, names: list[str] | None = None) -> list[GenerationResult]:
    """Generate the selected resources (all when *names* is empty)."""
    resources = api.resources
    unknown: list[GenerationResult] = []
    if names:
        resources = []
        for name in names:
            resource = api.get_resource(name)
            if resource is None:
                print_error(f'Unknown resource "{name}"')
                unknown.append(GenerationResult(resource=name, success=False, error="unknown resource"))
                continue
            resources.append(resource)

    generator = QuasarGenerator(config)
    results = await generator.generate_all(api, resources, config.output_dir)
    for resource, result in zip(resources, results):
        if result.success:
            generator.help(resource)
    return results + unknown


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m crudgen``."""
    import argparse

    parser = argparse.ArgumentParser(
        prog="crudgen",
        description="Generate Quasar CRUD components for Hydra API resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m crudgen api.json\n"
            "  python -m crudgen api.yaml -o ./src --resource books\n"
        ),
    )
    parser.add_argument(
        "description",
        help="Path to the API description (JSON or YAML)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Quasar app source directory (default: $CRUDGEN_OUTPUT_DIR or ./src)",
    )
    parser.add_argument(
        "--resource", "-r",
        action="append",
        default=[],
        help="Resource name or title to generate (repeatable; default: all)",
    )
    parser.add_argument(
        "--entrypoint",
        default=None,
        help="Override the API entrypoint written to utils/config.ts",
    )
    parser.add_argument(
        "--template-dir",
        default=None,
        help="Use a custom template catalog",
    )

    args = parser.parse_args(argv)

    desc_path = Path(args.description)
    if not desc_path.exists():
        console.print(f"[bold red]Error:[/bold red] API description not found: {desc_path}")
        sys.exit(1)

    try:
        api = Api.model_validate(load_json(desc_path))
    except (ValueError, ValidationError, yaml.YAMLError) as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid API description {desc_path}:")
        console.print(str(exc), markup=False)
        sys.exit(1)

    config = GeneratorConfig.from_env()
    if args.output:
        config.output_dir = Path(args.output)
    if args.template_dir:
        config.template_dir = Path(args.template_dir)
    if args.entrypoint:
        api.entrypoint = args.entrypoint

    results = asyncio.run(run(api, config, args.resource))

    if not results or not all(r.success for r in results):
        console.print("[bold red]Generation failed.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
