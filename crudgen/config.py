"""crudgen configuration.

Typed settings for a generation run. Values are Pydantic v2 models so they are
validated on construction and can be built from the environment by the CLI.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "generator" / "templates"


class GeneratorConfig(BaseModel):
    """Settings shared by every resource generated in one run.

    Instances are created once by the CLI (or by callers embedding the
    generator) and passed to ``QuasarGenerator``.
    """

    output_dir: Path = Field(default=Path("./src"), description="Root of the target Quasar app sources")
    template_dir: Path = Field(default=DEFAULT_TEMPLATE_DIR, description="Root of the Jinja2 template catalog")
    hydra_prefix: str = Field(default="hydra:", description="Prefix of Hydra keys in API responses")
    timeout: int = Field(default=30, ge=1, description="Metadata fetch timeout in seconds")
    entrypoint: str = Field(default="", description="API entrypoint written to utils/config.ts")

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            CRUDGEN_OUTPUT_DIR, CRUDGEN_TEMPLATE_DIR, CRUDGEN_HYDRA_PREFIX,
            CRUDGEN_TIMEOUT, CRUDGEN_ENTRYPOINT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CRUDGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CRUDGEN_OUTPUT_DIR"])
        if os.environ.get("CRUDGEN_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["CRUDGEN_TEMPLATE_DIR"])
        if os.environ.get("CRUDGEN_HYDRA_PREFIX") is not None:
            kwargs["hydra_prefix"] = os.environ["CRUDGEN_HYDRA_PREFIX"]
        if os.environ.get("CRUDGEN_TIMEOUT"):
            kwargs["timeout"] = int(os.environ["CRUDGEN_TIMEOUT"])
        if os.environ.get("CRUDGEN_ENTRYPOINT"):
            kwargs["entrypoint"] = os.environ["CRUDGEN_ENTRYPOINT"]
        return cls(**kwargs)
