"""File plan construction.

Decides which catalog templates are instantiated for a resource and where
they land. The plan is pure data; ``TemplateRenderer`` executes it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from .context import RenderContext, common_label_texts


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

# Shared by every resource; created once, never overwritten.
COMMON_DIRECTORIES: tuple[str, ...] = (
    "components/common",
    "composables",
    "i18n",
    "i18n/en-US",
    "router",
    "types",
    "utils",
)

# Per resource, ``%s`` is the lowercase resource name.
RESOURCE_DIRECTORIES: tuple[str, ...] = (
    "components/%s",
    "pages/%s",
    "stores/%s",
)

COMMON_FILES: tuple[str, ...] = (
    # common components
    "components/common/CommonActionCell.vue",
    "components/common/CommonBreadcrumb.vue",
    "components/common/CommonConfirmDelete.vue",
    "components/common/CommonDataFilter.vue",
    "components/common/CommonFormRepeater.vue",
    "components/common/CommonLoading.vue",
    "components/common/CommonToolbar.vue",
    # composables
    "composables/breadcrumb.ts",
    "composables/errors.ts",
    "composables/mercureItem.ts",
    "composables/mercureList.ts",
    "composables/notifications.ts",
    # types
    "types/breadcrumb.ts",
    "types/collection.ts",
    "types/error.ts",
    "types/item.ts",
    "types/list.ts",
    "types/view.ts",
    # utils
    "utils/api.ts",
    "utils/date.ts",
    "utils/error.ts",
    "utils/mercure.ts",
)

# First ``%s`` is the lowercase name, second the capitalized one. Template
# ids use ``foo`` / ``Foo`` in their place.
RESOURCE_PATTERNS: tuple[str, ...] = (
    # components
    "components/%s/%sCreate.vue",
    "components/%s/%sFilter.vue",
    "components/%s/%sForm.vue",
    "components/%s/%sList.vue",
    "components/%s/%sShow.vue",
    "components/%s/%sUpdate.vue",
    # pages
    "pages/%s/PageCreate.vue",
    "pages/%s/PageList.vue",
    "pages/%s/PageShow.vue",
    "pages/%s/PageUpdate.vue",
    # routes
    "router/%s.ts",
    # stores
    "stores/%s/create.ts",
    "stores/%s/delete.ts",
    "stores/%s/list.ts",
    "stores/%s/show.ts",
    "stores/%s/update.ts",
    # types
    "types/%s.ts",
)

FILTER_PATTERN = "components/%s/%sFilter.vue"

CONFIG_TEMPLATE = "utils/config.ts"
COMMON_I18N_TEMPLATE = "i18n/common.ts"
RESOURCE_I18N_TEMPLATE = "i18n/foo.ts"


def format_pattern(pattern: str, lowercase: str, title_case: str) -> str:
    """Fill a pattern's ``%s`` slots, reusing the last name for extra slots.

    ``router/%s.ts`` only takes the lowercase name; component patterns take
    both.
    """
    names = (lowercase, title_case)
    slots = pattern.count("%s")
    return pattern % tuple(names[min(i, len(names) - 1)] for i in range(slots))


# ---------------------------------------------------------------------------
# Plan models
# ---------------------------------------------------------------------------

class DirectoryEntry(BaseModel):
    path: Path
    warn_if_exists: bool = True


class FilePlanEntry(BaseModel):
    """One template to render: ``render(template_id, output_path, context, overwrite)``."""

    template_id: str
    output_path: Path
    context: dict[str, Any] = Field(default_factory=dict)
    overwrite: bool = True


class FilePlan(BaseModel):
    """Directories to create, then files to render, in order."""

    directories: list[DirectoryEntry] = Field(default_factory=list)
    files: list[FilePlanEntry] = Field(default_factory=list)

    def template_ids(self) -> list[str]:
        return [entry.template_id for entry in self.files]

    def get(self, template_id: str) -> FilePlanEntry | None:
        for entry in self.files:
            if entry.template_id == template_id:
                return entry
        return None


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def build_file_plan(context: RenderContext, output_dir: str | Path) -> FilePlan:
    """Plan every directory and file generated for one resource.

    - Common directories and files are shared across resources: directories
      are created silently when missing, files only when absent.
    - Resource directories warn when they already exist; resource files are
      always (re)written.
    - The filter component is skipped when the resource has no filters.
    - Translation files are created only when absent.
    """
    root = Path(output_dir)
    lc = context.lowercase_name
    uc = context.title_case_name
    template_vars = context.as_template_vars()

    directories = [
        DirectoryEntry(path=root / d, warn_if_exists=False) for d in COMMON_DIRECTORIES
    ]
    directories += [
        DirectoryEntry(path=root / (d % lc), warn_if_exists=True) for d in RESOURCE_DIRECTORIES
    ]

    files = [
        FilePlanEntry(
            template_id=common,
            output_path=root / common,
            context=template_vars,
            overwrite=False,
        )
        for common in COMMON_FILES
    ]

    for pattern in RESOURCE_PATTERNS:
        if pattern == FILTER_PATTERN and not context.parameters:
            continue
        files.append(
            FilePlanEntry(
                template_id=format_pattern(pattern, "foo", "Foo"),
                output_path=root / format_pattern(pattern, lc, uc),
                context=template_vars,
                overwrite=True,
            )
        )

    files.append(
        FilePlanEntry(
            template_id=CONFIG_TEMPLATE,
            output_path=root / CONFIG_TEMPLATE,
            context={"entrypoint": context.entrypoint},
            overwrite=False,
        )
    )
    files.append(
        FilePlanEntry(
            template_id=COMMON_I18N_TEMPLATE,
            output_path=root / "i18n" / "en-US" / "common.ts",
            context={"labels": common_label_texts()},
            overwrite=False,
        )
    )
    files.append(
        FilePlanEntry(
            template_id=RESOURCE_I18N_TEMPLATE,
            output_path=root / "i18n" / "en-US" / f"{lc}.ts",
            context={"labels": dict(context.field_labels)},
            overwrite=False,
        )
    )

    return FilePlan(directories=directories, files=files)
