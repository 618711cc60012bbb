"""Rendering-context assembly.

Joins the classified query parameters against the normalized fields and
bundles the result with naming and label text into the ``RenderContext``
every template is rendered with.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, Field

from crudgen.resource.models import DATE_TIME, FieldDescriptor, RawParameter, Resource
from crudgen.utils import ucfirst

from .fields import build_form_fields
from .parameters import VariableKind, parse_variable


# ---------------------------------------------------------------------------
# Label catalog
# ---------------------------------------------------------------------------

COMMON_LABELS: Mapping[str, str] = MappingProxyType({
    "submit": "Submit",
    "reset": "Reset",
    "delete": "Delete",
    "confirmDelete": "Are you sure you want to delete this item?",
    "noresults": "No results",
    "close": "Close",
    "cancel": "Cancel",
    "updated": "Updated",
    "field": "Field",
    "value": "Value",
    "filters": "Filters",
    "filter": "Filter",
    "unavail": "Data unavailable",
    "loading": "Loading...",
    "deleted": "Deleted",
    "numValidation": "Please, insert a value bigger than zero!",
    "stringValidation": "Please type something",
    "required": "Field is required",
    "recPerPage": "Records per page:",
    "id": "ID",
    "actions": "Actions",
})


def common_label_texts() -> dict[str, str]:
    """Return a fresh, mutable copy of the shared label catalog."""
    return dict(COMMON_LABELS)


def context_label_texts(
    form_fields: Iterable[FieldDescriptor],
    fields: Iterable[FieldDescriptor],
) -> list[str]:
    """Names needing a translation: form fields first, then show fields, de-duplicated."""
    names = [f.name for f in form_fields] + [f.name for f in fields]
    return list(dict.fromkeys(names))


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class FilterType(str, Enum):
    DEFAULT = "default"
    EXISTS = "exists"


class ParameterDescriptor(BaseModel):
    """A filter shown in the generated filter UI.

    ``field`` holds the matching field (and so its relation metadata) when the
    parameter resolved to one.
    """

    variable: str
    name: str
    filter_type: FilterType = FilterType.DEFAULT
    multiple: bool = False
    field: Optional[FieldDescriptor] = None

    @property
    def type(self) -> str:
        return self.field.type if self.field else "string"

    @property
    def is_relation(self) -> bool:
        return bool(self.field and self.field.is_relation)

    @property
    def is_relations(self) -> bool:
        return bool(self.field and self.field.is_relations)


class RenderContext(BaseModel):
    """Everything the resource templates are rendered with."""

    resource_name: str
    lowercase_name: str
    title_case_name: str
    fields: list[FieldDescriptor] = Field(default_factory=list)
    parameters: list[ParameterDescriptor] = Field(default_factory=list)
    form_fields: list[FieldDescriptor] = Field(default_factory=list)
    has_relation_field: bool = False
    has_date_field: bool = False
    labels: dict[str, str] = Field(default_factory=dict)
    field_labels: dict[str, str] = Field(default_factory=dict)
    hydra_prefix: str = "hydra:"
    entrypoint: str = ""

    def as_template_vars(self) -> dict[str, Any]:
        """Jinja2 variables; models stay objects so templates can use properties."""
        return {name: getattr(self, name) for name in type(self).model_fields}


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def _resolve_parameters(
    fields: list[FieldDescriptor],
    parameters: Iterable[RawParameter],
) -> list[ParameterDescriptor]:
    """Join parameters against *fields*, flagging sortable fields in place.

    ``fields`` is addressed by index through a name lookup; ``order[x]``
    updates the entry at x's index and produces no filter.
    """
    index = {field.name: i for i, field in enumerate(fields)}
    resolved: list[ParameterDescriptor] = []

    for param in parameters:
        position = index.get(param.variable)
        if position is not None:
            field = fields[position]
            resolved.append(
                ParameterDescriptor(
                    variable=param.variable,
                    name=field.name,
                    multiple=param.multiple,
                    field=field,
                )
            )
            continue

        parsed = parse_variable(param.variable)
        if parsed.kind is VariableKind.ORDER:
            target = index.get(parsed.target)
            if target is not None:
                fields[target].sortable = True
        elif parsed.kind is VariableKind.EXISTS:
            target = index.get(parsed.target)
            resolved.append(
                ParameterDescriptor(
                    variable=param.variable,
                    name=parsed.target,
                    filter_type=FilterType.EXISTS,
                    field=fields[target].model_copy() if target is not None else None,
                )
            )

    return resolved


def assemble_context(
    resource: Resource,
    fields: list[FieldDescriptor],
    parameters: Iterable[RawParameter],
    labels: Optional[Mapping[str, str]] = None,
    *,
    hydra_prefix: str = "hydra:",
    entrypoint: str = "",
) -> RenderContext:
    """Build the rendering context for *resource*.

    *fields* must be the complete output of ``normalize_fields``: resolving
    ``order[x]`` parameters sets ``sortable`` on its entries, and that must
    happen before the context is built from them.

    *labels* are merged over the shared catalog. ``field_labels`` holds one
    text per field name for the resource translation file: the supplied
    label, else the capitalized name. Catalog entries never leak into it.
    """
    resolved = _resolve_parameters(fields, parameters)
    form_fields = build_form_fields(fields)

    supplied = dict(labels or {})
    field_labels = {
        name: supplied.get(name, ucfirst(name))
        for name in context_label_texts(form_fields, fields)
    }
    merged = {**COMMON_LABELS, **supplied}
    for name, text in field_labels.items():
        merged.setdefault(name, text)

    return RenderContext(
        resource_name=resource.name,
        lowercase_name=resource.title.lower(),
        title_case_name=ucfirst(resource.title),
        fields=list(fields),
        parameters=resolved,
        form_fields=form_fields,
        has_relation_field=any(f.is_relations for f in fields),
        has_date_field=any(f.type == DATE_TIME for f in fields),
        labels=merged,
        field_labels=field_labels,
        hydra_prefix=hydra_prefix,
        entrypoint=entrypoint,
    )
