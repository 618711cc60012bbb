"""Field normalization.

Merges a resource's writable and readable fields into one de-duplicated,
order-preserving list and derives the relation flags the templates branch on.
Also derives the HTML input hints used by form widgets and filter inputs.
"""

from __future__ import annotations

from typing import Any, Iterable, Union

from crudgen.resource.models import FieldDescriptor, RawParameter

FieldInput = Union[FieldDescriptor, dict[str, Any]]


# XSD datatype (range suffix) -> HTML input hint
_INPUT_HINTS: dict[str, dict[str, Any]] = {
    "integer": {"input_type": "number", "number": True},
    "int": {"input_type": "number", "number": True},
    "decimal": {"input_type": "number", "step": "0.1", "number": True},
    "float": {"input_type": "number", "step": "0.1", "number": True},
    "double": {"input_type": "number", "step": "0.1", "number": True},
    "boolean": {"input_type": "checkbox"},
    "date": {"input_type": "date"},
    "dateTime": {"input_type": "dateTime"},
    "time": {"input_type": "time"},
}


def _range_suffix(range_iri: str) -> str:
    """``http://www.w3.org/2001/XMLSchema#integer`` / ``xmls:integer`` -> ``integer``."""
    for sep in ("#", ":"):
        if sep in range_iri:
            range_iri = range_iri.rsplit(sep, 1)[1]
    return range_iri


def html_input_type(item: Union[FieldDescriptor, RawParameter]) -> dict[str, Any]:
    """Return the HTML input hint for a field or parameter.

    Identifier fields become ``url`` inputs; otherwise the XSD range decides,
    falling back to a plain ``text`` input.
    """
    if getattr(item, "id", False):
        return {"input_type": "url", "step": None, "number": False}
    hint = _INPUT_HINTS.get(_range_suffix(item.range or ""), {"input_type": "text"})
    return {"step": None, "number": False, **hint}


def _as_descriptor(field: FieldInput) -> FieldDescriptor:
    if isinstance(field, FieldDescriptor):
        return field.model_copy()
    return FieldDescriptor.model_validate(field)


def normalize_fields(
    writable_fields: Iterable[FieldInput],
    readable_fields: Iterable[FieldInput],
) -> list[FieldDescriptor]:
    """Merge writable and readable fields into one list, one entry per name.

    Writable fields come first, so when both lists carry the same name the
    writable entry wins and the later duplicate is dropped. The result keeps
    first-occurrence order and carries the derived relation flags:

    - ``is_references``: reference and not to-one
    - ``is_embeddeds``: embedded and not to-one
    - ``is_relation``: reference or embedded
    - ``is_relations``: any to-many relation
    """
    by_name: dict[str, FieldDescriptor] = {}
    for raw in [*writable_fields, *readable_fields]:
        field = _as_descriptor(raw)
        if field.name in by_name:
            continue

        is_references = field.reference and field.max_cardinality != 1
        is_embeddeds = field.embedded and field.max_cardinality != 1
        by_name[field.name] = field.model_copy(
            update={
                "is_references": is_references,
                "is_embeddeds": is_embeddeds,
                "is_relation": field.reference or field.embedded,
                "is_relations": is_embeddeds or is_references,
            }
        )

    return list(by_name.values())


def build_form_fields(fields: Iterable[FieldDescriptor]) -> list[FieldDescriptor]:
    """Return the fields shown on create/update forms, with input hints.

    Every normalized field is eligible; the form template picks the widget
    from ``input_type`` and the relation flags. Double quotes in descriptions
    become single quotes so they can sit inside HTML attributes.
    """
    return [
        field.model_copy(
            update={
                **html_input_type(field),
                "description": field.description.replace('"', "'"),
            }
        )
        for field in fields
    ]
