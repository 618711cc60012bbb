"""crudgen generator -- turns API resource metadata into Quasar CRUD code.

The pipeline for one resource is::

    fields     = normalize_fields(resource.writable_fields, resource.readable_fields)
    parameters = classify_parameters(raw_params)
    context    = assemble_context(resource, fields, parameters)
    plan       = build_file_plan(context, output_dir)

``QuasarGenerator`` runs it end to end and renders the plan with
``TemplateRenderer``.

Quick usage::

    from crudgen.generator import QuasarGenerator

    generator = QuasarGenerator()
    result = await generator.generate(api, api.resources[0], "./src")
"""

from crudgen.generator.context import (
    COMMON_LABELS,
    FilterType,
    ParameterDescriptor,
    RenderContext,
    assemble_context,
    common_label_texts,
)
from crudgen.generator.fields import build_form_fields, normalize_fields
from crudgen.generator.file_plan import FilePlan, FilePlanEntry, build_file_plan
from crudgen.generator.generator import GenerationResult, QuasarGenerator
from crudgen.generator.parameters import (
    ParameterMultiplicityError,
    classify_parameters,
    parse_variable,
)
from crudgen.generator.templates import TemplateRenderer

__all__ = [
    "COMMON_LABELS",
    "FilePlan",
    "FilePlanEntry",
    "FilterType",
    "GenerationResult",
    "ParameterDescriptor",
    "ParameterMultiplicityError",
    "QuasarGenerator",
    "RenderContext",
    "TemplateRenderer",
    "assemble_context",
    "build_file_plan",
    "build_form_fields",
    "classify_parameters",
    "common_label_texts",
    "normalize_fields",
    "parse_variable",
]
