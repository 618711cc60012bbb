"""Query-parameter parsing and classification.

Raw query keys come in four shapes:

- ``title``             -- plain filter
- ``author[]``          -- multi-valued filter
- ``order[createdAt]``  -- sort key for a field
- ``exists[deletedAt]`` -- presence filter for a field

``parse_variable`` turns a key into a tagged ``ParsedVariable`` once; the
classifier and the context assembler dispatch on its ``kind`` instead of
re-slicing strings.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Iterable, NamedTuple, Union

from crudgen.resource.models import RawParameter

from .fields import html_input_type

MULTI_SUFFIX = "[]"
ORDER_PREFIX = "order["
EXISTS_PREFIX = "exists["


class ParameterMultiplicityError(Exception):
    """Raised when the same query key is registered more than once.

    A plain key and its ``[]`` sibling are distinct keys and collapse into one
    filter; an exact repeat would generate two filters with one name.
    """

    def __init__(self, variable: str, count: int) -> None:
        self.variable = variable
        self.count = count
        super().__init__(
            f"Query parameter '{variable}' is registered {count} times; "
            "each key must be unique"
        )


class VariableKind(str, Enum):
    PLAIN = "plain"
    MULTI = "multi"
    ORDER = "order"
    EXISTS = "exists"


class ParsedVariable(NamedTuple):
    kind: VariableKind
    target: str
    raw: str


def _bracketed(variable: str, prefix: str) -> bool:
    return (
        variable.startswith(prefix)
        and variable.endswith("]")
        and len(variable) > len(prefix)
    )


def parse_variable(variable: str) -> ParsedVariable:
    """Parse a raw query key into its tagged form.

    ``target`` is the field name the key refers to. Keys matching none of the
    known shapes (e.g. ``order[title`` without the closing bracket) parse as
    ``PLAIN`` with the whole key as target.
    """
    if _bracketed(variable, EXISTS_PREFIX):
        return ParsedVariable(VariableKind.EXISTS, variable[len(EXISTS_PREFIX):-1], variable)
    if _bracketed(variable, ORDER_PREFIX):
        return ParsedVariable(VariableKind.ORDER, variable[len(ORDER_PREFIX):-1], variable)
    if variable.endswith(MULTI_SUFFIX) and len(variable) > len(MULTI_SUFFIX):
        return ParsedVariable(VariableKind.MULTI, variable[: -len(MULTI_SUFFIX)], variable)
    return ParsedVariable(VariableKind.PLAIN, variable, variable)


def base_key(variable: str) -> str:
    """Tally key of a raw query key: the key with a trailing ``[]`` stripped."""
    if variable.endswith(MULTI_SUFFIX):
        return variable[: -len(MULTI_SUFFIX)]
    return variable


def tally_parameters(variables: Iterable[str]) -> Counter[str]:
    """Count how many raw keys share each base key."""
    return Counter(base_key(v) for v in variables)


def with_input_hint(param: RawParameter) -> RawParameter:
    """Return a copy of *param* carrying the HTML input hint for its range."""
    return param.model_copy(update=html_input_type(param))


def classify_parameters(
    raw_params: Iterable[Union[RawParameter, dict]],
) -> list[RawParameter]:
    """Collapse raw query parameters into the list of filters to generate.

    - ``exists[x]`` and ``order[x]`` pass through untouched; the context
      assembler resolves them against the fields.
    - ``x`` together with ``x[]`` collapses into ``x`` with ``multiple=True``.
    - ``x[]`` without a plain ``x`` is kept as is.

    Relative order is preserved and the inputs are not mutated.

    Raises:
        ParameterMultiplicityError: If any key, of any shape, is registered
            more than once.
    """
    params = [
        p.model_copy() if isinstance(p, RawParameter) else RawParameter.model_validate(p)
        for p in raw_params
    ]
    repeated = [
        (variable, count)
        for variable, count in Counter(p.variable for p in params).items()
        if count > 1
    ]
    if repeated:
        raise ParameterMultiplicityError(*repeated[0])

    tally = tally_parameters(p.variable for p in params)

    result: list[RawParameter] = []
    for param in params:
        parsed = parse_variable(param.variable)
        if parsed.kind in (VariableKind.EXISTS, VariableKind.ORDER):
            result.append(param)
            continue

        count = tally[param.variable]
        if count == 0 and parsed.kind is VariableKind.MULTI:
            # plural-only: no singular sibling registered
            if tally[parsed.target] == 1:
                result.append(param)
            continue

        if count == 2:
            param.multiple = True
        result.append(param)

    return result
