"""Pydantic v2 models describing an API and its resources.

These are the inputs of a generation run: the API entrypoint, each resource's
writable and readable fields, and the raw query parameters its collection
endpoint accepts. Keys are accepted in both snake_case and the camelCase used
by Hydra documentation dumps (``maxCardinality``, ``writableFields``, ...).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from .client import HydraClient


DATE_TIME = "dateTime"


# ---------------------------------------------------------------------------
# Fields & parameters
# ---------------------------------------------------------------------------

class FieldDescriptor(BaseModel):
    """A named, typed attribute of a resource, possibly a relation."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str = Field(..., description="Property name, e.g. 'title'")
    type: str = Field(default="string", description="Scalar type; 'dateTime' marks date fields")
    range: Optional[str] = Field(default=None, description="XSD datatype or class IRI")
    id: bool = Field(default=False, description="Whether the field holds an IRI identifier")
    reference: bool = Field(default=False, description="Links to another resource by IRI")
    reference_name: Optional[str] = Field(
        default=None, alias="referenceName", description="Name of the referenced resource"
    )
    embedded: bool = Field(default=False, description="Embeds another resource inline")
    max_cardinality: Optional[int] = Field(
        default=None, alias="maxCardinality", description="1 for to-one relations, None for many"
    )
    required: bool = Field(default=False)
    description: str = Field(default="")

    # Derived by the field normalizer
    is_references: bool = Field(default=False)
    is_embeddeds: bool = Field(default=False)
    is_relation: bool = Field(default=False)
    is_relations: bool = Field(default=False)

    # Set by the context assembler when an ``order[name]`` parameter exists
    sortable: bool = Field(default=False)

    # HTML input hints for form widgets
    input_type: str = Field(default="text")
    step: Optional[str] = Field(default=None)
    number: bool = Field(default=False)

    @model_validator(mode="before")
    @classmethod
    def _coerce_relations(cls, data: Any) -> Any:
        """Accept relation markers given as ``None``, a name or a nested resource."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in ("reference", "embedded"):
            value = data.get(key)
            if value is None:
                data[key] = False
            elif isinstance(value, str):
                data.setdefault("reference_name", value)
                data[key] = True
            elif isinstance(value, dict):
                target = value.get("name") or value.get("title")
                if target:
                    data.setdefault("reference_name", target)
                data[key] = True
        return data


class RawParameter(BaseModel):
    """A query parameter accepted by a resource's collection endpoint.

    ``variable`` is the raw query key: ``title``, ``tags[]``,
    ``order[createdAt]`` or ``exists[deletedAt]``.
    """

    model_config = ConfigDict(extra="allow")

    variable: str = Field(..., description="Raw query-string key")
    property: Optional[str] = Field(default=None, description="Field the parameter filters on")
    required: bool = Field(default=False)
    range: Optional[str] = Field(default=None)
    description: str = Field(default="")
    multiple: bool = Field(default=False, description="Set by the classifier for name + name[] pairs")

    input_type: str = Field(default="text")
    step: Optional[str] = Field(default=None)
    number: bool = Field(default=False)


# ---------------------------------------------------------------------------
# Resources & API
# ---------------------------------------------------------------------------

class Resource(BaseModel):
    """A logical API resource (e.g. ``Book``) to scaffold CRUD code for."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Identifier, e.g. 'books'")
    title: str = Field(..., description="Display name, e.g. 'Book'")
    url: str = Field(default="", description="Collection endpoint URL")
    writable_fields: list[FieldDescriptor] = Field(default_factory=list, alias="writableFields")
    readable_fields: list[FieldDescriptor] = Field(default_factory=list, alias="readableFields")
    parameters: Optional[list[RawParameter]] = Field(
        default=None, description="Pre-fetched query parameters; fetched on demand when None"
    )

    async def get_parameters(self, client: Optional["HydraClient"] = None) -> list[RawParameter]:
        """Return this resource's raw query parameters.

        Pre-supplied ``parameters`` win; otherwise they are fetched through
        *client*.

        Raises:
            MetadataFetchError: If no parameters were supplied and the fetch
                fails or no client is available.
        """
        from .client import MetadataFetchError

        if self.parameters is not None:
            return [p.model_copy() for p in self.parameters]
        if client is None:
            raise MetadataFetchError(
                f"No parameters supplied for resource '{self.name}' and no client to fetch them"
            )
        return await client.fetch_parameters(self)


class Api(BaseModel):
    """An API entrypoint and the resources it exposes."""

    entrypoint: str = Field(default="", description="API entrypoint URL")
    title: str = Field(default="")
    resources: list[Resource] = Field(default_factory=list)

    def get_resource(self, name: str) -> Optional[Resource]:
        """Look a resource up by ``name`` or, case-insensitively, by ``title``."""
        for resource in self.resources:
            if resource.name == name or resource.title.lower() == name.lower():
                return resource
        return None
