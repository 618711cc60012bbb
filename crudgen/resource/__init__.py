"""API resource descriptions and the Hydra metadata client."""

from crudgen.resource.client import HydraClient, MetadataFetchError
from crudgen.resource.models import (
    DATE_TIME,
    Api,
    FieldDescriptor,
    RawParameter,
    Resource,
)

__all__ = [
    "DATE_TIME",
    "Api",
    "FieldDescriptor",
    "HydraClient",
    "MetadataFetchError",
    "RawParameter",
    "Resource",
]
