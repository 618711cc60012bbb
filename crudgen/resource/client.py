"""Async client fetching resource metadata from a Hydra-enabled API.

The only metadata fetched over the network is the list of query parameters a
collection endpoint accepts. API Platform advertises them in the
``hydra:search`` block of every collection response::

    {
      "hydra:search": {
        "hydra:template": "/books{?title,author[],order[title]}",
        "hydra:mapping": [
          {"variable": "title", "property": "title", "required": false},
          ...
        ]
      }
    }

Typical usage::

    client = HydraClient("https://demo.api-platform.com")
    params = await client.fetch_parameters(resource)
"""

from __future__ import annotations

from typing import Any

import httpx

from .models import RawParameter, Resource


class MetadataFetchError(Exception):
    """Raised when a resource's parameter metadata cannot be fetched."""

    def __init__(self, message: str, resource: str = "") -> None:
        self.resource = resource
        super().__init__(message)


class HydraClient:
    """Async client for Hydra collection endpoints.

    Uses ``httpx.AsyncClient`` so that parameter fetches for several resources
    can run concurrently.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: int = 30,
        hydra_prefix: str = "hydra:",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.hydra_prefix = hydra_prefix

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"Accept": "application/ld+json"},
            follow_redirects=True,
        )

    def _mapping(self, data: dict[str, Any]) -> list[dict[str, Any]]:
        """Pull the ``hydra:mapping`` list out of a collection response.

        A collection without a search block has no parameters.
        """
        search = data.get(f"{self.hydra_prefix}search")
        if search is None:
            return []
        if not isinstance(search, dict):
            raise ValueError(f"'{self.hydra_prefix}search' is not an object")
        mapping = search.get(f"{self.hydra_prefix}mapping", [])
        if not isinstance(mapping, list):
            raise ValueError(f"'{self.hydra_prefix}mapping' is not a list")
        return mapping

    async def fetch_parameters(self, resource: Resource) -> list[RawParameter]:
        """Fetch the query parameters of *resource*'s collection endpoint.

        Each parameter's ``range`` is copied from the field it filters on so
        that an HTML input type can be derived for it later.

        Raises:
            MetadataFetchError: On connection failures, timeouts, non-2xx
                responses or payloads that are not Hydra collections.
        """
        url = resource.url or f"/{resource.name}"
        ranges: dict[str, Any] = {}
        for f in [*resource.writable_fields, *resource.readable_fields]:
            ranges.setdefault(f.name, f.range)

        try:
            async with self._client() as client:
                response = await client.get(url)
                response.raise_for_status()
                data = response.json()
            if not isinstance(data, dict):
                raise ValueError("collection response is not a JSON object")
            mapping = self._mapping(data)
            parameters = []
            for entry in mapping:
                if not isinstance(entry, dict):
                    raise ValueError(f"'{self.hydra_prefix}mapping' entry is not an object")
                prop = entry.get("property")
                parameters.append(
                    RawParameter(
                        variable=entry["variable"],
                        property=prop,
                        required=bool(entry.get("required", False)),
                        range=ranges.get(prop) if prop else None,
                    )
                )
            return parameters
        except httpx.ConnectError as exc:
            raise MetadataFetchError(
                f"Cannot connect to {self.base_url or url}: {exc}", resource.name
            ) from exc
        except httpx.TimeoutException as exc:
            raise MetadataFetchError(
                f"Fetching parameters for '{resource.name}' timed out after {self.timeout}s",
                resource.name,
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise MetadataFetchError(
                f"{url} returned HTTP {exc.response.status_code}", resource.name
            ) from exc
        except (KeyError, TypeError, ValueError) as exc:
            raise MetadataFetchError(
                f"Malformed collection response for '{resource.name}': {exc}", resource.name
            ) from exc
