"""
Introspection normalization.

A GraphQL server answers the introspection query either with the bare
result or wrapped in the standard response envelope:

    {"__schema": {...}}                 # raw
    {"data": {"__schema": {...}}}       # wrapped

Both are reduced to one `Schema` before anything else reads them.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, Union

from pydantic import ValidationError

from .schema import Schema
from .utils import MalformedIntrospectionError

logger = logging.getLogger(__name__)

Introspection = Union[Mapping[str, Any], Schema]


class SchemaLoader(Protocol):
    """
    Collaborator that obtains the schema (HTTP endpoint, JSON file, ...).

    Loaders live outside the build core; this is the shape the core expects
    from them.
    """

    async def __call__(self, options: Any) -> Introspection:
        ...


def _extract_schema(payload: Mapping[str, Any]) -> Any:
    # The wrapped shape is checked first: it also has a top-level mapping
    # and must not be mistaken for the raw one.
    data = payload.get("data")
    if isinstance(data, Mapping) and "__schema" in data:
        logger.debug("Introspection payload is wrapped in a data envelope")
        return data["__schema"]

    if "__schema" in payload:
        logger.debug("Introspection payload is raw")
        return payload["__schema"]

    raise MalformedIntrospectionError(
        "Introspection payload has no __schema at the top level or under data; "
        f"found keys: {sorted(payload)}"
    )


def normalize(payload: Introspection) -> Schema:
    """
    Normalize a raw or wrapped introspection payload into a Schema.

    Args:
        payload: Parsed introspection JSON, or an already normalized Schema

    Returns:
        The canonical Schema

    Raises:
        MalformedIntrospectionError: If the payload shape is not recognized
            or the schema inside it is invalid
    """
    if isinstance(payload, Schema):
        return payload

    if not isinstance(payload, Mapping):
        raise MalformedIntrospectionError(
            f"Introspection payload must be a mapping, got {type(payload).__name__}"
        )

    raw_schema = _extract_schema(payload)
    if not isinstance(raw_schema, Mapping):
        raise MalformedIntrospectionError(
            f"__schema must be a mapping, got {type(raw_schema).__name__}"
        )

    try:
        schema = Schema.model_validate(raw_schema)
    except ValidationError as e:
        raise MalformedIntrospectionError(f"Invalid introspection schema: {e}") from e

    logger.info(
        f"Normalized schema: {len(schema.types)} types, {len(schema.directives)} directives"
    )
    return schema


async def load_schema(loader: SchemaLoader, options: Any = None) -> Schema:
    """
    Run a schema loader and normalize whatever it returns.

    Loaders may hand back a Schema or the raw payload they fetched.
    """
    payload = await loader(options)
    return normalize(payload)
