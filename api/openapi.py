"""
OpenAPI document generation for the Books API.

FastAPI builds the document from route annotations. This module pins it to
OpenAPI 3.0 and removes parts that do not describe how the API behaves.
"""

from typing import Any, Dict

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from api.config import APIConfig

OPENAPI_VERSION = "3.0.3"

# Request validation failures are answered with 400/404, never 422
_UNUSED_SCHEMAS = ("HTTPValidationError", "ValidationError")

_NULL_TYPE = {"type": "null"}


def downgrade_nullable(node: Any) -> Any:
    """
    Rewrite JSON Schema null unions into the OpenAPI 3.0 ``nullable`` keyword.

    ``{"anyOf": [X, {"type": "null"}]}`` becomes ``X`` with ``nullable: true``.
    References cannot carry siblings in 3.0, so they are wrapped in ``allOf``.
    """
    if isinstance(node, list):
        return [downgrade_nullable(item) for item in node]
    if not isinstance(node, dict):
        return node

    node = {key: downgrade_nullable(value) for key, value in node.items()}
    variants = node.get("anyOf")
    if not isinstance(variants, list) or _NULL_TYPE not in variants:
        return node

    remaining = [variant for variant in variants if variant != _NULL_TYPE]
    del node["anyOf"]
    if len(remaining) == 1:
        variant = remaining[0]
        if "$ref" in variant:
            node["allOf"] = [variant]
        else:
            node = {**variant, **node}
    elif remaining:
        node["anyOf"] = remaining
    node["nullable"] = True
    return node


def _drop_validation_responses(schema: Dict[str, Any]) -> None:
    for path_item in schema.get("paths", {}).values():
        for operation in path_item.values():
            operation.get("responses", {}).pop("422", None)

    schemas = schema.get("components", {}).get("schemas", {})
    for name in _UNUSED_SCHEMAS:
        schemas.pop(name, None)


def build_openapi_schema(app: FastAPI, settings: APIConfig) -> Dict[str, Any]:
    """
    Generate (once) and return the OpenAPI 3.0 description of the app.

    Args:
        app: Application whose routes are introspected
        settings: Supplies title, version, description and the server URL

    Returns:
        The OpenAPI document as a dict, cached on ``app.openapi_schema``
    """
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=settings.api_title,
        version=settings.api_version,
        openapi_version=OPENAPI_VERSION,
        description=settings.api_description,
        routes=app.routes,
        tags=app.openapi_tags,
        servers=[{"url": settings.public_url}],
    )
    _drop_validation_responses(schema)
    app.openapi_schema = downgrade_nullable(schema)
    return app.openapi_schema
