"""OpenAPI document assembly.

Schema and route records are first turned into small per-file documents
(written to ``<docs>/schemas`` and ``<docs>/routes``); the final swagger
document merges whatever those folders contain.
"""

from __future__ import annotations

import json
from typing import Any

import yaml

from swagme.config import SwagmeConfig
from swagme.records import FieldRecord, RouteRecord, SchemaRecord

OPENAPI_VERSION = "3.0.0"

RESPONSES = {
    "200": {"description": "Okay"},
    "404": {"description": "Not Found"},
    "500": {"description": "Server Error"},
}

SECURITY_SCHEMES: dict[str, tuple[str, dict[str, str]]] = {
    "bearer": (
        "bearerAuth",
        {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
            "description": "Enter your JWT token (without 'Bearer ' prefix)",
        },
    ),
    "basic": (
        "basicAuth",
        {
            "type": "http",
            "scheme": "basic",
            "description": "Enter your basic auth credentials",
        },
    ),
}


def field_schema(field: FieldRecord) -> dict[str, str]:
    if field.type == "date":
        return {"type": "string", "format": "date-time"}
    return {"type": field.type}


def schema_document(record: SchemaRecord) -> dict[str, Any]:
    """``{table_name: {type: object, properties: {...}}}``."""
    properties = {f.name: field_schema(f) for f in record.fields}
    return {record.table_name: {"type": "object", "properties": properties}}


def security_requirement(authorization: str) -> list[dict[str, list]]:
    scheme = SECURITY_SCHEMES.get(authorization)
    if scheme is None:
        return []
    return [{scheme[0]: []}]


def join_route(base_route: str, path: str) -> str:
    """Join a mount prefix and a router path without doubling slashes."""
    base = base_route.rstrip("/")
    tail = path.strip()
    if tail in ("", "/"):
        return base or "/"
    return base + "/" + tail.lstrip("/")


def operation(tag_name: str, authorization: str = "none") -> dict[str, Any]:
    op: dict[str, Any] = {
        "summary": "API Documentation",
        "produces": ["application/json"],
        "tags": [tag_name],
    }
    security = security_requirement(authorization)
    if security:
        op["security"] = security
    op["responses"] = {code: dict(body) for code, body in RESPONSES.items()}
    return op


def paths_document(
    record: RouteRecord, authorization: str = "none"
) -> dict[str, dict[str, Any]]:
    """One path item per unique ``base_route + path``."""
    paths: dict[str, dict[str, Any]] = {}
    for route in record.routes:
        full_path = join_route(record.base_route, route.path)
        paths.setdefault(full_path, {})[route.method.lower()] = operation(
            record.tag_name, authorization
        )
    return paths


def swagger_document(
    config: SwagmeConfig,
    schemas: dict[str, Any] | None = None,
    paths: dict[str, Any] | None = None,
) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": config.name,
            "version": config.version,
            "description": config.description or "",
        },
        "servers": [{"url": config.baseurl or ""}],
        "components": {"schemas": dict(schemas or {})},
        "paths": dict(paths or {}),
    }

    scheme = SECURITY_SCHEMES.get(config.authorization)
    if scheme is not None:
        name, definition = scheme
        doc["components"]["securitySchemes"] = {name: dict(definition)}
        doc["security"] = [{name: []}]
    return doc


def dump_json(doc: dict[str, Any]) -> str:
    return json.dumps(doc, indent=2) + "\n"


def dump_yaml(doc: dict[str, Any]) -> str:
    return yaml.safe_dump(
        doc, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
