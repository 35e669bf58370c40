"""Records produced by the extractors.

Schema extractors return ``SchemaRecord`` lists, route extractors return
``RouteRecord`` lists. Records are built once and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

HttpMethod = Literal["GET", "POST", "PATCH", "PUT", "DELETE", "HEAD", "OPTIONS"]

# order also decides which verb wins when a line mentions several
ROUTER_METHODS: tuple[HttpMethod, ...] = (
    "GET",
    "POST",
    "PATCH",
    "PUT",
    "DELETE",
)
FS_ROUTE_METHODS: tuple[HttpMethod, ...] = (
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
)


@dataclass(frozen=True)
class FieldRecord:
    """A field/column of a table."""

    name: str
    type: str  # lowercase wire type, optionally suffixed with []

    @property
    def is_array(self) -> bool:
        return self.type.endswith("[]")


@dataclass(frozen=True)
class SchemaRecord:
    """A table/model discovered in a source file."""

    table_name: str
    source_file_name: str
    fields: tuple[FieldRecord, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "table_name": self.table_name,
            "source_file_name": self.source_file_name,
            "fields": [{"name": f.name, "type": f.type} for f in self.fields],
        }


@dataclass(frozen=True)
class RouteEntry:
    """One method + path pair."""

    method: HttpMethod
    path: str


@dataclass(frozen=True)
class RouteRecord:
    """A route module (router file or file-routing group)."""

    tag_name: str
    source_file_name: str
    base_route: str = "/"
    routes: tuple[RouteEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "tag_name": self.tag_name,
            "source_file_name": self.source_file_name,
            "base_route": self.base_route,
            "routes": [
                {"method": r.method, "path": r.path} for r in self.routes
            ],
        }
