"""swagme - reverse-engineer OpenAPI docs from web-server source."""

from swagme.records import FieldRecord, RouteEntry, RouteRecord, SchemaRecord

__version__ = "0.1.0"

__all__ = [
    "FieldRecord",
    "RouteEntry",
    "RouteRecord",
    "SchemaRecord",
    "__version__",
]
