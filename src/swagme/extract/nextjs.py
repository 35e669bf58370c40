"""Next.js ``pages/api`` route extraction.

Every file under the API root that default-exports a handler and ends a
response (``res.json(...)``, ``res.status(...)``, ...) is an endpoint for
all five common verbs. Files are grouped by their first path segment:

    users/index.ts   -> tag "users", /users/index
    users/[id].ts    -> tag "users", /users/{id}
    hello.ts         -> tag "hello", /hello
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import structlog

from swagme.extract.blocks import FileReader, strip_extension
from swagme.records import FS_ROUTE_METHODS, RouteEntry, RouteRecord

logger = structlog.get_logger(__name__)

DEFAULT_EXPORT_MARKERS = ("export default", "module.exports")
RESPONSE_MARKERS = (".json(", ".status(", ".send(", ".end(", ".redirect(")

# [id] and catch-all [...slug] / [[...slug]] segments
_DYNAMIC_SEGMENT_RE = re.compile(r"\[{1,2}(?:\.\.\.)?(\w+)\]{1,2}")


def extract_fs_routes(
    file_paths: Iterable[str], read_file: FileReader
) -> list[RouteRecord]:
    """Build RouteRecords from paths relative to the API root.

    ``read_file`` maps the same relative path to the file text, either as
    a callable or as a mapping.
    """
    lookup = read_file if callable(read_file) else read_file.get
    grouped: dict[str, list[RouteEntry]] = {}

    for file_path in file_paths:
        tag_name = route_tag(file_path)
        if not tag_name:
            logger.debug("no route segment", file=file_path)
            continue

        text = lookup(file_path)
        if text is None or not is_route_handler(text):
            continue

        path = route_path(file_path)
        grouped.setdefault(tag_name, []).extend(
            RouteEntry(method=method, path=path) for method in FS_ROUTE_METHODS
        )

    return [
        RouteRecord(
            tag_name=tag_name,
            source_file_name=tag_name,
            base_route="",
            routes=tuple(entries),
        )
        for tag_name, entries in grouped.items()
    ]


def _normalize(rel_path: str) -> str:
    rel = rel_path.replace("\\", "/")
    while rel.startswith("./"):
        rel = rel[2:]
    return rel


def route_tag(rel_path: str) -> str:
    """First segment under the API root, extension stripped."""
    first = _normalize(rel_path).split("/", 1)[0]
    return strip_extension(first)


def route_path(rel_path: str) -> str:
    """``users/[id].ts`` -> ``/users/{id}``."""
    path = strip_extension(_normalize(rel_path))
    path = _DYNAMIC_SEGMENT_RE.sub(r"{\1}", path)
    return "/" + path


def is_route_handler(text: str) -> bool:
    return any(m in text for m in DEFAULT_EXPORT_MARKERS) and any(
        m in text for m in RESPONSE_MARKERS
    )
