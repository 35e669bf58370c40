"""Schema and route extractors.

All extractors are pure functions over source text; reading files is left
to the caller (see :mod:`swagme.project`).
"""

from swagme.extract.blocks import extract_block, strip_comments
from swagme.extract.comments import extract_swagger_comments
from swagme.extract.drizzle import extract_column_schemas
from swagme.extract.express import (
    extract_routes,
    resolve_base_routes,
    rewrite_path_params,
)
from swagme.extract.mongoose import extract_document_schemas
from swagme.extract.nextjs import extract_fs_routes
from swagme.extract.prisma import extract_sdl_schemas

SCHEMA_EXTRACTORS = {
    "mongoose": extract_document_schemas,
    "drizzle": extract_column_schemas,
    "prisma": extract_sdl_schemas,
}

__all__ = [
    "SCHEMA_EXTRACTORS",
    "extract_block",
    "extract_column_schemas",
    "extract_document_schemas",
    "extract_fs_routes",
    "extract_routes",
    "extract_sdl_schemas",
    "extract_swagger_comments",
    "resolve_base_routes",
    "rewrite_path_params",
    "strip_comments",
]
