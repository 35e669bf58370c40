"""Drizzle table extraction.

    export const users = pgTable("users", {
        id: serial("id").primaryKey(),
        tags: text("tags").array(),
    });

yields ``users`` with ``id: serial`` and ``tags: text[]``.

The column block is split on every comma, so a builder call whose own
arguments contain a comma (``varchar("name", { length: 255 })``) leaves
fragments behind; fragments that don't start with ``name: builder`` are
ignored.
"""

from __future__ import annotations

import re

import structlog

from swagme.extract.blocks import (
    extract_block,
    lower_type,
    strip_comments,
    strip_extension,
)
from swagme.records import FieldRecord, SchemaRecord

logger = structlog.get_logger(__name__)

TABLE_MARKERS = ("pgTable(", "mysqlTable(", "sqliteTable(")

_COLUMN_RE = re.compile(r"^\s*(\w+)\s*:\s*(\w+)")
_ARRAY_RE = re.compile(r"\.array\s*\(")


def extract_column_schemas(
    source_file_name: str, file_text: str
) -> list[SchemaRecord]:
    """Extract the first drizzle table of a file (zero or one record)."""
    found = [(file_text.find(m), m) for m in TABLE_MARKERS if m in file_text]
    if not found:
        return []
    _, marker = min(found)

    table_name = find_table_name(file_text, marker)
    if not table_name:
        logger.debug("no table name literal", file=source_file_name)
        return []

    block = extract_block(file_text, marker)
    if block is None:
        logger.debug("unbalanced table block", file=source_file_name)
        return []

    fields = []
    for fragment in split_columns(block):
        field = parse_column(fragment)
        if field is not None:
            fields.append(field)

    return [
        SchemaRecord(
            table_name=table_name,
            source_file_name=strip_extension(source_file_name),
            fields=tuple(fields),
        )
    ]


def find_table_name(file_text: str, marker: str) -> str:
    """First string literal argument of the table builder call."""
    pattern = re.escape(marker) + r"\s*([\"'`])([^\"'`]*)\1"
    match = re.search(pattern, file_text)
    return match.group(2).strip() if match else ""


def split_columns(block: str) -> list[str]:
    """Split a ``{...}`` column block into comma separated fragments."""
    body = strip_comments(block).strip()
    if body.startswith("{"):
        body = body[1:]
    if body.endswith("}"):
        body = body[:-1]
    return [f for f in body.split(",") if f.strip()]


def parse_column(fragment: str) -> FieldRecord | None:
    """Parse ``name: builder(...)`` into a field, marking ``.array()``."""
    match = _COLUMN_RE.match(fragment)
    if not match:
        return None
    col_type = lower_type(match.group(2))
    if _ARRAY_RE.search(fragment):
        col_type += "[]"
    return FieldRecord(name=match.group(1), type=col_type)
