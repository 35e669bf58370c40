"""Prisma schema (``.prisma``) extraction.

Each ``model Name { ... }`` block becomes one record. Field lines must be
exactly ``name type``; lines carrying attributes (``id Int @id``) or any
other token count are skipped.
"""

from __future__ import annotations

import re

import structlog

from swagme.extract.blocks import lower_type, strip_comments, strip_extension
from swagme.records import FieldRecord, SchemaRecord

logger = structlog.get_logger(__name__)

# "model" keyword at the start of a line that opens a block; fields that
# happen to be called "model" don't split a chunk
_MODEL_SPLIT_RE = re.compile(r"^\s*model\s+(?=\w+\s*\{)", re.MULTILINE)

_TABLE_NAME_RE = re.compile(r"^\w+$")


def extract_sdl_schemas(
    source_file_name: str, file_text: str
) -> list[SchemaRecord]:
    """Extract every model of a prisma schema file."""
    text = strip_comments(file_text).strip()
    chunks = _MODEL_SPLIT_RE.split(text)

    records = []
    for chunk in chunks:
        if not chunk.strip():
            continue
        record = parse_model_chunk(strip_extension(source_file_name), chunk)
        if record is not None:
            records.append(record)
    return records


def parse_model_chunk(
    source_file_name: str, chunk: str
) -> SchemaRecord | None:
    """Parse the text following a ``model`` keyword."""
    table_name = ""
    fields = []
    for line in chunk.split("\n"):
        if "{" in line and not table_name:
            table_name = line.split("{", 1)[0].strip()
            continue
        if "}" in line or not line.strip():
            continue
        parts = line.split()
        if len(parts) != 2:
            continue
        fields.append(FieldRecord(name=parts[0], type=lower_type(parts[1])))

    # generator/datasource preambles ("generator client {") have no
    # single-identifier name
    if not _TABLE_NAME_RE.match(table_name):
        if table_name:
            logger.debug("skipping non-model block", block=table_name)
        return None
    return SchemaRecord(
        table_name=table_name,
        source_file_name=source_file_name,
        fields=tuple(fields),
    )
