"""Mongoose schema extraction.

Reads the first ``new mongoose.Schema({...})`` call of a file and the
``mongoose.model('Name', schema)`` registration that names it:

    const schema = new mongoose.Schema({
        name: { type: String, required: true },
        age: { type: Number },
    }, { timestamps: true });
    module.exports = mongoose.model('User', schema);

yields ``User`` with ``name: string``, ``age: number``, ``createdAt: date``
and ``updatedAt: date``.

Only fields declared with an explicit ``type:`` key are picked up;
shorthand declarations such as ``name: String`` are skipped.
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

SCHEMA_MARKERS = (".Schema(", "new Schema(")

# mongoose.model('User', schema) -> "'User'" (first char after "(" must be
# a quote or other non-word char, so model(variable, ...) is ignored)
_MODEL_NAME_RE = re.compile(r"model\(\W([^,\n]*),")

# everything up to and including an ObjectId reference
_OBJECT_ID_RE = re.compile(r".*ObjectId")

# type: String / type: mongoose.Schema.Types.Mixed, bounded by , space } or
# end of line; array types (type: [String]) never match
_TYPE_RE = re.compile(r"\btype\s*:\s*([\w.$]+)(?=[,\s}]|$)")

_TIMESTAMPS_RE = re.compile(r"\btimestamps?\s*:\s*true\b")

_QUOTES = "'\"`"

TIMESTAMP_FIELDS = (
    FieldRecord(name="createdAt", type="date"),
    FieldRecord(name="updatedAt", type="date"),
)


def extract_document_schemas(
    source_file_name: str, file_text: str
) -> list[SchemaRecord]:
    """Extract the mongoose schema of a file (zero or one record)."""
    marker = _find_marker(file_text)
    if marker is None:
        return []

    block = extract_block(file_text, marker)
    if block is None:
        logger.debug("unbalanced schema block", file=source_file_name)
        return []

    table_name = find_model_name(file_text)
    if not table_name:
        logger.debug("no mongoose.model() name", file=source_file_name)
        return []

    flat = _flatten(block)
    fields = []
    for line in reflow(flat).split("\n"):
        field = parse_field_line(line)
        if field is not None:
            fields.append(field)

    if _TIMESTAMPS_RE.search(flat) or _options_enable_timestamps(
        file_text, marker, block
    ):
        fields.extend(TIMESTAMP_FIELDS)

    return [
        SchemaRecord(
            table_name=table_name,
            source_file_name=strip_extension(source_file_name),
            fields=tuple(fields),
        )
    ]


def _find_marker(file_text: str) -> str | None:
    found = [
        (file_text.find(m), m) for m in SCHEMA_MARKERS if m in file_text
    ]
    if not found:
        return None
    return min(found)[1]


def _flatten(block: str) -> str:
    return strip_comments(block).replace("\r", "").replace("\n", " ")


def find_model_name(file_text: str) -> str:
    """Return the name registered with ``model('Name', ...)`` or ''."""
    match = _MODEL_NAME_RE.search(file_text)
    if not match:
        return ""
    name = match.group(1)
    for q in _QUOTES:
        name = name.replace(q, "")
    return name.strip()


def reflow(flat_block: str) -> str:
    """Put every top-level field of a one-line block on its own line.

    A newline goes after the opening brace and after every brace that
    brings the nesting depth back to zero, so ``{ a: { x }, b: { y } }``
    becomes ``{``, `` a: { x }``, ``, b: { y }``, `` }``.
    """
    out: list[str] = []
    depth = 0
    for i, ch in enumerate(flat_block):
        out.append(ch)
        if i == 0 and ch == "{":
            out.append("\n")
            continue
        if ch == "{":
            depth += 1
        elif ch == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                out.append("\n")
    return "".join(out)


def parse_field_line(line: str) -> FieldRecord | None:
    """Parse one reflowed field line, e.g. ``name: { type: String }``."""
    line = _OBJECT_ID_RE.sub("", line, count=1).strip()
    line = line.lstrip(",").strip()
    if not line:
        return None

    match = _TYPE_RE.search(line)
    if not match:
        return None

    name = re.sub(r"^\W+|\W+$", "", line.split(":", 1)[0])
    if not name:
        return None
    return FieldRecord(name=name, type=lower_type(match.group(1)))


def _options_enable_timestamps(
    file_text: str, marker: str, block: str
) -> bool:
    # Schema({...}, { timestamps: true }) - the options object follows the
    # field block
    block_start = file_text.index("{", file_text.find(marker))
    rest = file_text[block_start + len(block) :]
    if not re.match(r"\s*,\s*\{", rest):
        return False
    options = extract_block(rest, "{")
    if options is None:
        return False
    return bool(_TIMESTAMPS_RE.search(strip_comments(options)))
