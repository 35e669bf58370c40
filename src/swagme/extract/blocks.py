"""Shared text helpers for the extractors."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Optional, Union

# source text by file name, as a function or a plain mapping
FileReader = Union[Callable[[str], Optional[str]], Mapping[str, str]]

# string literals (kept as they are), then // line comments and /* block */
# comments; block comments may span lines, quoted strings may not
_COMMENT_RE = re.compile(
    r"('(?:\\.|[^'\\\n])*'"
    r'|"(?:\\.|[^"\\\n])*"'
    r"|`(?:\\.|[^`\\])*`)"
    r"|//[^\n]*|/\*.*?\*/",
    re.DOTALL,
)

SOURCE_EXTENSIONS = (
    ".ts",
    ".js",
    ".mjs",
    ".cjs",
    ".tsx",
    ".jsx",
    ".mts",
    ".cts",
    ".prisma",
)


def extract_block(text: str, marker: str) -> str | None:
    """Return the first balanced ``{...}`` block following ``marker``.

    Braces are counted, not stacked: the block closes at the first
    position where the number of ``{`` seen since the marker is non-zero
    and equals the number of ``}``. Returns None when the marker is
    missing or the braces never balance.

        >>> extract_block("x = Schema({ a: { b: 1 } }, opts)", "Schema(")
        '{ a: { b: 1 } }'
    """
    start = text.find(marker)
    if start == -1:
        return None

    open_count = 0
    close_count = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == "{":
            open_count += 1
        elif ch == "}":
            close_count += 1
        if open_count > 0 and open_count == close_count:
            block_start = text.index("{", start)
            return text[block_start : i + 1]
    return None


def strip_comments(text: str) -> str:
    """Remove ``//`` and ``/* */`` comments outside string literals.

        >>> strip_comments("get('/files/*', h) // list")
        "get('/files/*', h) "
    """
    return _COMMENT_RE.sub(lambda m: m.group(1) or "", text)


def strip_extension(name: str) -> str:
    """Drop a trailing source extension (``user.ts`` -> ``user``)."""
    for ext in SOURCE_EXTENSIONS:
        if name.endswith(ext) and len(name) > len(ext):
            return name[: -len(ext)]
    return name


def lower_type(token: str) -> str:
    """Lower a source type token to its wire form."""
    return token.strip().lower()
