"""``@swagger`` JSDoc blocks.

    /**
     * @swagger
     * /users:
     *   get:
     *     summary: List users
     */

Each block's lines (from the ``@swagger`` line to the closing ``*/``) are
returned as YAML text with the comment decoration removed.
"""

from __future__ import annotations

from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)


def extract_swagger_comments(text: str) -> list[str]:
    blocks = []
    start: int | None = None
    lines = text.split("\n")

    for i, line in enumerate(lines):
        if "@swagger" in line:
            start = i
        elif start is not None and "*/" in line:
            cleaned = [
                lines[j]
                .replace("@swagger", "", 1)
                .replace("*/", "", 1)
                .replace("*", "", 1)
                for j in range(start, i + 1)
            ]
            blocks.append("\n".join(cleaned) + "\n")
            start = None
    return blocks


def load_swagger_comments(text: str, source: str = "") -> dict[str, Any]:
    """Parse every ``@swagger`` block of ``text`` and merge the mappings."""
    merged: dict[str, Any] = {}
    for block in extract_swagger_comments(text):
        try:
            data = yaml.safe_load(block)
        except yaml.YAMLError as e:
            logger.warning(
                "invalid @swagger block", source=source, error=str(e)
            )
            continue
        if not isinstance(data, dict):
            logger.warning("@swagger block is not a mapping", source=source)
            continue
        for path, item in data.items():
            if isinstance(item, dict) and isinstance(merged.get(path), dict):
                merged[path] = {**merged[path], **item}
            else:
                merged[path] = item
    return merged
