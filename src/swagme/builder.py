"""Docs folder and swagger file generation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from swagme.config import CONFIG_FILE, SwagmeConfig, project_path
from swagme.errors import ProjectError
from swagme.openapi import (
    dump_json,
    dump_yaml,
    paths_document,
    schema_document,
    swagger_document,
)
from swagme.project import (
    ProjectType,
    scan_routes,
    scan_schemas,
    scan_swagger_comments,
)
from swagme.records import RouteRecord, SchemaRecord

logger = structlog.get_logger(__name__)

SWAGGER_JSON = "swagger.json"
SWAGGER_YAML = "swagger.yml"
COMMENTS_DOC = "swagger-comments.json"

README = """# Swagme

Generated by swagme.

- `schemas/` holds one OpenAPI schema file per model file.
- `routes/` holds one OpenAPI paths file per route file.

Edit these files by hand and run `swagme build` (without `--scan`) to
rebuild swagger.json / swagger.yml from them.
"""

GITIGNORE_HEADER = "# Ignore Swagme Files"


@dataclass
class BuildOptions:
    json: bool = True
    yaml: bool = True
    schemas: bool = True
    routes: bool = True
    scan: bool = True


@dataclass
class BuildResult:
    schemas: list[SchemaRecord] = field(default_factory=list)
    routes: list[RouteRecord] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)


def create_docs_folder(docs_dir: Path) -> None:
    try:
        for folder in (docs_dir, docs_dir / "schemas", docs_dir / "routes"):
            folder.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProjectError(f"could not create {docs_dir}: {e}") from e


def write_readme(docs_dir: Path) -> Path:
    path = docs_dir / "README.md"
    path.write_text(README, encoding="utf-8")
    return path


def _write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


def write_schema_files(
    docs_dir: Path, records: list[SchemaRecord]
) -> list[Path]:
    """One ``schemas/<file>.json`` per source file.

    A prisma file holds several models, so records sharing a source file
    are merged into the same document.
    """
    docs: dict[str, dict[str, Any]] = {}
    for record in records:
        docs.setdefault(record.source_file_name, {}).update(
            schema_document(record)
        )
    return [
        _write_json(docs_dir / "schemas" / f"{name}.json", doc)
        for name, doc in docs.items()
    ]


def write_route_files(
    docs_dir: Path, records: list[RouteRecord], authorization: str = "none"
) -> list[Path]:
    return [
        _write_json(
            docs_dir / "routes" / f"{record.source_file_name}.json",
            paths_document(record, authorization),
        )
        for record in records
    ]


def merge_paths(target: dict[str, Any], incoming: dict[str, Any]) -> None:
    """Merge path items, method by method."""
    for path, item in incoming.items():
        current = target.get(path)
        if isinstance(current, dict) and isinstance(item, dict):
            target[path] = {**current, **item}
        else:
            target[path] = item


def _load_json_docs(folder: Path) -> list[dict[str, Any]]:
    if not folder.is_dir():
        return []
    docs = []
    # hand-written @swagger paths go last so they win over scanned ones
    files = sorted(
        folder.glob("*.json"), key=lambda p: (p.name == COMMENTS_DOC, p.name)
    )
    for path in files:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("skipping docs file", path=str(path), error=str(e))
            continue
        if isinstance(data, dict):
            docs.append(data)
    return docs


def load_docs_folder(
    docs_dir: Path,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Collect ``(schemas, paths)`` from every JSON file in the docs folder."""
    schemas: dict[str, Any] = {}
    for doc in _load_json_docs(docs_dir / "schemas"):
        schemas.update(doc)
    paths: dict[str, Any] = {}
    for doc in _load_json_docs(docs_dir / "routes"):
        merge_paths(paths, doc)
    return schemas, paths


def write_swagger_files(
    root: Path,
    config: SwagmeConfig,
    docs_dir: Path,
    json_output: bool = True,
    yaml_output: bool = True,
) -> list[Path]:
    schemas, paths = load_docs_folder(docs_dir)
    doc = swagger_document(config, schemas, paths)

    written = []
    if json_output:
        path = root / SWAGGER_JSON
        path.write_text(dump_json(doc), encoding="utf-8")
        written.append(path)
    if yaml_output:
        path = root / SWAGGER_YAML
        path.write_text(dump_yaml(doc), encoding="utf-8")
        written.append(path)
    return written


def update_gitignore(root: Path, docs: str, enabled: bool = True) -> bool:
    """Append the docs folder and config file to .gitignore when missing."""
    if not enabled:
        return False
    path = root / ".gitignore"
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("could not find .gitignore file", path=str(path))
        return False

    docs_entry = "/" + project_path(Path(), docs).as_posix()
    if docs_entry in content and CONFIG_FILE in content:
        return False

    with path.open("a", encoding="utf-8") as f:
        f.write(f"\n\n{GITIGNORE_HEADER}\n{docs_entry}\n{CONFIG_FILE}\n")
    return True


def build(
    root: Path,
    config: SwagmeConfig,
    project_type: ProjectType | None,
    options: BuildOptions | None = None,
) -> BuildResult:
    """Scan the project (when asked) and regenerate docs and swagger files."""
    options = options or BuildOptions()
    result = BuildResult()
    docs_dir = project_path(root, config.docs)

    if options.scan:
        if options.schemas:
            result.schemas = scan_schemas(root, config)
        if options.routes:
            result.routes = scan_routes(root, config, project_type)

    create_docs_folder(docs_dir)
    result.written.append(write_readme(docs_dir))

    if options.scan and options.schemas:
        result.written.extend(write_schema_files(docs_dir, result.schemas))
    if options.scan and options.routes:
        result.written.extend(
            write_route_files(docs_dir, result.routes, config.authorization)
        )
        comments = scan_swagger_comments(root, config, project_type)
        if comments:
            result.written.append(
                _write_json(docs_dir / "routes" / COMMENTS_DOC, comments)
            )

    update_gitignore(root, config.docs, config.gitignore)

    if options.json or options.yaml:
        result.written.extend(
            write_swagger_files(
                root, config, docs_dir, options.json, options.yaml
            )
        )
    return result
