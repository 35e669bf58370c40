"""Project detection and source discovery.

This is the only place that reads the scanned project's files; the
extractors receive plain text.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Literal

import structlog

from swagme.config import SwagmeConfig, project_path
from swagme.errors import ProjectError
from swagme.extract import SCHEMA_EXTRACTORS, extract_fs_routes, extract_routes
from swagme.extract.comments import load_swagger_comments
from swagme.records import RouteRecord, SchemaRecord

logger = structlog.get_logger(__name__)

ProjectType = Literal["express", "nextjs"]

NEXT_CONFIG_FILES = ("next.config.mjs", "next.config.js", "next.config.ts")
ORM_CONFIG_EXTENSIONS = (".ts", ".js")
SCRIPT_EXTENSIONS = (".ts", ".js")

DEFAULT_MAIN_FILE = "/src/index.js"
DEFAULT_SCHEMA_PATH = "/models"
DEFAULT_EXPRESS_ROUTES = "/routes"
DEFAULT_NEXT_ROUTES = "/pages/api"

# schema: "./src/db/schema.ts",
_ORM_SCHEMA_RE = re.compile(r"schema\s*:?\s*([^,\n]*),")


def read_package_json(root: Path) -> dict[str, Any]:
    path = root / "package.json"
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ProjectError(f"could not find package.json in {root}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ProjectError(f"could not read {path}: {e}") from e
    if not isinstance(data, dict) or not isinstance(
        data.get("dependencies"), dict
    ):
        raise ProjectError("dependencies not found in package.json")
    return data


def detect_project_type(
    root: Path, package_json: dict[str, Any]
) -> ProjectType | None:
    if any((root / name).exists() for name in NEXT_CONFIG_FILES):
        return "nextjs"
    if "express" in package_json.get("dependencies", {}):
        return "express"
    return None


def detect_orm(root: Path, package_json: dict[str, Any] | None = None) -> str:
    """``prisma``/``drizzle`` from their config file, else ``mongoose``."""
    for orm in ("prisma", "drizzle"):
        for ext in ORM_CONFIG_EXTENSIONS:
            if (root / f"{orm}.config{ext}").exists():
                return orm
    deps = (package_json or {}).get("dependencies", {})
    if "mongoose" in deps:
        return "mongoose"
    return ""


def detect_main_express_file(root: Path) -> str:
    """First top-level script that mounts something with ``.use(``."""
    for path in sorted(root.iterdir()):
        if not path.is_file() or path.suffix not in SCRIPT_EXTENSIONS:
            continue
        text = read_text(path)
        if text and ".use(" in text:
            logger.debug("main file detected", file=path.name)
            return f"/{path.name}"
    return DEFAULT_MAIN_FILE


def schema_path_from_orm_config(root: Path, orm: str) -> str:
    """Read ``schema: "..."`` from ``<orm>.config.{ts,js}``."""
    text = None
    for ext in ORM_CONFIG_EXTENSIONS:
        path = root / f"{orm}.config{ext}"
        if path.exists():
            text = read_text(path)
            break
    if text is None:
        logger.warning("could not read ORM config file", orm=orm)
        return DEFAULT_SCHEMA_PATH

    match = _ORM_SCHEMA_RE.search(text)
    if not match:
        return DEFAULT_SCHEMA_PATH
    value = match.group(1).strip().strip("\"'`")
    while value.startswith("./"):
        value = value[2:]
    return value or DEFAULT_SCHEMA_PATH


def read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("could not read file", path=str(path), error=str(e))
        return None


def _list_dir(folder: Path, what: str) -> list[Path]:
    if not folder.is_dir():
        raise ProjectError(f"{what} folder was not found: {folder}")
    return sorted(folder.iterdir())


def list_schema_files(root: Path, database: str, schema: str) -> list[Path]:
    """Schema source files for the configured ORM/ODM."""
    if not schema:
        return []

    if database == "mongoose":
        folder = project_path(root, schema)
        return [p for p in _list_dir(folder, "schema") if p.is_file()]

    if database == "prisma":
        if schema.endswith(".prisma"):
            return [project_path(root, schema)]
        files = []
        for entry in _list_dir(project_path(root, schema), "schema"):
            if entry.name == "migrations":
                continue
            if entry.is_file() and entry.suffix == ".prisma":
                files.append(entry)
            elif entry.is_dir():
                files.extend(
                    p
                    for p in sorted(entry.iterdir())
                    if p.is_file() and p.suffix == ".prisma"
                )
        return files

    if database == "drizzle":
        if "*" in schema:
            folder = project_path(root, schema[: schema.index("*")])
        elif schema.endswith(SCRIPT_EXTENSIONS):
            return [project_path(root, schema)]
        else:
            folder = project_path(root, schema)
        return [
            p
            for p in _list_dir(folder, "schema")
            if p.is_file() and p.suffix in SCRIPT_EXTENSIONS
        ]

    return []


def list_route_files(root: Path, routes: str) -> list[str]:
    folder = project_path(root, routes)
    return [p.name for p in _list_dir(folder, "routes") if p.is_file()]


def walk_api_files(api_root: Path) -> list[str]:
    """Every file under the API root as a posix path relative to it."""
    if not api_root.is_dir():
        raise ProjectError(f"routes folder was not found: {api_root}")
    return sorted(
        p.relative_to(api_root).as_posix()
        for p in api_root.rglob("*")
        if p.is_file() and p.suffix
    )


def scan_schemas(root: Path, config: SwagmeConfig) -> list[SchemaRecord]:
    extractor = SCHEMA_EXTRACTORS.get(config.database)
    if extractor is None:
        logger.debug("no schema dialect configured", database=config.database)
        return []

    records: list[SchemaRecord] = []
    for path in list_schema_files(root, config.database, config.schema_path):
        text = read_text(path)
        if text is None:
            continue
        found = extractor(path.name, text)
        if not found:
            logger.debug("no schema found", file=str(path))
        records.extend(found)
    return records


def scan_routes(
    root: Path, config: SwagmeConfig, project_type: ProjectType | None
) -> list[RouteRecord]:
    if project_type == "nextjs":
        api_root = project_path(root, config.routes or DEFAULT_NEXT_ROUTES)
        return extract_fs_routes(
            walk_api_files(api_root),
            lambda rel: read_text(api_root / rel),
        )

    if project_type == "express":
        main_path = project_path(root, config.main or DEFAULT_MAIN_FILE)
        if not main_path.is_file():
            raise ProjectError(f"main file was not found: {main_path}")
        main_text = read_text(main_path) or ""
        routes_dir = project_path(root, config.routes)
        return extract_routes(
            main_text,
            config.routes,
            list_route_files(root, config.routes),
            lambda name: read_text(routes_dir / name),
        )

    return []


def scan_swagger_comments(
    root: Path, config: SwagmeConfig, project_type: ProjectType | None
) -> dict[str, Any]:
    """Path items written by hand in ``@swagger`` comments of route files."""
    if project_type == "nextjs":
        api_root = project_path(root, config.routes or DEFAULT_NEXT_ROUTES)
        sources = [api_root / rel for rel in walk_api_files(api_root)]
    elif project_type == "express":
        routes_dir = project_path(root, config.routes)
        sources = [
            routes_dir / name for name in list_route_files(root, config.routes)
        ]
    else:
        return {}

    paths: dict[str, Any] = {}
    for path in sources:
        text = read_text(path)
        if text and "@swagger" in text:
            paths.update(load_swagger_comments(text, source=path.name))
    return paths
