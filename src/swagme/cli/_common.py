"""Shared configure/build workflow behind the CLI commands."""

from __future__ import annotations

from pathlib import Path

import structlog

from swagme import console
from swagme.builder import BuildOptions, build
from swagme.config import CONFIG_FILE, SwagmeConfig, load_config, save_config
from swagme.errors import ConfigError
from swagme.logging_config import configure_logging
from swagme.project import (
    detect_main_express_file,
    detect_orm,
    detect_project_type,
    read_package_json,
    schema_path_from_orm_config,
)
from swagme.prompts import PromptDefaults, ask_project_config

logger = structlog.get_logger(__name__)


def enable_debug(debug: bool) -> None:
    if debug:
        configure_logging(debug=True, force=True)


def output_flags(json_flag: bool, yaml_flag: bool) -> tuple[bool, bool]:
    """Neither flag given means both outputs."""
    if not json_flag and not yaml_flag:
        return True, True
    return json_flag, yaml_flag


def run_swagme(
    directory: Path,
    configure: bool,
    ask: bool,
    run_build: bool,
    options: BuildOptions,
) -> int:
    console.header("Swagme - swagger docs for Express and Next.js APIs")
    root = directory.resolve()
    package_json = read_package_json(root)
    deps = package_json["dependencies"]
    existing = load_config(root)

    project_type = detect_project_type(root, package_json)
    if project_type is None:
        console.warning("could not detect an Express or Next.js project")
    elif project_type == "nextjs" and "next" not in deps:
        console.warning("Next JS dependency not found")

    if "swagger-ui-express" not in deps:
        console.warning(
            "we recommend installing swagger-ui-express: "
            "npm install swagger-ui-express"
        )

    orm = detect_orm(root, package_json)
    main_file = (
        detect_main_express_file(root) if project_type == "express" else ""
    )
    if existing is not None and existing.name:
        console.key_value("config file detected", CONFIG_FILE)
    elif orm:
        console.info(f"{orm} detected")

    schema_default = (
        schema_path_from_orm_config(root, orm)
        if orm in ("prisma", "drizzle")
        else ""
    )
    defaults = PromptDefaults(
        project_type=project_type,
        package_json=package_json,
        existing=existing,
        main_file=main_file,
        orm=orm,
        schema_path=schema_default,
    )
    config = ask_project_config(defaults) if ask else defaults.initial()
    _validate(config)

    if config.database == "mongoose" and "mongoose" not in deps:
        console.warning(
            "could not find mongoose in package.json: npm install mongoose"
        )

    if configure:
        path = save_config(root, config)
        console.success(f"saved {path.name}")

    if run_build:
        with console.status("building swagger documentation"):
            result = build(root, config, project_type, options)
        for record in result.schemas:
            console.key_value("model added", record.table_name)
        for record in result.routes:
            console.key_value(
                "routes added", record.base_route or record.tag_name
            )
        for path in result.written:
            logger.debug("file written", path=str(path))

    console.success(f"{config.name} ({config.version}) has been Swagged!")
    return 0


def _validate(config: SwagmeConfig) -> None:
    if not config.name.strip():
        raise ConfigError("please make sure you enter the name")
    if not config.routes.strip():
        raise ConfigError("please make sure you enter the routes folder")
