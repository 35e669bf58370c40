"""swagme.config.json handling."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from swagme.errors import ConfigError

logger = structlog.get_logger(__name__)

CONFIG_FILE = "swagme.config.json"

Authorization = Literal["bearer", "basic", "none"]
Database = Literal["mongoose", "prisma", "drizzle", "unknown"]


class SwagmeConfig(BaseModel):
    """Answers collected for a project, saved next to its package.json.

    Folder values (``main``, ``schema``, ``routes``, ``docs``) are relative
    to the project root and may carry a leading ``/`` (``/routes``).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    version: str = "1.0.0"
    description: str = ""
    authorization: Authorization = "none"
    baseurl: str = "http://localhost:3000"
    main: str = ""
    database: Database = "unknown"
    schema_path: str = Field(default="", alias="schema")
    routes: str = "/routes"
    docs: str = "/docs"
    gitignore: bool = True

    @field_validator("authorization", mode="before")
    @classmethod
    def _lower_authorization(cls, value: object) -> object:
        if value is None or value == "":
            return "none"
        return value.lower() if isinstance(value, str) else value

    @field_validator("database", mode="before")
    @classmethod
    def _lower_database(cls, value: object) -> object:
        if value is None or value == "":
            return "unknown"
        return value.lower() if isinstance(value, str) else value

    def to_json(self) -> str:
        return json.dumps(self.model_dump(by_alias=True), indent=2) + "\n"


def project_path(root: Path, value: str) -> Path:
    """Resolve a config folder value (``/routes``, ``./routes``) under root."""
    rel = value.replace("\\", "/").strip()
    while rel.startswith("./"):
        rel = rel[2:]
    rel = rel.lstrip("/")
    return root / rel if rel else root


def config_path(root: Path) -> Path:
    return root / CONFIG_FILE


def load_config(root: Path) -> SwagmeConfig | None:
    """Load the project's config; None when there is none yet."""
    path = config_path(root)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    try:
        return SwagmeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid {CONFIG_FILE}: {e}") from e


def save_config(root: Path, config: SwagmeConfig) -> Path:
    path = config_path(root)
    path.write_text(config.to_json(), encoding="utf-8")
    logger.debug("config written", path=str(path))
    return path


def delete_config(root: Path) -> bool:
    path = config_path(root)
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("config file not found", path=str(path))
        return False
    return True
