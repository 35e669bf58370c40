"""Interactive questions for building a SwagmeConfig."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rich.prompt import Confirm, Prompt

from swagme.config import SwagmeConfig
from swagme.project import (
    DEFAULT_EXPRESS_ROUTES,
    DEFAULT_NEXT_ROUTES,
    DEFAULT_SCHEMA_PATH,
    ProjectType,
)

AUTHORIZATION_CHOICES = ["none", "bearer", "basic"]
DATABASE_CHOICES = ["mongoose", "prisma", "drizzle"]


@dataclass
class PromptDefaults:
    """What's known about the project before asking anything."""

    project_type: ProjectType | None
    package_json: dict[str, Any]
    existing: SwagmeConfig | None = None
    main_file: str = ""
    orm: str = ""
    schema_path: str = ""

    def initial(self) -> SwagmeConfig:
        """Config to fall back on: saved answers first, then detection."""
        if self.existing is not None and self.existing.name:
            return self.existing
        pkg = self.package_json
        return SwagmeConfig(
            name=pkg.get("name") or "",
            version=pkg.get("version") or "1.0.0",
            description=pkg.get("description") or "",
            main=self.main_file,
            database=self.orm or "unknown",
            schema=self.schema_path or DEFAULT_SCHEMA_PATH,
            routes=(
                DEFAULT_NEXT_ROUTES
                if self.project_type == "nextjs"
                else DEFAULT_EXPRESS_ROUTES
            ),
        )


def ask_project_config(defaults: PromptDefaults) -> SwagmeConfig:
    base = defaults.initial()
    nextjs = defaults.project_type == "nextjs"
    api_kind = "Next JS" if nextjs else "Express"

    answers: dict[str, Any] = {
        "name": Prompt.ask(f"Name of {api_kind} API", default=base.name),
        "version": Prompt.ask("Version", default=base.version),
        "description": Prompt.ask(
            "Project description", default=base.description
        ),
        "authorization": Prompt.ask(
            "Authorization type",
            choices=AUTHORIZATION_CHOICES,
            default=base.authorization,
        ),
        "baseurl": Prompt.ask("Base URL", default=base.baseurl),
    }
    if not nextjs:
        answers["main"] = Prompt.ask(
            "Path where you've defined your express app "
            "(e.g. 'const app = express();')",
            default=base.main,
        )
    answers["database"] = Prompt.ask(
        "Choose database, ODM or ORM",
        choices=DATABASE_CHOICES,
        default=(
            base.database if base.database in DATABASE_CHOICES else "mongoose"
        ),
    )
    answers["schema"] = Prompt.ask(
        "Where is the folder for your schemas or models? "
        "(leave blank to skip models)",
        default=base.schema_path,
    )
    answers["routes"] = Prompt.ask(
        "Where is the folder for your routes?", default=base.routes
    )
    answers["docs"] = Prompt.ask(
        "Where to put the swagme files?", default=base.docs
    )
    answers["gitignore"] = Confirm.ask(
        "Git ignore swagme files and folders?", default=base.gitignore
    )
    return SwagmeConfig.model_validate(answers)


def confirm_delete() -> bool:
    return Confirm.ask(
        "Are you sure you want to delete swagme files and folders?",
        default=False,
    )
