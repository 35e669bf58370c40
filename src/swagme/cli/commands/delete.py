"""Del command - remove generated docs and the config file."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import tyro

from swagme import console
from swagme.cli._common import enable_debug
from swagme.config import (
    CONFIG_FILE,
    delete_config,
    load_config,
    project_path,
)
from swagme.prompts import confirm_delete


@dataclass
class Delete:
    """Remove all swagme configuration files and folders."""

    directory: Annotated[
        Path, tyro.conf.arg(name="dir", aliases=("-p",))
    ] = field(
        default_factory=Path.cwd,
        metadata={"help": "Project directory"},
    )
    auto: Annotated[bool, tyro.conf.arg(aliases=("-y",))] = field(
        default=False,
        metadata={"help": "Delete without asking"},
    )
    debug: bool = field(
        default=False,
        metadata={"help": "Enable debug logging"},
    )

    def run(self) -> int:
        """Execute the del command."""
        enable_debug(self.debug)
        root = self.directory.resolve()
        config = load_config(root)
        if config is None or not config.name:
            console.error(f"could not find config file {CONFIG_FILE}")
            return 1

        if not self.auto and not confirm_delete():
            return 0

        docs_dir = project_path(root, config.docs)
        if docs_dir.is_dir() and docs_dir != root:
            shutil.rmtree(docs_dir)
            console.success(f"{docs_dir} has been removed")
        else:
            console.warning(f"could not find swagme folder: {docs_dir}")

        if delete_config(root):
            console.success(f"{CONFIG_FILE} has been removed")

        console.success(
            f"{config.name} ({config.version}) has been De-Swagged!"
        )
        return 0
