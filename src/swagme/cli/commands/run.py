"""Run command - configure and build in one go."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import tyro

from swagme.builder import BuildOptions
from swagme.cli._common import enable_debug, output_flags, run_swagme


@dataclass
class Run:
    """Configure and/or build swagger documentation for a project."""

    directory: Annotated[Path, tyro.conf.Positional] = field(
        default_factory=Path.cwd,
        metadata={"help": "Project directory"},
    )
    auto: Annotated[bool, tyro.conf.arg(aliases=("-y",))] = field(
        default=False,
        metadata={"help": "Use detected/saved answers instead of asking"},
    )
    config: Annotated[bool, tyro.conf.arg(aliases=("-c",))] = field(
        default=False,
        metadata={"help": "Only write the config file"},
    )
    build: Annotated[bool, tyro.conf.arg(aliases=("-b",))] = field(
        default=False,
        metadata={"help": "Only build the docs and swagger files"},
    )
    routes: bool = field(
        default=True,
        metadata={"help": "Update routes"},
    )
    schemas: bool = field(
        default=True,
        metadata={"help": "Update schemas"},
    )
    scan: bool = field(
        default=False,
        metadata={"help": "Scan project files"},
    )
    json: bool = field(
        default=False,
        metadata={"help": "Only build swagger.json"},
    )
    yaml: bool = field(
        default=False,
        metadata={"help": "Only build swagger.yml"},
    )
    debug: bool = field(
        default=False,
        metadata={"help": "Enable debug logging"},
    )

    def run(self) -> int:
        """Execute the run command."""
        enable_debug(self.debug)
        neither = not self.config and not self.build
        json_out, yaml_out = output_flags(self.json, self.yaml)
        return run_swagme(
            self.directory,
            configure=neither or self.config,
            ask=not self.auto,
            run_build=neither or self.build,
            options=BuildOptions(
                json=json_out,
                yaml=yaml_out,
                schemas=self.schemas,
                routes=self.routes,
                scan=self.scan,
            ),
        )
