"""Build command - regenerate docs and swagger files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import tyro

from swagme.builder import BuildOptions
from swagme.cli._common import enable_debug, output_flags, run_swagme


@dataclass
class Build:
    """Generate swagger documentation from the saved config."""

    directory: Annotated[
        Path, tyro.conf.arg(name="dir", aliases=("-p",))
    ] = field(
        default_factory=Path.cwd,
        metadata={"help": "Project directory"},
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
        """Execute the build command."""
        enable_debug(self.debug)
        json_out, yaml_out = output_flags(self.json, self.yaml)
        return run_swagme(
            self.directory,
            configure=False,
            ask=False,
            run_build=True,
            options=BuildOptions(
                json=json_out,
                yaml=yaml_out,
                schemas=self.schemas,
                routes=self.routes,
                scan=self.scan,
            ),
        )
