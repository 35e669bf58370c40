"""Config command - write swagme.config.json only."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import tyro

from swagme.builder import BuildOptions
from swagme.cli._common import enable_debug, run_swagme


@dataclass
class Configure:
    """Generate the swagme configuration file."""

    directory: Annotated[
        Path, tyro.conf.arg(name="dir", aliases=("-p",))
    ] = field(
        default_factory=Path.cwd,
        metadata={"help": "Project directory"},
    )
    auto: Annotated[bool, tyro.conf.arg(aliases=("-y",))] = field(
        default=False,
        metadata={"help": "Use detected answers instead of asking"},
    )
    debug: bool = field(
        default=False,
        metadata={"help": "Enable debug logging"},
    )

    def run(self) -> int:
        """Execute the config command."""
        enable_debug(self.debug)
        return run_swagme(
            self.directory,
            configure=True,
            ask=not self.auto,
            run_build=False,
            options=BuildOptions(scan=False),
        )
