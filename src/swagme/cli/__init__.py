"""swagme CLI - generate swagger docs for Express and Next.js projects.

Uses tyro for type-driven CLI generation from dataclasses.
"""

from __future__ import annotations

import sys
from typing import Annotated

import tyro

from swagme.cli.commands.build import Build
from swagme.cli.commands.configure import Configure
from swagme.cli.commands.delete import Delete
from swagme.cli.commands.run import Run

_Run = Annotated[Run, tyro.conf.subcommand("run")]
_Configure = Annotated[Configure, tyro.conf.subcommand("config")]
_Build = Annotated[Build, tyro.conf.subcommand("build")]
_Delete = Annotated[Delete, tyro.conf.subcommand("del")]

Command = _Run | _Configure | _Build | _Delete


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    # configure structlog (respects SWAGME_DEBUG env var)
    from swagme.logging_config import configure_logging

    configure_logging()
    args = sys.argv[1:] if argv is None else argv

    try:
        if not args:
            # bare `swagme` asks, configures, scans and builds
            cmd = Run(scan=True)
        else:
            cmd = tyro.cli(
                Command,
                prog="swagme",
                description="Generate swagger documentation for Express "
                "and Next.js projects.",
                args=args,
            )
        return cmd.run()
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        return 130
    except Exception as e:
        from swagme import console

        console.error(str(e))
        return 1
