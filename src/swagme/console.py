"""Terminal output helpers (rich)."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape

_out = Console(highlight=False)
_err = Console(stderr=True, highlight=False)


def header(text: str) -> None:
    _out.print(f"[bold yellow]{escape(text)}[/bold yellow]")


def info(text: str) -> None:
    _out.print(f"[blue]{escape(text)}[/blue]")


def success(text: str) -> None:
    _out.print(f"[green]{escape(text)}[/green]")


def warning(text: str) -> None:
    _err.print(f"[yellow]warning:[/yellow] {escape(text)}")


def error(text: str) -> None:
    _err.print(f"[bold red]error:[/bold red] {escape(text)}")


def key_value(key: str, value: object, indent: int = 0) -> None:
    pad = " " * indent
    _out.print(f"{pad}[cyan]{escape(key)}:[/cyan] {escape(str(value))}")


@contextmanager
def status(text: str) -> Iterator[None]:
    with _out.status(escape(text)):
        yield
