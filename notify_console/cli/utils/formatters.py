"""Colored status lines for CLI output."""

import click


def _emit(symbol: str, message: str, color: str, *, err: bool = False) -> None:
    click.secho(f"{symbol} {message}", fg=color, err=err)


def success(message: str) -> None:
    _emit("✓", message, "green")


def error(message: str) -> None:
    """Print a red error line on stderr."""
    _emit("✗", message, "red", err=True)


def warning(message: str) -> None:
    _emit("⚠", message, "yellow")


def info(message: str) -> None:
    _emit("ℹ", message, "blue")


def header(message: str) -> None:
    """Print a bold section title preceded by a blank line."""
    click.secho(f"\n{message}", fg="cyan", bold=True)


def detail(label: str, value: object, width: int = 12) -> None:
    """Print an indented ``label: value`` line."""
    click.echo(f"  {label + ':':<{width}} {value}")
