"""
Atto CLI output helpers built on Click styling.

    success(), error(), warning(), info(), dim()   plain styled lines
    kv()                                           aligned key-value pair
    table()                                        minimal aligned table

click.style handles NO_COLOR and non-colour terminals.
"""

from __future__ import annotations

from typing import Optional, Sequence

import click

_L_H = "─"       # ─
_CHECK = "✓"     # ✓
_CROSS = "✗"     # ✗


def success(message: str) -> None:
    """Print success message in green."""
    click.echo(click.style(message, fg="green"))


def error(message: str) -> None:
    """Print error message in red, on stderr."""
    click.echo(click.style(message, fg="red"), err=True)


def warning(message: str) -> None:
    click.echo(click.style(message, fg="yellow"))


def info(message: str) -> None:
    click.echo(click.style(message, fg="cyan"))


def dim(message: str) -> None:
    click.echo(click.style(message, dim=True))


def kv(key: str, value: str, *, key_width: int = 12, indent: int = 2) -> None:
    """
    Print an aligned key-value pair.

        route:      blog
        page:       2
    """
    prefix = " " * indent
    padding = " " * max(1, key_width - len(key) - 1)
    click.echo(f"{prefix}{click.style(f'{key}:', fg='white')}{padding}{click.style(str(value), fg='cyan')}")


def table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    col_widths: Optional[Sequence[int]] = None,
    indent: int = 2,
) -> None:
    """
    Print a minimal aligned table.

        Name      Methods    Pattern
        ───────── ────────── ──────────────
        blog      ANY        /blog[/:page]
    """
    prefix = " " * indent

    if col_widths is None:
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row[:len(headers)]):
                widths[i] = max(widths[i], len(str(cell)))
        widths = [w + 2 for w in widths]
    else:
        widths = list(col_widths)

    header = "".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    click.echo(f"{prefix}{click.style(header, fg='cyan', bold=True)}")
    click.echo(f"{prefix}{click.style(''.join(_L_H * w for w in widths), dim=True)}")

    for row in rows:
        line = "".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row))
        click.echo(f"{prefix}{line.rstrip()}")
