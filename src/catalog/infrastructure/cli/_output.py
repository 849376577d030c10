"""Shared output helpers for the CLI commands."""

from __future__ import annotations

import click

from catalog.application.dto import ProductView
from catalog.infrastructure.errors import error_body


def failure(exc: Exception) -> click.ClickException:
    """Turn a failure into a ClickException carrying its status line.

    Errors outside the domain hierarchy come out as ``500 INTERNAL_SERVER_ERROR``.
    """
    body = error_body(exc)
    return click.ClickException(f"{body['status']}: {body['error']}")


def echo_table(entries: list[tuple[str, ProductView]]) -> None:
    if not entries:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<24} {'Name':<20} {'Category':<13} {'Price':>10} {'Qty':>6}")
    click.echo("-" * 77)
    for product_id, v in entries:
        click.echo(
            f"{product_id:<24} {v.name:<20} {v.category:<13} {str(v.price):>10} {v.qty:>6}"
        )


def echo_view(view: ProductView) -> None:
    click.echo(f"Name:     {view.name}")
    click.echo(f"Category: {view.category}")
    click.echo(f"Price:    {view.price}")
    click.echo(f"Qty:      {view.qty}")
