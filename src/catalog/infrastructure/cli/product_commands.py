"""CLI commands for browsing the catalog (no role required)."""

from __future__ import annotations

import click

from catalog.application.list_products import ListProductsHandler
from catalog.application.show_product import ShowProductHandler
from catalog.config.settings import CatalogSettings
from catalog.infrastructure.bootstrap import product_repository
from catalog.infrastructure.cli._output import echo_table, echo_view, failure


@click.command("list")
@click.pass_obj
def product_list(settings: CatalogSettings) -> None:
    """List all products in the catalog."""
    try:
        handler = ListProductsHandler(product_repo=product_repository(settings))
        entries = handler.handle_with_ids()
    except Exception as exc:
        raise failure(exc) from exc

    echo_table(entries)


@click.command("show")
@click.argument("product_id")
@click.pass_obj
def product_show(settings: CatalogSettings, product_id: str) -> None:
    """Show one product."""
    try:
        handler = ShowProductHandler(product_repo=product_repository(settings))
        view = handler.handle(product_id)
    except Exception as exc:
        raise failure(exc) from exc

    echo_view(view)
