"""CLI commands for product management.

Every command takes the caller's role and refuses to run unless it is
ADMIN, before touching the store.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from catalog.application.add_product import AddProductHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.dto import ProductView
from catalog.application.list_products import ListProductsHandler
from catalog.application.show_product import ShowProductHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.config.settings import CatalogSettings
from catalog.domain.exceptions import AccessDenied
from catalog.domain.model.access import require_access
from catalog.domain.model.product import ProductCategory, ProductPatch
from catalog.infrastructure.bootstrap import product_repository
from catalog.infrastructure.cli._output import echo_table, echo_view, failure

role_option = click.option(
    "--role",
    envvar="CATALOG_ROLE",
    required=True,
    help="Caller role (X-User-Role). Only ADMIN may manage products.",
)


def _parse_price(raw: str | None) -> Decimal | None:
    if raw is None:
        return None
    try:
        price = Decimal(raw)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid price '{raw}'.", param_hint="--price")
    if not price.is_finite():
        raise click.BadParameter(f"Invalid price '{raw}'.", param_hint="--price")
    return price


@click.command("list")
@role_option
@click.pass_obj
def manage_list(settings: CatalogSettings, role: str) -> None:
    """List all products with their IDs."""
    try:
        require_access(role)
        entries = ListProductsHandler(product_repository(settings)).handle_with_ids()
    except Exception as exc:
        raise failure(exc) from exc

    echo_table(entries)


@click.command("show")
@click.argument("product_id")
@role_option
@click.pass_obj
def manage_show(settings: CatalogSettings, product_id: str, role: str) -> None:
    """Show one product."""
    try:
        require_access(role)
        view = ShowProductHandler(product_repository(settings)).handle(product_id)
    except Exception as exc:
        raise failure(exc) from exc

    echo_view(view)


@click.command("add")
@click.option("--name", required=True, help="Product name (unique).")
@click.option(
    "--category",
    required=True,
    type=click.Choice([c.value for c in ProductCategory], case_sensitive=False),
    help="Product category.",
)
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--qty", required=True, type=int, help="Units in stock.")
@role_option
@click.pass_obj
def manage_add(
    settings: CatalogSettings, name: str, category: str, price: str, qty: int, role: str
) -> None:
    """Add a new product to the catalog."""
    try:
        require_access(role)
        handler = AddProductHandler(product_repo=product_repository(settings))
        product = handler.handle(name=name, category=category, price=price, qty=qty)
    except Exception as exc:
        raise failure(exc) from exc

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("update")
@click.argument("product_id")
@click.option("--name", default=None, help="New name.")
@click.option(
    "--category",
    default=None,
    type=click.Choice([c.value for c in ProductCategory], case_sensitive=False),
    help="New category.",
)
@click.option("--price", default=None, help="New price; ignored unless positive.")
@click.option("--qty", default=None, type=int, help="New stock; ignored unless positive.")
@role_option
@click.pass_obj
def manage_update(
    settings: CatalogSettings,
    product_id: str,
    name: str | None,
    category: str | None,
    price: str | None,
    qty: int | None,
    role: str,
) -> None:
    """Update some fields of a product."""
    try:
        require_access(role)
    except AccessDenied as exc:
        raise failure(exc) from exc

    patch = ProductPatch(
        name=name,
        category=ProductCategory.parse(category) if category else None,
        price=_parse_price(price),
        qty=qty,
    )
    try:
        handler = UpdateProductHandler(product_repo=product_repository(settings))
        view: ProductView = handler.handle(product_id, patch)
    except Exception as exc:
        raise failure(exc) from exc

    click.echo(f"Product {product_id} updated")
    echo_view(view)


@click.command("delete")
@click.argument("product_id")
@role_option
@click.pass_obj
def manage_delete(settings: CatalogSettings, product_id: str, role: str) -> None:
    """Delete a product."""
    try:
        require_access(role)
        DeleteProductHandler(product_repository(settings)).handle(product_id)
    except Exception as exc:
        raise failure(exc) from exc

    click.echo(f"Product {product_id} deleted")
