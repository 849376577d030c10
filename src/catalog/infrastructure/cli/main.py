import click

from catalog.config.logging import configure_logging
from catalog.config.settings import CatalogSettings
from catalog.infrastructure.cli.manage_commands import (
    manage_add,
    manage_delete,
    manage_list,
    manage_show,
    manage_update,
)
from catalog.infrastructure.cli.message_commands import message_replay, message_send
from catalog.infrastructure.cli.product_commands import product_list, product_show


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=None, help="Enable debug logging.")
@click.option("--log-json", is_flag=True, default=None, help="Emit logs as JSON lines.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool | None, log_json: bool | None) -> None:
    """Product catalog service"""
    settings = CatalogSettings.from_cli(verbose=verbose, log_json=log_json)
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    ctx.obj = settings


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def manage() -> None:
    """Manage products (ADMIN role required)."""


@cli.group()
def message() -> None:
    """Feed broker messages to the consumers."""


# Register subcommands
product.add_command(product_list)
product.add_command(product_show)
manage.add_command(manage_add)
manage.add_command(manage_delete)
manage.add_command(manage_list)
manage.add_command(manage_show)
manage.add_command(manage_update)
message.add_command(message_replay)
message.add_command(message_send)
