import logging

import click

from printops.infrastructure.bootstrap import settings
from printops.infrastructure.cli.batch_commands import (
    batch_delete,
    batch_list,
    batch_manual,
    batch_show,
    batch_submit,
    batch_upload,
)
from printops.infrastructure.cli.catalog_commands import (
    catalog_enums,
    catalog_estimate,
    catalog_form,
    catalog_list,
    user_staff,
)
from printops.infrastructure.cli.order_commands import (
    order_approve,
    order_assign,
    order_cancel,
    order_complete,
    order_create,
    order_delete,
    order_list,
    order_show,
    order_update_quantity,
    order_upload,
)


@click.group()
@click.option("--as-user", envvar="PRINTOPS_USER", default=None, help="Acting user ID.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging.")
@click.pass_context
def cli(ctx: click.Context, as_user: str | None, verbose: bool) -> None:
    """printops: print order lifecycle and batch automation"""
    ctx.ensure_object(dict)
    ctx.obj["as_user"] = as_user
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings().log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def batch() -> None:
    """Automate orders in batches."""


@cli.group()
def catalog() -> None:
    """Browse the product catalog."""


@cli.group()
def user() -> None:
    """Look up users."""


# Register subcommands
order.add_command(order_approve)
order.add_command(order_assign)
order.add_command(order_cancel)
order.add_command(order_complete)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_update_quantity)
order.add_command(order_upload)
batch.add_command(batch_delete)
batch.add_command(batch_list)
batch.add_command(batch_manual)
batch.add_command(batch_show)
batch.add_command(batch_submit)
batch.add_command(batch_upload)
catalog.add_command(catalog_enums)
catalog.add_command(catalog_estimate)
catalog.add_command(catalog_form)
catalog.add_command(catalog_list)
user.add_command(user_staff)
