"""CLI commands for catalog and user lookups."""

from __future__ import annotations

import click

from printops.application.estimate_price import EstimatePriceHandler
from printops.application.dto import OrderInput
from printops.application.show_catalog import (
    DescribeOrderFormHandler,
    ListStaffHandler,
    ShowCatalogHandler,
)
from printops.domain.exceptions import DomainException
from printops.domain.model.catalog import CostItem, PageSize, PaperConfig, Sheet
from printops.domain.model.product import Product
from printops.infrastructure.bootstrap import pricing_engine, product_repository, user_repository
from printops.infrastructure.cli.context import fail
from printops.infrastructure.cli.order_commands import parse_finishings


def _describe(item) -> str:
    if isinstance(item, Product):
        return f"{item.id:<6} {item.name:<24} base {item.base_price}/unit"
    if isinstance(item, PageSize):
        return f"{item.id:<6} {item.name:<24} {item.width}x{item.height}mm  {item.applicability.value}"
    if isinstance(item, PaperConfig):
        return f"{item.id:<6} {item.label:<24} +{item.associated_cost}/unit  {item.applicability.value}"
    if isinstance(item, CostItem):
        return f"{item.id:<6} {item.type.value + ':' + item.value:<24} +{item.associated_cost}/unit"
    if isinstance(item, Sheet):
        return f"{item.id:<6} {item.name:<24} {item.width}x{item.height}mm"
    return str(item)


@click.command("list")
@click.argument("kind", type=click.Choice(list(ShowCatalogHandler.KINDS)))
def catalog_list(kind: str) -> None:
    """List products, sizes, papers, cost-items or sheets."""
    items = ShowCatalogHandler(product_repo=product_repository()).handle(kind)

    if not items:
        click.echo(f"No {kind} found.")
        return
    for item in items:
        click.echo(_describe(item))


@click.command("enums")
def catalog_enums() -> None:
    """List applicability values and cost-item types."""
    enums = ShowCatalogHandler.enums()
    click.echo(f"Applicability:   {', '.join(enums.applicability)}")
    click.echo(f"Cost item types: {', '.join(enums.cost_item_types)}")


@click.command("form")
@click.option("--product", required=True, help="Product name.")
def catalog_form(product: str) -> None:
    """Show the order-form fields a product requires."""
    try:
        fields = DescribeOrderFormHandler(product_repo=product_repository()).handle(product)
    except DomainException as exc:
        raise fail(exc)

    for f in fields:
        line = f"  {f.name:<18}"
        if f.options:
            line += f" one of: {', '.join(f.options)}"
        if f.default is not None:
            line += f"  (auto-selected: {f.default})"
        click.echo(line)


@click.command("estimate")
@click.option("--product", required=True)
@click.option("--quantity", required=True, type=int)
@click.option("--paper", "paper_config", required=True)
@click.option("--side", "printing_side", default="SINGLE", type=click.Choice(["SINGLE", "DOUBLE"], case_sensitive=False))
@click.option("--size", "size_id", default=None)
@click.option("--width", type=float, default=None)
@click.option("--height", type=float, default=None)
@click.option("--finishing", multiple=True, help="Finishing as 'TYPE=value'; repeatable.")
def catalog_estimate(
    product: str,
    quantity: int,
    paper_config: str,
    printing_side: str,
    size_id: str | None,
    width: float | None,
    height: float | None,
    finishing: tuple[str, ...],
) -> None:
    """Price an order without creating it."""
    order_input = OrderInput(
        product_name=product,
        quantity=quantity,
        paper_config=paper_config,
        printing_side=printing_side.upper(),
        quality=300,
        additional_note="estimate",
        size_id=size_id,
        width=width,
        height=height,
        finishings=parse_finishings(finishing),
    )
    handler = EstimatePriceHandler(product_repo=product_repository(), pricing=pricing_engine())

    try:
        quote = handler.handle(order_input)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"  {'Base':<14} {quote.base:>10}")
    click.echo(f"  {'Paper':<14} {quote.paper:>10}")
    click.echo(f"  {'Size (area)':<14} {quote.size_area:>10.4f}")
    click.echo(f"  {'Printing side':<14} {quote.side:>10}")
    click.echo(f"  {'Finishings':<14} {quote.finishings:>10}")
    click.echo(f"  {'-'*25}")
    click.echo(f"  {'Per unit':<14} {quote.unit_price:>10.4f}")
    click.echo(f"  {'x Quantity':<14} {quote.quantity:>10}")
    click.echo(f"  {'Total':<14} {str(quote.total):>10}")


@click.command("staff")
def user_staff() -> None:
    """List staff members orders can be assigned to."""
    staff = ListStaffHandler(user_repo=user_repository()).handle()

    if not staff:
        click.echo("No staff found.")
        return
    for member in staff:
        click.echo(f"{member.id:<8} {member.username:<20} {member.role.value}")
