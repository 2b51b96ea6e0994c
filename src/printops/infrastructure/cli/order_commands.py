"""CLI commands for the Order aggregate."""

from __future__ import annotations

from pathlib import Path

import click

from printops.application.approve_order import ApproveOrderHandler
from printops.application.assign_order import AssignOrderHandler
from printops.application.cancel_order import CancelOrderHandler
from printops.application.complete_order import CompleteOrderHandler
from printops.application.create_order import CreateOrderHandler
from printops.application.delete_order import DeleteOrderHandler
from printops.application.dto import OrderDTO, OrderInput
from printops.application.list_orders import ListOrdersHandler
from printops.application.show_order import ShowOrderHandler
from printops.application.update_order_quantity import UpdateOrderQuantityHandler
from printops.application.upload_file import UploadDesignFileHandler
from printops.domain.exceptions import DomainException
from printops.infrastructure.bootstrap import (
    file_store,
    image_inspector,
    order_repository,
    pricing_engine,
    product_repository,
    user_repository,
)
from printops.infrastructure.cli.context import current_session, fail


def parse_finishings(raw: tuple[str, ...]) -> dict[str, str]:
    """Parse ('LAMINATION=matte', 'UV=spot') into {type: value}."""
    result: dict[str, str] = {}
    for pair in raw:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid finishing '{pair}'. Expected 'TYPE=value'."
            )
        cost_type, value = pair.split("=", 1)
        result[cost_type.strip().upper()] = value.strip()
    return result


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Raised by: {dto.raised_by}   Assigned to: {dto.raised_to or 'Unassigned'}")
    click.echo(f"Created:   {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {dto.product_name}")
    click.echo(f"  {'Size':<20} {dto.size}")
    click.echo(f"  {'Paper':<20} {dto.paper_config}")
    click.echo(f"  {'Printing side':<20} {dto.printing_side}")
    for cost_type, value in dto.finishings.items():
        click.echo(f"  {cost_type.title():<20} {value}")
    click.echo(f"  {'Quantity':<20} {dto.quantity}")
    click.echo(f"  {'-'*40}")
    click.echo(f"  {'Net amount':<20} {dto.net_amount}")


@click.command("create")
@click.option("--product", required=True, help="Product name.")
@click.option("--quantity", required=True, type=int, help="Number of units.")
@click.option("--paper", "paper_config", required=True, help="Paper config ID or TYPE-GSM.")
@click.option("--side", "printing_side", required=True, type=click.Choice(["SINGLE", "DOUBLE"], case_sensitive=False))
@click.option("--quality", required=True, type=float, help="Scan resolution (dpi).")
@click.option("--note", "additional_note", required=True, help="Additional note for the press.")
@click.option("--size", "size_id", default=None, help="Page size ID (fills width/height).")
@click.option("--width", type=float, default=None, help="Width in mm.")
@click.option("--height", type=float, default=None, help="Height in mm.")
@click.option("--file-url", default="", help="Design file reference from 'order upload'.")
@click.option("--finishing", multiple=True, help="Finishing as 'TYPE=value'; repeatable.")
@click.option("--delivery-address", default=None)
@click.option("--delivery-date", default=None, help="YYYY-MM-DD, must be in the future.")
def order_create(
    product: str,
    quantity: int,
    paper_config: str,
    printing_side: str,
    quality: float,
    additional_note: str,
    size_id: str | None,
    width: float | None,
    height: float | None,
    file_url: str,
    finishing: tuple[str, ...],
    delivery_address: str | None,
    delivery_date: str | None,
) -> None:
    """Create a new print order."""
    order_input = OrderInput(
        product_name=product,
        quantity=quantity,
        paper_config=paper_config,
        printing_side=printing_side.upper(),
        quality=quality,
        width=width,
        height=height,
        size_id=size_id,
        additional_note=additional_note,
        file_url=file_url,
        finishings=parse_finishings(finishing),
        delivery_address=delivery_address,
        delivery_date=delivery_date,
    )
    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        pricing=pricing_engine(),
    )

    try:
        dto = handler.handle(current_session(), order_input)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise fail(exc)

    _display_order(dto)


@click.command("list")
@click.option("--status", default=None, help="Only orders in this status.")
def order_list(status: str | None) -> None:
    """List orders, optionally by status."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        dtos = handler.handle(status)
    except DomainException as exc:
        raise fail(exc)

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Qty':>6} {'Status':<20} {'Amount':>16}")
    click.echo("-" * 72)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.product_name:<20} {dto.quantity:>6} {dto.status:<20} {dto.net_amount:>16}"
        )


@click.command("approve")
@click.option("--id", "order_id", required=True, help="Order ID to approve.")
def order_approve(order_id: str) -> None:
    """Approve a pending order (moves it to ACTIVE)."""
    handler = ApproveOrderHandler(order_repo=order_repository())

    try:
        handler.handle(current_session(), order_id)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order #{order_id} approved, now ACTIVE.")


@click.command("assign")
@click.option("--id", "order_id", required=True, help="Order ID to assign.")
@click.option("--staff", "staff_id", required=True, help="Staff user ID.")
def order_assign(order_id: str, staff_id: str) -> None:
    """Assign an order to a staff member."""
    handler = AssignOrderHandler(order_repo=order_repository(), user_repo=user_repository())

    try:
        handler.handle(current_session(), order_id, staff_id)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order #{order_id} assigned to {staff_id}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
def order_cancel(order_id: str) -> None:
    """Cancel a pending or active order."""
    handler = CancelOrderHandler(order_repo=order_repository())

    try:
        handler.handle(current_session(), order_id)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order #{order_id} cancelled.")


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Cancelled order ID.")
def order_delete(order_id: str) -> None:
    """Mark a cancelled order as DELETED."""
    handler = DeleteOrderHandler(order_repo=order_repository())

    try:
        handler.handle(current_session(), order_id)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order #{order_id} marked as DELETED.")


@click.command("complete")
@click.option("--id", "order_id", required=True, help="Automated order ID.")
def order_complete(order_id: str) -> None:
    """Mark an automated order as COMPLETED."""
    handler = CompleteOrderHandler(order_repo=order_repository())

    try:
        handler.handle(current_session(), order_id)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order #{order_id} completed.")


@click.command("update-quantity")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
def order_update_quantity(order_id: str, quantity: int) -> None:
    """Change quantity, re-price, and set the order back to ACTIVE."""
    handler = UpdateOrderQuantityHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        pricing=pricing_engine(),
    )

    try:
        handler.handle(current_session(), order_id, quantity)
        dto = ShowOrderHandler(order_repo=order_repository()).handle(order_id)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Order #{order_id} quantity updated to {dto.quantity}, now {dto.status}, {dto.net_amount}.")


@click.command("upload")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def order_upload(path: Path) -> None:
    """Upload a design image; prints its reference and resolution."""
    handler = UploadDesignFileHandler(file_store=file_store(), inspector=image_inspector())

    try:
        dto = handler.handle(current_session(), path.name, path.read_bytes())
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"File URL: {dto.file_url}")
    click.echo(f"Image:    {dto.width}x{dto.height} {dto.format}, {dto.density} dpi")
