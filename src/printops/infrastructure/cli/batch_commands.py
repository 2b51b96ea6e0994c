"""CLI commands for automation batches."""

from __future__ import annotations

from pathlib import Path

import click

from printops.application.delete_batch import DeleteBatchHandler
from printops.application.dto import BatchDTO
from printops.application.list_batches import ListBatchesHandler, ShowBatchHandler
from printops.application.submit_batch import SubmitBatchHandler
from printops.application.submit_manual_batch import SubmitManualBatchHandler
from printops.application.upload_file import UploadManualFileHandler
from printops.domain.exceptions import DomainException
from printops.domain.model.batch import AlgorithmType
from printops.domain.model.value_objects import Margins
from printops.infrastructure.bootstrap import (
    batch_repository,
    file_store,
    order_repository,
    packing_optimizer,
    product_repository,
    settings,
)
from printops.infrastructure.cli.context import current_session, fail


def _parse_ids(raw: str) -> list[str]:
    """Parse '3,7,12' into ['3', '7', '12']."""
    ids = [part.strip() for part in raw.split(",") if part.strip()]
    if not ids:
        raise click.BadParameter("Give at least one order ID, e.g. '3,7,12'.")
    return ids


def _display_batch(dto: BatchDTO) -> None:
    click.echo(f"Batch #{dto.id}  {dto.name}  ({dto.kind})")
    if dto.description:
        click.echo(f"  {dto.description}")
    click.echo(f"  Orders:  {', '.join(dto.order_ids)}")
    if dto.kind == "MANUAL":
        click.echo(f"  File:    {dto.file_url}")
    else:
        click.echo(f"  Sheet:   {dto.sheet_id}   Algorithm: {dto.algorithm}")
        click.echo(f"  Layout:  {dto.layout_type}, efficiency {dto.efficiency}")
    click.echo(f"  Created: {dto.created_at}")


@click.command("submit")
@click.option("--orders", "orders_str", required=True, help="Order IDs as '1,2,3'.")
@click.option("--sheet", "sheet_id", required=True, help="Sheet ID.")
@click.option("--bleed", default="0", help="Bleed in mm.")
@click.option("--rotations/--no-rotations", default=False, help="Allow 90° rotations.")
@click.option(
    "--algorithm",
    type=click.Choice([a.value for a in AlgorithmType], case_sensitive=False),
    default=AlgorithmType.BOTTOM_LEFT_FILL.value,
)
@click.option("--margins", nargs=4, type=float, default=(0, 0, 0, 0), help="TOP BOTTOM LEFT RIGHT in mm.")
@click.option("--name", default=None)
@click.option("--description", default=None)
@click.option("--timeout", type=float, default=None, help="Optimizer timeout in seconds.")
def batch_submit(
    orders_str: str,
    sheet_id: str,
    bleed: str,
    rotations: bool,
    algorithm: str,
    margins: tuple[float, float, float, float],
    name: str | None,
    description: str | None,
    timeout: float | None,
) -> None:
    """Send ACTIVE orders to the packing optimizer as one batch."""
    handler = SubmitBatchHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        batch_repo=batch_repository(),
        optimizer=packing_optimizer(),
        default_timeout=settings().optimizer_timeout,
    )

    try:
        dto = handler.handle(
            current_session(),
            _parse_ids(orders_str),
            sheet_id,
            bleed=bleed,
            rotations_allowed=rotations,
            algorithm=algorithm,
            margins=Margins.of(*margins),
            name=name,
            description=description,
            timeout=timeout,
        )
    except DomainException as exc:
        raise fail(exc)

    click.echo("Orders marked as AUTOMATED.")
    _display_batch(dto)


@click.command("upload")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def batch_upload(path: Path) -> None:
    """Upload a manual layout file (max 1 MB)."""
    handler = UploadManualFileHandler(file_store=file_store())

    try:
        dto = handler.handle(current_session(), path.name, path.read_bytes())
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"File URL: {dto.file_url}")


@click.command("manual")
@click.option("--orders", "orders_str", required=True, help="Order IDs as '1,2,3'.")
@click.option("--name", required=True)
@click.option("--description", default="")
@click.option("--file-url", required=True, help="Reference from 'batch upload'.")
def batch_manual(orders_str: str, name: str, description: str, file_url: str) -> None:
    """Record a manually produced layout for ACTIVE orders."""
    handler = SubmitManualBatchHandler(
        order_repo=order_repository(),
        batch_repo=batch_repository(),
        file_store=file_store(),
    )

    try:
        dto = handler.handle(current_session(), _parse_ids(orders_str), name, description, file_url)
    except DomainException as exc:
        raise fail(exc)

    click.echo("Orders marked as MANUALLY_AUTOMATED.")
    _display_batch(dto)


@click.command("list")
@click.option("--kind", type=click.Choice(["ALGORITHMIC", "MANUAL"], case_sensitive=False), default=None)
def batch_list(kind: str | None) -> None:
    """List batches."""
    dtos = ListBatchesHandler(batch_repo=batch_repository()).handle(kind)

    if not dtos:
        click.echo("No batches found.")
        return

    click.echo(f"{'ID':<6} {'Kind':<12} {'Name':<28} {'Orders':>6} {'Efficiency':>11}")
    click.echo("-" * 67)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.kind:<12} {dto.name:<28} {len(dto.order_ids):>6} {dto.efficiency or '-':>11}"
        )


@click.command("show")
@click.option("--id", "batch_id", required=True)
def batch_show(batch_id: str) -> None:
    """Show a batch."""
    try:
        dto = ShowBatchHandler(batch_repo=batch_repository()).handle(batch_id)
    except DomainException as exc:
        raise fail(exc)

    _display_batch(dto)


@click.command("delete")
@click.option("--id", "batch_id", required=True)
def batch_delete(batch_id: str) -> None:
    """Delete a batch record (order statuses are left unchanged)."""
    handler = DeleteBatchHandler(batch_repo=batch_repository())

    try:
        handler.handle(current_session(), batch_id)
    except DomainException as exc:
        raise fail(exc)

    click.echo(f"Batch #{batch_id} deleted.")
