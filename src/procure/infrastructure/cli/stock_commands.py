"""CLI commands for stock movements and ledger checks."""

from __future__ import annotations

import click

from procure.application.adjust_stock import AdjustStockHandler
from procure.application.deduct_external_stock import DeductExternalStockHandler
from procure.application.reconcile_ledger import ReconcileLedgerHandler
from procure.application.schemas import (
    ExternalStockDeductionRequest,
    StockUpdateRequest,
    parse_request,
)
from procure.application.show_inventory import ShowInventoryHandler
from procure.application.update_stock import UpdateStockHandler
from procure.domain.model.movement import ReferenceType
from procure.infrastructure.cli.context import AppContext, cli_errors, echo_json, pass_app
from procure.infrastructure.cli.product_commands import display_products

_REFERENCE_TYPES = click.Choice([r.value for r in ReferenceType], case_sensitive=False)


def _update_options(fn):
    fn = click.option("--notes", default=None, help="Free-text notes.")(fn)
    fn = click.option("--source", "source_system", default=None, help="Source system label.")(fn)
    fn = click.option("--reference-id", default=None, type=int, help="ID of the causing document.")(fn)
    fn = click.option("--reference-type", default=None, type=_REFERENCE_TYPES, help="Business reason.")(fn)
    fn = click.option("--quantity", required=True, type=int, help="Units to move.")(fn)
    fn = click.option("--product-id", required=True, type=int, help="Product ID.")(fn)
    return fn


def _update_request(quantity, reference_type, reference_id, source_system, notes) -> dict:
    return {
        "quantity": quantity,
        "referenceType": reference_type.upper() if reference_type else None,
        "referenceId": reference_id,
        "sourceSystem": source_system,
        "notes": notes,
    }


@click.command("increase")
@_update_options
@pass_app
def stock_increase(app: AppContext, product_id: int, quantity: int, reference_type, reference_id, source_system, notes) -> None:
    """Increase a product's stock."""
    handler = UpdateStockHandler(app.uow(), app.audit())
    with cli_errors():
        request = parse_request(
            StockUpdateRequest,
            _update_request(quantity, reference_type, reference_id, source_system, notes),
        )
        dto = handler.increase(product_id, request, actor=app.actor)
    echo_json(dto.to_payload())


@click.command("decrease")
@_update_options
@pass_app
def stock_decrease(app: AppContext, product_id: int, quantity: int, reference_type, reference_id, source_system, notes) -> None:
    """Decrease a product's stock (never below zero)."""
    handler = UpdateStockHandler(app.uow(), app.audit())
    with cli_errors():
        request = parse_request(
            StockUpdateRequest,
            _update_request(quantity, reference_type, reference_id, source_system, notes),
        )
        dto = handler.decrease(product_id, request, actor=app.actor)
    echo_json(dto.to_payload())


@click.command("adjust")
@click.option("--product-id", required=True, type=int, help="Product ID.")
@click.option("--to", "new_stock", required=True, type=int, help="Counted stock level.")
@click.option("--notes", default=None, help="Reason for the adjustment.")
@pass_app
def stock_adjust(app: AppContext, product_id: int, new_stock: int, notes: str | None) -> None:
    """Set a product's stock to a counted value."""
    handler = AdjustStockHandler(app.uow(), app.audit())
    with cli_errors():
        dto = handler.handle(product_id, new_stock, notes=notes, actor=app.actor)
    echo_json(dto.to_payload())


@click.command("deduct")
@click.option("--code", "product_code", required=True, help="Product code.")
@click.option("--quantity", required=True, type=int, help="Units sold.")
@click.option("--source", "source_system", default=None, help="Calling system, default from settings.")
@click.option("--notes", default=None, help="Free-text notes.")
@pass_app
@click.pass_context
def stock_deduct(
    ctx: click.Context,
    app: AppContext,
    product_code: str,
    quantity: int,
    source_system: str | None,
    notes: str | None,
) -> None:
    """Deduct stock for an external sale. Exits 1 on an ERROR result."""
    handler = DeductExternalStockHandler(
        app.uow(),
        app.audit(),
        default_source_system=app.settings.default_source_system,
    )
    with cli_errors():
        request = parse_request(
            ExternalStockDeductionRequest,
            {
                "productCode": product_code,
                "quantity": quantity,
                "sourceSystem": source_system,
                "notes": notes,
            },
        )
        result = handler.handle(request, actor=app.actor)

    echo_json(result.to_payload())
    if not result.is_success:
        ctx.exit(1)


@click.command("history")
@click.option("--product-id", required=True, type=int, help="Product ID.")
@pass_app
def stock_history(app: AppContext, product_id: int) -> None:
    """Show a product's ledger, newest first."""
    with cli_errors():
        movements = ShowInventoryHandler(app.uow()).movement_history(product_id)

    if not movements:
        click.echo("No movements found.")
        return

    click.echo(f"{'ID':<6} {'When':<20} {'Type':<4} {'Qty':>7} {'Reference':<16} {'Source':<18} By")
    click.echo("-" * 84)
    for m in movements:
        reference = f"{m.reference_type or '-'}{f'#{m.reference_id}' if m.reference_id else ''}"
        click.echo(
            f"{m.id:<6} {m.created_at[:19]:<20} {m.movement_type:<4} {m.signed_quantity:>+7} "
            f"{reference:<16} {m.source_system or '-':<18} {m.created_by or '-'}"
        )


@click.command("reconcile")
@pass_app
@click.pass_context
def stock_reconcile(ctx: click.Context, app: AppContext) -> None:
    """Check every product's stock against its ledger. Exits 1 on a mismatch."""
    with cli_errors():
        report = ReconcileLedgerHandler(app.uow()).handle()

    echo_json(report.to_payload())
    if not report.all_balanced:
        ctx.exit(1)


@click.command("alerts")
@click.option(
    "--kind",
    type=click.Choice(["low", "out", "over"], case_sensitive=False),
    default="low",
    show_default=True,
    help="Which stock signal to list.",
)
@pass_app
def stock_alerts(app: AppContext, kind: str) -> None:
    """List active products with a stock signal."""
    handler = ShowInventoryHandler(app.uow())
    queries = {
        "low": handler.low_stock,
        "out": handler.out_of_stock,
        "over": handler.over_stock,
    }
    with cli_errors():
        products = queries[kind.lower()]()
    display_products(products)
