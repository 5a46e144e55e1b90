"""CLI commands for purchase orders."""

from __future__ import annotations

import json
from datetime import date

import click

from procure.application.create_order import CreateOrderHandler
from procure.application.dto import OrderDTO, OrderLineSpec
from procure.application.receive_order import ReceiveOrderHandler
from procure.application.schemas import ReceiveOrderRequest, parse_request
from procure.application.show_order import OrderAlertsHandler, ShowOrderHandler
from procure.application.update_order_status import UpdateOrderStatusHandler
from procure.infrastructure.cli.context import AppContext, cli_errors, echo_json, pass_app


def _parse_date(raw: str | None, option: str) -> date | None:
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise click.BadParameter(f"Invalid date '{raw}'. Expected YYYY-MM-DD.", param_hint=option)


def _parse_lines(raw_lines: tuple[str, ...]) -> list[OrderLineSpec]:
    """Parse 'PRODUCT_ID:QTY[:PRICE]' values into OrderLineSpec list."""
    specs: list[OrderLineSpec] = []
    for raw in raw_lines:
        parts = raw.split(":")
        if len(parts) not in (2, 3):
            raise click.BadParameter(
                f"Invalid line '{raw}'. Expected 'ProductId:Quantity[:UnitPrice]'.",
                param_hint="--line",
            )
        try:
            product_id, qty = int(parts[0]), int(parts[1])
        except ValueError:
            raise click.BadParameter(
                f"Invalid product id or quantity in '{raw}'.", param_hint="--line"
            )
        specs.append(
            OrderLineSpec(
                product_id=product_id,
                quantity=qty,
                unit_price=parts[2] if len(parts) == 3 else None,
            )
        )
    return specs


def _parse_received(raw_lines: tuple[str, ...]) -> list[dict]:
    """Parse 'DETAIL_ID:QTY' values into receivedDetails entries."""
    details: list[dict] = []
    for raw in raw_lines:
        if ":" not in raw:
            raise click.BadParameter(
                f"Invalid line '{raw}'. Expected 'OrderDetailId:Quantity'.",
                param_hint="--line",
            )
        detail_id, qty = raw.split(":", 1)
        try:
            details.append({"orderDetailId": int(detail_id), "quantityReceived": int(qty)})
        except ValueError:
            raise click.BadParameter(
                f"Invalid detail id or quantity in '{raw}'.", param_hint="--line"
            )
    return details


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number} (#{dto.id})  status={dto.status}"
               + ("  OVERDUE" if dto.overdue else ""))
    click.echo(f"Supplier: {dto.supplier_name}")
    click.echo(f"Ordered:  {dto.order_date}   Expected: {dto.expected_date or '-'}"
               f"   Received: {dto.received_date or '-'}")
    click.echo()
    click.echo(
        f"  {'Line':<6} {'Code':<12} {'Product':<20} {'Ordered':>8} "
        f"{'Received':>9} {'Pending':>8} {'Price':>10} {'Total':>10}"
    )
    click.echo(f"  {'-'*88}")
    for line in dto.lines:
        click.echo(
            f"  {line.id:<6} {line.product_code:<12} {line.product_name:<20} "
            f"{line.quantity_ordered:>8} {line.quantity_received:>9} "
            f"{line.quantity_pending:>8} {line.unit_price:>10} {line.total_price:>10}"
        )
    click.echo(f"  {'-'*88}")
    click.echo(f"  {'Order Total':<30} {dto.total_amount:>58}")


def _display_order_list(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return
    click.echo(f"{'ID':<6} {'Number':<16} {'Supplier':<20} {'Status':<10} {'Expected':<11} {'Total':>12}")
    click.echo("-" * 80)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.order_number:<16} {o.supplier_name:<20} {o.status:<10} "
            f"{o.expected_date or '-':<11} {o.total_amount:>12}"
        )


@click.command("create")
@click.option("--number", "order_number", required=True, help="Unique order number.")
@click.option("--supplier-id", required=True, type=int, help="Supplier ID.")
@click.option("--line", "lines", required=True, multiple=True, help="'ProductId:Qty[:UnitPrice]', repeatable.")
@click.option("--order-date", default=None, help="Order date (YYYY-MM-DD), default today.")
@click.option("--expected", "expected_date", default=None, help="Expected delivery date (YYYY-MM-DD).")
@click.option("--notes", default=None, help="Free-text notes.")
@pass_app
def order_create(
    app: AppContext,
    order_number: str,
    supplier_id: int,
    lines: tuple[str, ...],
    order_date: str | None,
    expected_date: str | None,
    notes: str | None,
) -> None:
    """Create a new purchase order (status PENDING)."""
    specs = _parse_lines(lines)
    handler = CreateOrderHandler(app.uow(), app.audit())

    with cli_errors():
        dto = handler.handle(
            order_number=order_number,
            supplier_id=supplier_id,
            line_specs=specs,
            order_date=_parse_date(order_date, "--order-date"),
            expected_date=_parse_date(expected_date, "--expected"),
            notes=notes,
            actor=app.actor,
        )

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", type=int, default=None, help="Order ID.")
@click.option("--number", "order_number", default=None, help="Order number.")
@click.option("--json", "as_json", is_flag=True, help="Print the order as JSON.")
@pass_app
def order_show(app: AppContext, order_id: int | None, order_number: str | None, as_json: bool) -> None:
    """Show details of an existing order."""
    if (order_id is None) == (order_number is None):
        raise click.UsageError("Pass exactly one of --id or --number.")

    handler = ShowOrderHandler(app.uow())
    with cli_errors():
        dto = (
            handler.handle(order_id)
            if order_id is not None
            else handler.by_number(order_number)  # type: ignore[arg-type]
        )

    if as_json:
        echo_json(dto.to_payload())
    else:
        _display_order(dto)


@click.command("list")
@click.option("--status", default=None, help="Only orders in this status.")
@pass_app
def order_list(app: AppContext, status: str | None) -> None:
    """List purchase orders."""
    with cli_errors():
        orders = ShowOrderHandler(app.uow()).list_orders(status)
    _display_order_list(orders)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, help="CONFIRMED, PARTIAL, COMPLETED or CANCELLED.")
@click.option("--notes", default=None, help="Reason, appended to the order notes.")
@pass_app
def order_status(app: AppContext, order_id: int, new_status: str, notes: str | None) -> None:
    """Move an order to another status by hand."""
    handler = UpdateOrderStatusHandler(app.uow(), app.audit())
    with cli_errors():
        dto = handler.handle(order_id, new_status, notes=notes, actor=app.actor)
    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("receive")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--line", "lines", multiple=True, help="'OrderDetailId:Qty', repeatable.")
@click.option("--payload", type=click.File("r"), default=None, help="Receive-order request as JSON ('-' for stdin).")
@click.option("--date", "received_date", default=None, help="Received date (YYYY-MM-DD), default today.")
@click.option("--notes", default=None, help="Receipt notes.")
@click.option("--key", "idempotency_key", default=None, help="Idempotency key; a retried batch with the same key is not applied twice.")
@pass_app
def order_receive(
    app: AppContext,
    order_id: int,
    lines: tuple[str, ...],
    payload,
    received_date: str | None,
    notes: str | None,
    idempotency_key: str | None,
) -> None:
    """Record goods received against an order and print the receipt summary."""
    if bool(lines) == (payload is not None):
        raise click.UsageError("Pass either --line options or --payload.")

    if payload is not None:
        try:
            data = json.load(payload)
        except json.JSONDecodeError as exc:
            raise click.BadParameter(f"Not valid JSON: {exc}", param_hint="--payload")
    else:
        data = {"receivedDetails": _parse_received(lines)}
        if received_date is not None:
            data["receivedDate"] = received_date
        if notes is not None:
            data["notes"] = notes
        if idempotency_key is not None:
            data["idempotencyKey"] = idempotency_key

    handler = ReceiveOrderHandler(app.uow(), app.audit())
    with cli_errors():
        request = parse_request(ReceiveOrderRequest, data)
        summary = handler.handle(order_id, request, actor=app.actor)

    echo_json(summary.to_payload())


@click.command("overdue")
@pass_app
def order_overdue(app: AppContext) -> None:
    """List open orders past their expected date."""
    with cli_errors():
        orders = OrderAlertsHandler(app.uow()).overdue()
    _display_order_list(orders)


@click.command("due-soon")
@click.option("--days", default=7, type=int, show_default=True, help="Days ahead to look.")
@pass_app
def order_due_soon(app: AppContext, days: int) -> None:
    """List open orders expected within the next N days."""
    with cli_errors():
        orders = OrderAlertsHandler(app.uow()).due_within(days)
    _display_order_list(orders)
