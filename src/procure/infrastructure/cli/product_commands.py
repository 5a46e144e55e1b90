"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from procure.application.add_product import AddProductHandler
from procure.application.dto import ProductDTO
from procure.application.show_inventory import ShowInventoryHandler
from procure.application.update_product import (
    DeactivateProductHandler,
    UpdateProductHandler,
)
from procure.infrastructure.cli.context import AppContext, cli_errors, echo_json, pass_app


def display_products(products: list[ProductDTO]) -> None:
    """Shared table layout for product listings."""
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Code':<12} {'Name':<24} {'Price':>10} {'Stock':>7} {'Min':>5}  Flags")
    click.echo("-" * 76)
    for p in products:
        flags = ",".join(
            name
            for name, on in (
                ("inactive", not p.active),
                ("out", p.out_of_stock),
                ("low", p.low_stock and not p.out_of_stock),
                ("over", p.over_stock),
            )
            if on
        )
        click.echo(
            f"{p.id:<6} {p.code:<12} {p.name:<24} {p.unit_price:>10} "
            f"{p.current_stock:>7} {p.min_stock:>5}  {flags}"
        )


@click.command("add")
@click.option("--code", required=True, help="Unique product code.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--stock", "initial_stock", default=0, type=int, help="Opening stock, posted as an adjustment.")
@click.option("--min-stock", default=0, type=int, help="Low-stock threshold.")
@click.option("--max-stock", default=None, type=int, help="Over-stock threshold.")
@click.option("--description", default=None, help="Free-text description.")
@pass_app
def product_add(
    app: AppContext,
    code: str,
    name: str,
    price: str,
    initial_stock: int,
    min_stock: int,
    max_stock: int | None,
    description: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(app.uow(), app.audit())

    with cli_errors():
        dto = handler.handle(
            code=code,
            name=name,
            unit_price=price,
            initial_stock=initial_stock,
            min_stock=min_stock,
            max_stock=max_stock,
            description=description,
            actor=app.actor,
        )

    click.echo(f"Product #{dto.id} '{dto.code}' added at {dto.unit_price} (stock={dto.current_stock})")


@click.command("list")
@click.option("--all", "include_inactive", is_flag=True, help="Include deactivated products.")
@pass_app
def product_list(app: AppContext, include_inactive: bool) -> None:
    """List products in the catalog."""
    handler = ShowInventoryHandler(app.uow())
    with cli_errors():
        products = handler.list_products(include_inactive=include_inactive)
    display_products(products)


@click.command("show")
@click.option("--id", "product_id", type=int, default=None, help="Product ID.")
@click.option("--code", default=None, help="Product code.")
@pass_app
def product_show(app: AppContext, product_id: int | None, code: str | None) -> None:
    """Show one product as JSON."""
    if (product_id is None) == (code is None):
        raise click.UsageError("Pass exactly one of --id or --code.")

    handler = ShowInventoryHandler(app.uow())
    with cli_errors():
        dto = (
            handler.get_product(product_id)
            if product_id is not None
            else handler.get_product_by_code(code)  # type: ignore[arg-type]
        )
    echo_json(dto.to_payload())


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New unit price.")
@click.option("--min-stock", default=None, type=int, help="New low-stock threshold.")
@click.option("--max-stock", default=None, type=int, help="New over-stock threshold.")
@click.option("--description", default=None, help="New description.")
@pass_app
def product_update(
    app: AppContext,
    product_id: int,
    name: str | None,
    price: str | None,
    min_stock: int | None,
    max_stock: int | None,
    description: str | None,
) -> None:
    """Update catalog details (never the stock)."""
    handler = UpdateProductHandler(app.uow(), app.audit())
    changes: dict = {}
    if max_stock is not None:
        changes["max_stock"] = max_stock
    if description is not None:
        changes["description"] = description

    with cli_errors():
        dto = handler.handle(
            product_id=product_id,
            name=name,
            unit_price=price,
            min_stock=min_stock,
            actor=app.actor,
            **changes,
        )

    click.echo(f"Product #{dto.id} '{dto.code}' updated")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@pass_app
def product_deactivate(app: AppContext, product_id: int) -> None:
    """Deactivate a product (soft delete)."""
    handler = DeactivateProductHandler(app.uow(), app.audit())
    with cli_errors():
        dto = handler.handle(product_id, actor=app.actor)
    click.echo(f"Product #{dto.id} '{dto.code}' deactivated")
