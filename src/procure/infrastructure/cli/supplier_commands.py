"""CLI commands for suppliers."""

from __future__ import annotations

import click

from procure.application.add_supplier import AddSupplierHandler, ListSuppliersHandler
from procure.infrastructure.cli.context import AppContext, cli_errors, pass_app


@click.command("add")
@click.option("--name", required=True, help="Supplier name.")
@click.option("--contact", "contact_person", default=None, help="Contact person.")
@click.option("--email", default=None, help="Contact email.")
@click.option("--phone", default=None, help="Contact phone.")
@click.option("--address", default=None, help="Postal address.")
@pass_app
def supplier_add(
    app: AppContext,
    name: str,
    contact_person: str | None,
    email: str | None,
    phone: str | None,
    address: str | None,
) -> None:
    """Register a supplier."""
    handler = AddSupplierHandler(app.uow(), app.audit())
    with cli_errors():
        dto = handler.handle(
            name=name,
            contact_person=contact_person,
            email=email,
            phone=phone,
            address=address,
            actor=app.actor,
        )
    click.echo(f"Supplier #{dto.id} '{dto.name}' added")


@click.command("list")
@pass_app
def supplier_list(app: AppContext) -> None:
    """List suppliers."""
    with cli_errors():
        suppliers = ListSuppliersHandler(app.uow()).handle()

    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<28} {'Email':<28} Active")
    click.echo("-" * 70)
    for s in suppliers:
        click.echo(f"{s.id:<6} {s.name:<28} {s.email or '':<28} {'yes' if s.active else 'no'}")
