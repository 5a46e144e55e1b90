import click
import pydantic

from procure.infrastructure import bootstrap
from procure.infrastructure.cli.context import AppContext
from procure.infrastructure.cli.order_commands import (
    order_create,
    order_due_soon,
    order_list,
    order_overdue,
    order_receive,
    order_show,
    order_status,
)
from procure.infrastructure.cli.product_commands import (
    product_add,
    product_deactivate,
    product_list,
    product_show,
    product_update,
)
from procure.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_alerts,
    stock_decrease,
    stock_deduct,
    stock_history,
    stock_increase,
    stock_reconcile,
)
from procure.infrastructure.cli.supplier_commands import supplier_add, supplier_list
from procure.infrastructure.logging_config import configure_logging


@click.group()
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Directory holding the JSON store.")
@click.option("--actor", default=None, help="Identity recorded on movements and audit facts.")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines.")
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: str | None,
    actor: str | None,
    log_level: str | None,
    json_logs: bool,
) -> None:
    """Procure — purchase order receiving and stock ledger"""
    overrides = {
        key: value
        for key, value in {
            "data_dir": data_dir,
            "actor": actor,
            "log_level": log_level,
            "json_logs": json_logs or None,
        }.items()
        if value is not None
    }
    try:
        settings = bootstrap.load_settings(**overrides)
    except pydantic.ValidationError as exc:
        raise click.UsageError(f"Invalid configuration: {exc}")

    configure_logging(settings.log_level, settings.json_logs)
    ctx.obj = AppContext(settings=settings, actor=settings.actor)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def supplier() -> None:
    """Manage suppliers."""


@cli.group()
def order() -> None:
    """Manage purchase orders and receive goods."""


@cli.group()
def stock() -> None:
    """Stock movements, deductions and ledger checks."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_deactivate)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
supplier.add_command(supplier_add)
supplier.add_command(supplier_list)
order.add_command(order_create)
order.add_command(order_due_soon)
order.add_command(order_list)
order.add_command(order_overdue)
order.add_command(order_receive)
order.add_command(order_show)
order.add_command(order_status)
stock.add_command(stock_adjust)
stock.add_command(stock_alerts)
stock.add_command(stock_decrease)
stock.add_command(stock_deduct)
stock.add_command(stock_history)
stock.add_command(stock_increase)
stock.add_command(stock_reconcile)
