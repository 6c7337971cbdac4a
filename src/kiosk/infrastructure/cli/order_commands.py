"""CLI commands for orders."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from kiosk.application.create_order import CreateOrderHandler
from kiosk.application.show_order import ShowOrderHandler
from kiosk.domain.exceptions import DomainException, OrderExpiredError
from kiosk.domain.model.drink import DrinkSelection
from kiosk.infrastructure.bootstrap import order_repository, price_table


def _format_ms(epoch_ms: int) -> str:
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


@click.command("create")
@click.option("--cacao", default=None, help="Cacao concentration, e.g. 70.")
@click.option("--iced", is_flag=True, default=False, help="Serve over ice.")
@click.option("--size", default=None, help="Cup size (M, L, XL).")
@click.option("--topping", is_flag=True, default=False, help="Add the chocolate topping.")
@click.option("--shots", type=int, default=None, help="Number of shots.")
def order_create(
    cacao: str | None,
    iced: bool,
    size: str | None,
    topping: bool,
    shots: int | None,
) -> None:
    """Create a new pending order."""
    selection = DrinkSelection.from_raw(
        cacao=cacao,
        is_iced=iced,
        size=size,
        has_topping=topping,
        shot_count=shots,
    )

    try:
        handler = CreateOrderHandler(
            order_repo=order_repository(),
            price_table=price_table(),
        )
        dto = handler.handle(selection)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_id} created  (price={dto.price:,})")
    click.echo(f"Expires: {_format_ms(dto.expires_at)}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID, e.g. VG-7Q2M0ZKA.")
def order_show(order_id: str) -> None:
    """Show a pending order."""
    try:
        handler = ShowOrderHandler(order_repo=order_repository())
        dto = handler.handle(order_id)
    except OrderExpiredError:
        raise click.ClickException(f"Order {order_id} has EXPIRED")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_id}  (status={dto.status})")
    click.echo(f"Created: {_format_ms(dto.created_at)}")
    click.echo(f"Expires: {_format_ms(dto.expires_at)}")
    click.echo()
    click.echo(f"  {'Cacao':<10} {dto.cacao_normalized:>10}")
    click.echo(f"  {'Iced':<10} {'yes' if dto.is_iced else 'no':>10}")
    click.echo(f"  {'Size':<10} {dto.size:>10}")
    click.echo(f"  {'Topping':<10} {'yes' if dto.has_topping else 'no':>10}")
    click.echo(f"  {'Shots':<10} {dto.shot_count:>10}")
    click.echo(f"  {'-'*21}")
    click.echo(f"  {'Price':<10} {dto.price:>10,}")
