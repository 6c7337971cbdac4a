import logging

import click
from dotenv import load_dotenv

from kiosk.domain.exceptions import DomainException
from kiosk.infrastructure.bootstrap import price_table, settings, web_app
from kiosk.infrastructure.cli.order_commands import order_create, order_show


@click.group()
@click.option("--log-level", default=None, help="Override KIOSK_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """kiosk: drink order service for the beverage stand"""
    load_dotenv()
    try:
        level = (log_level or settings().log_level).upper()
    except DomainException as exc:
        raise click.ClickException(str(exc))
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.command("prices")
def prices() -> None:
    """Show the active price table."""
    try:
        table = price_table()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{'Tier':<10} {'Base':>8}")
    click.echo("-" * 19)
    for tier, amount in table.base_prices.items():
        click.echo(f"{tier:<10} {amount:>8,}")
    click.echo()
    click.echo(f"{'Size':<10} {'Addon':>8}")
    click.echo("-" * 19)
    for size, amount in table.size_addons.items():
        click.echo(f"{size:<10} {amount:>8,}")
    click.echo()
    click.echo(f"{'Iced':<10} {table.ice_addon:>8,}")
    click.echo(f"{'Topping':<10} {table.topping_addon:>8,}")
    for shots, amount in sorted(table.shot_addons.items()):
        click.echo(f"{f'{shots} shots':<10} {amount:>8,}")


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default KIOSK_HOST).")
@click.option("--port", type=int, default=None, help="Port (default KIOSK_PORT or 8787).")
def serve(host: str | None, port: int | None) -> None:
    """Run the order HTTP API."""
    try:
        cfg = settings()
        app = web_app(cfg)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    logging.getLogger(__name__).info(
        "Order server listening on %s (backend=%s)", port or cfg.port, cfg.store_backend
    )
    app.run(host=host or cfg.host, port=port or cfg.port)


# Register subcommands
order.add_command(order_create)
order.add_command(order_show)
