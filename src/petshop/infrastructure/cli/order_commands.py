"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from petshop.application.list_orders import ListOrdersHandler
from petshop.application.reap_carts import ReapCartsHandler
from petshop.application.show_order import ShowOrderHandler
from petshop.domain.exceptions import DomainException
from petshop.infrastructure.bootstrap import cart_retention_days, order_repository
from petshop.infrastructure.cli.envelope import fail, respond


@click.command("list")
@click.option("--status", default=None, help="cart, open, pending, closed or cancelled.")
@click.pass_obj
def order_list(caller, status: str | None) -> None:
    """List your orders (administrators see every order)."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        result = handler.handle(caller, status=status)
    except DomainException as exc:
        fail(exc)

    if not result.count:
        respond(False, "No orders found.")
        return

    respond(
        True,
        "Here are the orders.",
        {"count": result.count, "status": result.applied_filter, "orders": result.orders},
    )


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(caller, order_id: int) -> None:
    """Show details of an order, with its lines."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(caller, order_id)
    except DomainException as exc:
        fail(exc)

    respond(True, f"Order #{order_id}.", {"order": dto})


@click.command("reap")
@click.option(
    "--retention-days",
    type=click.IntRange(min=0),
    default=None,
    help="Idle days an anonymous cart is kept (default from PETSHOP_CART_RETENTION_DAYS).",
)
@click.pass_obj
def order_reap(caller, retention_days: int | None) -> None:
    """Delete anonymous carts idle for longer than the retention window."""
    handler = ReapCartsHandler(
        order_repo=order_repository(),
        retention_days=cart_retention_days(),
    )

    try:
        result = handler.handle(caller, retention_days=retention_days)
    except DomainException as exc:
        fail(exc)

    respond(
        True,
        "Stale carts have been deleted.",
        {"reclaimed_count": result.reclaimed_count},
    )
