import click

from petshop.domain.model.caller import Caller, Role
from petshop.infrastructure.cli.order_commands import order_list, order_reap, order_show
from petshop.infrastructure.cli.product_commands import (
    product_create,
    product_list,
    product_update,
)
from petshop.infrastructure.log_config import bind_caller, configure_logging

ROLE_NAMES = {"user": Role.USER, "admin": Role.ADMIN}


def resolve_caller(user_id: int | None, roles: tuple[str, ...]) -> Caller | None:
    """Build the caller from the identity options; None when anonymous."""
    if user_id is None:
        return None
    return Caller.of(user_id, *(ROLE_NAMES[r] for r in roles))


@click.group()
@click.option("--user-id", type=int, default=None, envvar="PETSHOP_USER_ID", help="Acting user ID.")
@click.option(
    "--role",
    "roles",
    multiple=True,
    type=click.Choice(sorted(ROLE_NAMES), case_sensitive=False),
    help="Role held by the acting user (repeatable).",
)
@click.pass_context
def cli(ctx: click.Context, user_id: int | None, roles: tuple[str, ...]) -> None:
    """Petshop — orders and product catalog"""
    configure_logging()
    bind_caller(user_id)
    ctx.obj = resolve_caller(user_id, tuple(r.lower() for r in roles))


@cli.group()
def order() -> None:
    """Manage orders and carts."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


# Register subcommands
order.add_command(order_list)
order.add_command(order_reap)
order.add_command(order_show)
product.add_command(product_create)
product.add_command(product_list)
product.add_command(product_update)
