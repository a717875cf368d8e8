"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from petshop.application.create_product import CreateProductHandler
from petshop.application.list_products import ListProductsHandler
from petshop.application.update_product import UpdateProductHandler
from petshop.domain.exceptions import DomainException
from petshop.domain.model.product import EDITABLE_FIELDS
from petshop.infrastructure.bootstrap import product_repository
from petshop.infrastructure.cli.envelope import fail, respond


def product_field_options(func):
    """Add one raw string option per editable product attribute.

    Values are passed through untyped; the domain validator does the
    coercion so the CLI and any other client get the same errors.
    """
    for name in reversed(EDITABLE_FIELDS):
        flag = "--" + name.replace("_", "-")
        func = click.option(flag, name, default=None, help=f"Product {name.replace('_', ' ')}.")(func)
    return func


def _supplied(options: dict[str, str | None]) -> dict[str, str]:
    return {name: value for name, value in options.items() if value is not None}


@click.command("create")
@product_field_options
@click.pass_obj
def product_create(caller, **options: str | None) -> None:
    """Add a new product to the catalog (administrators only)."""
    handler = CreateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(caller, _supplied(options))
    except DomainException as exc:
        fail(exc)

    respond(True, "Product created.", {"product": dto})


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@product_field_options
@click.pass_obj
def product_update(caller, product_id: int, **options: str | None) -> None:
    """Change the supplied attributes of a product (administrators only)."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(caller, product_id, _supplied(options))
    except DomainException as exc:
        fail(exc)

    respond(True, "Product updated.", {"product": dto})


@click.command("list")
@click.pass_obj
def product_list(caller) -> None:
    """List the products in the catalog."""
    products = ListProductsHandler(product_repo=product_repository()).handle(caller)
    respond(True, "Here are the products.", {"count": len(products), "products": products})
