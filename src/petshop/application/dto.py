"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Decimal amounts and
timestamps are rendered as strings so a DTO serializes to JSON as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from petshop.domain.model.order import Order
from petshop.domain.model.product import Product


@dataclass(frozen=True)
class ProductDTO:
    id: int | None
    ref: str | None
    category: str | None
    type: str | None
    name: str | None
    description: str | None
    price: str | None
    stock: int | None
    gender: str | None
    species: str | None
    race: str | None
    birth: int | None
    requires_certification: bool | None
    dimensions_max: str | None
    dimensions_unit: str | None
    specification: str | None
    specification_value: str | None
    specification_unit: str | None
    author_id: int | None
    is_visible: bool


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: int
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    customer_id: int | None
    status: str
    last_changed_at: str
    lines: list[OrderLineDTO]
    total: str


@dataclass(frozen=True)
class OrderListDTO:
    """Output of the order listing: how many, under which filter, which."""

    count: int
    applied_filter: str
    orders: list[OrderDTO]


@dataclass(frozen=True)
class ReapResultDTO:
    reclaimed_count: int


# --- Mapping -----------------------------------------------------------------


def _amount(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        ref=product.ref,
        category=product.category,
        type=product.type,
        name=product.name,
        description=product.description,
        price=_amount(product.price),
        stock=product.stock,
        gender=product.gender,
        species=product.species,
        race=product.race,
        birth=product.birth,
        requires_certification=product.requires_certification,
        dimensions_max=_amount(product.dimensions_max),
        dimensions_unit=product.dimensions_unit,
        specification=product.specification,
        specification_value=_amount(product.specification_value),
        specification_unit=product.specification_unit,
        author_id=product.author_id,
        is_visible=product.is_visible,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        status=order.status.value,
        last_changed_at=order.last_changed_at.isoformat(),
        lines=[
            OrderLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in order.lines
        ],
        total=str(order.total),
    )
