"""Product aggregate.

Products live independently of orders.  They are created and edited by
administrators; ``ref``, ``author_id`` and ``is_visible`` are assigned by
the system, never taken from the payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

# Attributes an administrator may supply, in display order.
EDITABLE_FIELDS: tuple[str, ...] = (
    "category",
    "type",
    "name",
    "description",
    "price",
    "stock",
    "gender",
    "species",
    "race",
    "birth",
    "requires_certification",
    "dimensions_max",
    "dimensions_unit",
    "specification",
    "specification_value",
    "specification_unit",
)


@dataclass
class Product:
    """A catalog entry (an animal or a piece of equipment).

    All attributes default to None so a partially validated product can
    still be echoed back to the client.  ``Product.id`` is None until the
    repository inserts it.
    """

    id: int | None = None
    ref: str | None = None
    category: str | None = None
    type: str | None = None
    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock: int | None = None
    gender: str | None = None
    species: str | None = None
    race: str | None = None
    birth: int | None = None
    requires_certification: bool | None = None
    dimensions_max: Decimal | None = None
    dimensions_unit: str | None = None
    specification: str | None = None
    specification_value: Decimal | None = None
    specification_unit: str | None = None
    author_id: int | None = None
    is_visible: bool = False

    def apply(self, values: dict[str, object]) -> None:
        """Overwrite the editable attributes present in *values*."""
        for name, value in values.items():
            if name not in EDITABLE_FIELDS:
                raise KeyError(f"'{name}' is not an editable product attribute")
            setattr(self, name, value)

    def publish(self, ref: str, author_id: int) -> None:
        """Stamp the system-assigned attributes of a new product."""
        self.ref = ref
        self.author_id = author_id
        self.is_visible = True
