"""Declarative validation rules for product attributes.

One table drives both the create path (all required fields must be
present) and the partial update path (only supplied fields checked).
Minimum lengths are enforced on update only; create checks presence and
maximum length.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from petshop.domain.model.value_objects import ViolationKind


class FieldType(Enum):
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class FieldRule:
    """How a single raw field is coerced and bounded.

    ``minimum``/``maximum`` apply to numeric types, ``min_len``/``max_len``
    to strings.  ``exclusive_minimum`` turns ``minimum`` into a strict
    lower bound (price > 0 rather than price >= 0).
    """

    field: str
    kind: ViolationKind
    type: FieldType = FieldType.STRING
    required: bool = True
    min_len: int | None = None
    max_len: int | None = None
    minimum: Decimal | int | None = None
    maximum: Decimal | int | None = None
    exclusive_minimum: bool = False
    choices: frozenset[str] | None = None


MAX_PRICE = Decimal("10000")
MAX_DIMENSION = Decimal("10000")
EARLIEST_BIRTH_YEAR = 2010
GENDERS = frozenset({"f", "m"})

# Wire names used by web clients, mapped to attribute names.
FIELD_ALIASES: dict[str, str] = {
    "requiresCertification": "requires_certification",
    "dimensionsMax": "dimensions_max",
    "dimensionsUnit": "dimensions_unit",
    "specificationValue": "specification_value",
    "specificationUnit": "specification_unit",
}


def product_rules(current_year: int, for_update: bool = False) -> tuple[FieldRule, ...]:
    """Build the product rule table.

    The latest accepted birth year moves with the calendar, so the table
    is built per call rather than held as a constant.  Minimum lengths
    only apply when *for_update* is set.
    """

    def at_least(length: int) -> int | None:
        return length if for_update else None

    return (
        FieldRule("category", ViolationKind.INVALID_CATEGORY, min_len=at_least(6), max_len=50),
        FieldRule("type", ViolationKind.INVALID_TYPE, min_len=at_least(4), max_len=100),
        FieldRule("name", ViolationKind.INVALID_NAME, min_len=at_least(3), max_len=255),
        FieldRule("description", ViolationKind.INVALID_DESCRIPTION, min_len=at_least(10)),
        FieldRule(
            "price",
            ViolationKind.INVALID_PRICE,
            type=FieldType.DECIMAL,
            minimum=Decimal("0"),
            exclusive_minimum=True,
            maximum=MAX_PRICE,
        ),
        FieldRule("stock", ViolationKind.INVALID_STOCK, type=FieldType.INTEGER, minimum=0),
        FieldRule(
            "gender",
            ViolationKind.INVALID_GENDER,
            required=False,
            choices=GENDERS,
        ),
        FieldRule("species", ViolationKind.INVALID_SPECIES, min_len=at_least(3), max_len=200),
        FieldRule("race", ViolationKind.INVALID_RACE, required=False, max_len=200),
        FieldRule(
            "birth",
            ViolationKind.INVALID_BIRTH,
            type=FieldType.INTEGER,
            required=False,
            minimum=EARLIEST_BIRTH_YEAR,
            maximum=current_year,
        ),
        FieldRule(
            "requires_certification",
            ViolationKind.INVALID_REQUIRES_CERTIFICATION,
            type=FieldType.BOOLEAN,
        ),
        FieldRule(
            "dimensions_max",
            ViolationKind.INVALID_DIMENSIONS_MAX,
            type=FieldType.DECIMAL,
            minimum=Decimal("0"),
            exclusive_minimum=True,
            maximum=MAX_DIMENSION,
        ),
        FieldRule("dimensions_unit", ViolationKind.INVALID_DIMENSIONS_UNIT, max_len=10),
        FieldRule("specification", ViolationKind.INVALID_SPECIFICATION, max_len=50),
        FieldRule(
            "specification_value",
            ViolationKind.INVALID_SPECIFICATION_VALUE,
            type=FieldType.DECIMAL,
            required=False,
            minimum=Decimal("0"),
            exclusive_minimum=True,
        ),
        FieldRule("specification_unit", ViolationKind.INVALID_SPECIFICATION_UNIT, max_len=3),
    )
