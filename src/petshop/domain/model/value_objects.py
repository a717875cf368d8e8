"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ViolationKind(Enum):
    """Named reason a single product field was rejected."""

    INVALID_CATEGORY = "InvalidCategory"
    INVALID_TYPE = "InvalidType"
    INVALID_NAME = "InvalidName"
    INVALID_DESCRIPTION = "InvalidDescription"
    INVALID_PRICE = "InvalidPrice"
    INVALID_STOCK = "InvalidStock"
    INVALID_GENDER = "InvalidGender"
    INVALID_SPECIES = "InvalidSpecies"
    INVALID_RACE = "InvalidRace"
    INVALID_BIRTH = "InvalidBirth"
    INVALID_REQUIRES_CERTIFICATION = "InvalidRequiresCertification"
    INVALID_DIMENSIONS_MAX = "InvalidDimensionsMax"
    INVALID_DIMENSIONS_UNIT = "InvalidDimensionsUnit"
    INVALID_SPECIFICATION = "InvalidSpecification"
    INVALID_SPECIFICATION_VALUE = "InvalidSpecificationValue"
    INVALID_SPECIFICATION_UNIT = "InvalidSpecificationUnit"
    DUPLICATE_REFERENCE = "DuplicateReference"


@dataclass(frozen=True)
class FieldViolation:
    """A field together with the reason it failed validation."""

    field: str
    kind: ViolationKind

    def __str__(self) -> str:
        return f"{self.field}: {self.kind.value}"
