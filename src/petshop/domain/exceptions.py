"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and render a failure envelope.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from petshop.domain.model.value_objects import FieldViolation


class DomainException(Exception):
    """Base class for all domain errors."""


class UnauthenticatedError(DomainException):
    """No caller could be resolved for the current operation."""


class ForbiddenError(DomainException):
    """The caller lacks the role or ownership the operation requires."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class ProductValidationError(ValidationError):
    """One or more product fields failed validation.

    Carries every violation found (never just the first) together with
    the partially assembled product so the caller can echo it back.
    """

    def __init__(self, message: str, violations: list[FieldViolation], product=None) -> None:
        super().__init__(message)
        self.violations = list(violations)
        self.product = product

    @property
    def error_names(self) -> list[str]:
        return [v.kind.value for v in self.violations]


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """A unique constraint would be broken by the write."""
