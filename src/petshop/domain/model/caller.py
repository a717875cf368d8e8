"""Caller — the already-resolved identity behind an operation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Role(Enum):
    USER = "ROLE_USER"
    ADMIN = "ROLE_ADMIN"


@dataclass(frozen=True)
class Caller:
    """Identity plus role set, resolved once per request.

    Immutable: every operation receives it explicitly instead of
    looking up a "currently logged-in user".
    """

    user_id: int
    roles: frozenset[Role] = field(default_factory=frozenset)

    @staticmethod
    def of(user_id: int, *roles: Role) -> Caller:
        return Caller(user_id=user_id, roles=frozenset(roles))

    def has_role(self, role: Role) -> bool:
        return role in self.roles
