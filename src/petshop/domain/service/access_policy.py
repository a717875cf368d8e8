"""Domain service: access policy.

Pure predicates over an already-resolved Caller and the resource being
touched.  They never perform I/O; the application handlers decide what
to raise when a predicate says no.
"""

from __future__ import annotations

from petshop.domain.exceptions import UnauthenticatedError
from petshop.domain.model.caller import Caller, Role
from petshop.domain.model.order import Order


def require_caller(caller: Caller | None) -> Caller:
    """Return *caller*, or raise if the request carried no identity."""
    if caller is None:
        raise UnauthenticatedError("You must be logged in to access this resource")
    return caller


def can_view_order(caller: Caller, order: Order) -> bool:
    if caller.has_role(Role.ADMIN):
        return True
    return caller.has_role(Role.USER) and order.is_owned_by(caller.user_id)


def can_list_all_orders(caller: Caller) -> bool:
    return caller.has_role(Role.ADMIN)


def can_mutate_product(caller: Caller) -> bool:
    return caller.has_role(Role.ADMIN)


def can_reap_carts(caller: Caller) -> bool:
    return caller.has_role(Role.ADMIN)
