"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Settings come from
the environment:

``PETSHOP_DATA_DIR``
    Directory holding ``orders.json`` and ``products.json``.
``PETSHOP_CART_RETENTION_DAYS``
    Whole days an anonymous cart may sit idle before it is reclaimed.
"""

from __future__ import annotations

import os
from pathlib import Path

from petshop.domain.service.cart_reaper import DEFAULT_RETENTION_DAYS
from petshop.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from petshop.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir() -> Path:
    return Path(os.getenv("PETSHOP_DATA_DIR", str(_DEFAULT_DATA_DIR)))


def cart_retention_days() -> int:
    raw = os.getenv("PETSHOP_CART_RETENTION_DAYS")
    if raw is None:
        return DEFAULT_RETENTION_DAYS
    try:
        days = int(raw)
    except ValueError:
        raise ValueError(f"PETSHOP_CART_RETENTION_DAYS must be an integer, got {raw!r}")
    if days < 0:
        raise ValueError("PETSHOP_CART_RETENTION_DAYS cannot be negative")
    return days


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(data_dir() / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(data_dir() / "orders.json")
