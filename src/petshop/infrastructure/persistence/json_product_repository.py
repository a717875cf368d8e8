"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

import json
import os
from decimal import Decimal
from pathlib import Path

from filelock import FileLock

from petshop.domain.exceptions import ConflictError
from petshop.domain.model.product import Product
from petshop.domain.repository.product_repository import ProductRepository

_DECIMAL_FIELDS = ("price", "dimensions_max", "specification_value")


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = FileLock(str(file_path) + ".lock")
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        for raw in self._load_raw():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def count(self) -> int:
        return len(self._load_raw())

    def add(self, product: Product) -> bool:
        with self._lock:
            records = self._load_raw()
            if any(raw["ref"] == product.ref for raw in records):
                return False

            product.id = max((raw["id"] for raw in records), default=0) + 1
            records.append(self._to_raw(product))
            self._persist_raw(records)
            return True

    def save(self, product: Product) -> None:
        if product.id is None:
            raise ValueError("Use add() for products without an ID")

        with self._lock:
            records = self._load_raw()
            for raw in records:
                if raw["ref"] == product.ref and raw["id"] != product.id:
                    raise ConflictError(f"Reference '{product.ref}' already exists")

            # Upsert: replace if exists, otherwise append
            replaced = False
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self._to_raw(product)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(product))

            self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        raw = dict(vars(product))
        for name in _DECIMAL_FIELDS:
            if raw[name] is not None:
                raw[name] = str(raw[name])
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        values = dict(raw)
        for name in _DECIMAL_FIELDS:
            if values.get(name) is not None:
                values[name] = Decimal(values[name])
        return Product(**values)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        # Callers hold self._lock; readers only ever see a whole file.
        staging = self._file_path.with_name(self._file_path.name + ".tmp")
        staging.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        os.replace(staging, self._file_path)

    def _ensure_file(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock:
            if not self._file_path.exists():
                self._persist_raw([])
