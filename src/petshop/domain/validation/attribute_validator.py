"""Attribute validator — checks one raw input value against a FieldRule.

The functions here are pure: the same raw value and rule always give the
same outcome, and nothing outside the return value is touched.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from petshop.domain.model.value_objects import FieldViolation, ViolationKind
from petshop.domain.validation.rules import FIELD_ALIASES, FieldRule, FieldType

_TRUE_WORDS = frozenset({"1", "true", "on", "yes"})
_FALSE_WORDS = frozenset({"0", "false", "off", "no"})


@dataclass(frozen=True)
class Checked:
    """Outcome of validating a single value: a typed value or a violation."""

    value: Any = None
    violation: ViolationKind | None = None

    @property
    def ok(self) -> bool:
        return self.violation is None


def is_absent(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and not raw.strip())


def validate(raw: Any, rule: FieldRule) -> Checked:
    """Coerce *raw* to the rule's type and check its bounds."""
    if is_absent(raw):
        if rule.required:
            return Checked(violation=rule.kind)
        return Checked()

    try:
        value = _coerce(raw, rule.type)
    except (TypeError, ValueError, InvalidOperation):
        return Checked(violation=rule.kind)

    if not _within_bounds(value, rule):
        return Checked(violation=rule.kind)
    return Checked(value=value)


def validate_fields(
    fields: Mapping[str, Any],
    rules: Iterable[FieldRule],
    partial: bool = False,
) -> tuple[dict[str, Any], list[FieldViolation]]:
    """Validate a whole payload, collecting every violation.

    With ``partial=True`` only the keys present in *fields* are checked
    and returned; absent keys are left for the caller to keep as they
    were.  Keys without a rule are ignored.
    """
    payload = normalize_keys(fields)
    values: dict[str, Any] = {}
    violations: list[FieldViolation] = []

    for rule in rules:
        if partial and rule.field not in payload:
            continue
        checked = validate(payload.get(rule.field), rule)
        if checked.ok:
            values[rule.field] = checked.value
        else:
            violations.append(FieldViolation(rule.field, checked.violation))

    return values, violations


def normalize_keys(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Map camelCase wire names onto attribute names.

    An attribute name wins over its alias when both are supplied.
    """
    payload: dict[str, Any] = {}
    for key, raw in fields.items():
        name = FIELD_ALIASES.get(key, key)
        if name != key and name in fields:
            continue
        payload[name] = raw
    return payload


# --- Coercion ----------------------------------------------------------------


def _coerce(raw: Any, field_type: FieldType) -> Any:
    if field_type is FieldType.STRING:
        if not isinstance(raw, str):
            raise TypeError(f"expected a string, got {type(raw).__name__}")
        return raw.strip()

    if field_type is FieldType.INTEGER:
        if isinstance(raw, bool):
            raise TypeError("booleans are not integers")
        if isinstance(raw, int):
            return raw
        if isinstance(raw, str):
            text = raw.strip()
            digits = text[1:] if text[:1] in "+-" else text
            if not (digits.isascii() and digits.isdigit()):
                raise ValueError(f"not a whole number: {raw!r}")
            return int(text)
        raise TypeError(f"expected an integer, got {type(raw).__name__}")

    if field_type is FieldType.DECIMAL:
        if isinstance(raw, bool):
            raise TypeError("booleans are not numbers")
        if not isinstance(raw, (int, float, Decimal, str)):
            raise TypeError(f"expected a number, got {type(raw).__name__}")
        value = Decimal(str(raw).strip())
        if not value.is_finite():
            raise ValueError("number must be finite")
        return value

    if field_type is FieldType.BOOLEAN:
        if isinstance(raw, bool):
            return raw
        word = str(raw).strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ValueError(f"not a boolean: {raw!r}")

    raise ValueError(f"Unsupported field type {field_type!r}")


def _within_bounds(value: Any, rule: FieldRule) -> bool:
    if rule.type is FieldType.STRING:
        length = len(value)
        if rule.min_len is not None and length < rule.min_len:
            return False
        if rule.max_len is not None and length > rule.max_len:
            return False

    if rule.type in (FieldType.INTEGER, FieldType.DECIMAL):
        if rule.minimum is not None:
            if rule.exclusive_minimum and value <= rule.minimum:
                return False
            if value < rule.minimum:
                return False
        if rule.maximum is not None and value > rule.maximum:
            return False

    if rule.choices is not None and value not in rule.choices:
        return False

    return True
