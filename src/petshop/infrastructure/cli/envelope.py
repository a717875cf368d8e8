"""JSON response envelope printed by every CLI command.

Each command answers with ``{"success", "message", "results"}``.  A
failure still carries whatever payload was assembled (the rejected
product, for instance) so the client can see what was refused.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any, NoReturn

import click

from petshop.domain.exceptions import DomainException, ProductValidationError


def _plain(value: Any) -> Any:
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def respond(success: bool, message: str, results: dict[str, Any] | None = None) -> None:
    envelope = {
        "success": success,
        "message": message,
        "results": {key: _plain(value) for key, value in (results or {}).items()},
    }
    click.echo(json.dumps(envelope, indent=2))


def fail(exc: DomainException) -> NoReturn:
    """Print the failure envelope for *exc* and exit with status 1."""
    results: dict[str, Any] = {}
    if isinstance(exc, ProductValidationError):
        results["errors"] = exc.error_names
        if exc.product is not None:
            results["product"] = exc.product
    respond(False, str(exc), results)
    click.get_current_context().exit(1)
