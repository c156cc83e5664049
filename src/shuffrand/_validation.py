"""Schema-driven shape validation for raw parameters."""

from __future__ import annotations

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

import msgspec

from shuffrand.errors import ValidationError

__all__ = [
    'assert_finite',
    'assert_shape',
    'supplied',
]

T = TypeVar('T')


def supplied(**fields: Any) -> dict[str, Any]:
    """Collect only the fields the caller actually passed.

    Fields left at `msgspec.UNSET` are dropped rather than forwarded, so the
    schema never sees a present-but-absent key. Enum members are reduced to
    their values.
    """
    return {
        name: value.value if isinstance(value, Enum) else value
        for name, value in fields.items()
        if value is not msgspec.UNSET
    }


def assert_shape(raw: Mapping[str, Any], schema: type[T], *, operation: str) -> T:
    """Validate `raw` against `schema` or raise.

    Args:
        raw: Mapping holding only genuinely supplied fields.
        schema: msgspec Struct type describing the allowed shape.
        operation: Public operation name used in the error prefix.

    Returns:
        The validated schema instance; unsupplied fields stay `msgspec.UNSET`.

    Raises:
        ValidationError: If `raw` does not match `schema`.
    """
    try:
        return msgspec.convert(raw, type=schema)
    except msgspec.ValidationError as exc:
        msg = f'Invalid {operation} parameters: {exc}'
        raise ValidationError(msg) from exc


def assert_finite(name: str, value: float, *, operation: str) -> None:
    """Reject NaN and infinite bounds. Python ints are always finite."""
    if isinstance(value, float) and not math.isfinite(value):
        msg = f'Invalid {operation} parameters: {name} must be a finite number, got {value!r}'
        raise ValidationError(msg)
