"""Parameter schemas and request value objects.

Two layers live here:

- Raw parameter schemas (`RandomParams`, `ShuffleParams`, `StringParams`)
  describe what a caller may pass to the keyword front ends. Every field is
  optional and defaults to `msgspec.UNSET`, so a validated instance only
  carries the fields the caller genuinely supplied.
- Resolved requests (`GenerationRequest`, `ShuffleRequest`) have every
  default applied and are what the generation and permutation engines
  consume.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import Annotated, Any

import msgspec

from shuffrand.constants import (
    DEFAULT_FRACTION_DIGITS,
    DEFAULT_LOWER_BOUND,
    DEFAULT_UPPER_BOUND,
    MAX_FRACTIONAL_DIGITS,
    MAX_STRING_LENGTH,
    MIN_FRACTIONAL_DIGITS,
)

__all__ = [
    'Exclusion',
    'FractionDigits',
    'GenerationRequest',
    'NormalizedBounds',
    'NumberKind',
    'RandomParams',
    'ShuffleParams',
    'ShuffleRequest',
    'StringParams',
]


class NumberKind(StrEnum):
    """Kind of number to generate."""

    INTEGER = 'integer'
    """Whole number within the (possibly narrowed) integer window."""

    FRACTIONAL = 'double'
    """Value with a fractional part; never a mathematical integer."""


class Exclusion(StrEnum):
    """Which endpoints of the range may not be returned."""

    NONE = 'none'
    LOWER = 'lower bound'
    UPPER = 'upper bound'
    BOTH = 'both'

    @property
    def excludes_lower(self) -> bool:
        return self in (Exclusion.LOWER, Exclusion.BOTH)

    @property
    def excludes_upper(self) -> bool:
        return self in (Exclusion.UPPER, Exclusion.BOTH)


FractionDigits = Annotated[int, msgspec.Meta(ge=MIN_FRACTIONAL_DIGITS, le=MAX_FRACTIONAL_DIGITS)]
NonNegativeIndex = Annotated[int, msgspec.Meta(ge=0)]
StringLength = Annotated[int, msgspec.Meta(ge=1, le=MAX_STRING_LENGTH)]


# -----------------------------------------------------------------------------
# Raw parameter schemas
# -----------------------------------------------------------------------------


class RandomParams(msgspec.Struct, frozen=True, kw_only=True, forbid_unknown_fields=True):
    """Schema for `crypto_random` keyword arguments."""

    lower_bound: int | float | msgspec.UnsetType = msgspec.UNSET
    upper_bound: int | float | msgspec.UnsetType = msgspec.UNSET
    kind: NumberKind | msgspec.UnsetType = msgspec.UNSET
    exclusion: Exclusion | msgspec.UnsetType = msgspec.UNSET
    fraction_digits: FractionDigits | msgspec.UnsetType = msgspec.UNSET


class ShuffleParams(msgspec.Struct, frozen=True, kw_only=True, forbid_unknown_fields=True):
    """Schema for `crypto_shuffle` keyword arguments."""

    range_start: NonNegativeIndex | msgspec.UnsetType = msgspec.UNSET
    range_end: NonNegativeIndex | msgspec.UnsetType = msgspec.UNSET
    in_place: bool | msgspec.UnsetType = msgspec.UNSET
    avoid_identical: bool | msgspec.UnsetType = msgspec.UNSET


class StringParams(msgspec.Struct, frozen=True, kw_only=True, forbid_unknown_fields=True):
    """Schema for `crypto_string` keyword arguments."""

    length: StringLength | msgspec.UnsetType = msgspec.UNSET
    character_set: Annotated[str, msgspec.Meta(min_length=1)] | msgspec.UnsetType = msgspec.UNSET
    no_repeat: bool | msgspec.UnsetType = msgspec.UNSET


# -----------------------------------------------------------------------------
# Resolved requests
# -----------------------------------------------------------------------------


class GenerationRequest(msgspec.Struct, frozen=True, kw_only=True):
    """A fully resolved request for one bounded random number.

    Attributes:
        lower_bound: One end of the range; may be greater than `upper_bound`.
        upper_bound: The other end of the range.
        kind: Integer or fractional result.
        exclusion: Endpoints that may not be returned.
        fraction_digits: Decimal digits kept for fractional results.
            Must be in [0, 15] and non-zero for `NumberKind.FRACTIONAL`.
    """

    lower_bound: int | float = DEFAULT_LOWER_BOUND
    upper_bound: int | float = DEFAULT_UPPER_BOUND
    kind: NumberKind = NumberKind.INTEGER
    exclusion: Exclusion = Exclusion.NONE
    fraction_digits: int = DEFAULT_FRACTION_DIGITS


class NormalizedBounds(msgspec.Struct, frozen=True, gc=False):
    """Ordered bounds plus the integer window left after exclusion.

    For fractional requests the effective bounds equal `minimum`/`maximum`;
    exclusion is enforced by redrawing instead.
    """

    minimum: int | float
    maximum: int | float
    effective_min: int | float
    effective_max: int | float

    @property
    def is_point(self) -> bool:
        return self.minimum == self.maximum


class ShuffleRequest(msgspec.Struct, frozen=True, kw_only=True):
    """A fully resolved request for one ranged permutation.

    Attributes:
        sequence: Items to permute. Must be mutable when `in_place` is set.
        range_start: First index of the window (inclusive).
        range_end: End of the window (exclusive); `None` means `len(sequence)`.
        in_place: Permute `sequence` itself instead of a shallow copy.
        avoid_identical: Guarantee the result differs from the input when
            the window allows it. Removes the identity permutation from the
            outcome space, so the result is no longer uniform.
    """

    sequence: Sequence[Any]
    range_start: int = 0
    range_end: int | None = None
    in_place: bool = False
    avoid_identical: bool = False
