"""Bounded random number generation over a secure entropy source.

Integers are produced by rejection sampling over the minimal number of
random bytes, which keeps the result exactly uniform over the integer
window. Fractional values scale a 64-bit draw into the range and round to
the requested number of decimal digits. Both kinds redraw when a candidate
lands on an excluded endpoint; fractional values also redraw when they land
on a whole number. Every redraw counts against one shared retry budget.

Usage:
    >>> from shuffrand.random import crypto_random
    >>> roll = crypto_random(lower_bound=1, upper_bound=6)
    >>> price = crypto_random(lower_bound=1, upper_bound=2, kind='double', fraction_digits=2)
"""

from __future__ import annotations

import math

import msgspec

from shuffrand._config import get_config
from shuffrand._entropy import EntropySource, draw_uint, get_entropy_source
from shuffrand._logging import get_logger
from shuffrand._validation import assert_finite, assert_shape, supplied
from shuffrand.constants import (
    DEFAULT_FRACTION_DIGITS,
    DEFAULT_LOWER_BOUND,
    DEFAULT_UPPER_BOUND,
    DOUBLE_BYTES,
    FLOAT_TOLERANCE,
    MAX_FRACTIONAL_DIGITS,
    MIN_FRACTIONAL_DIGITS,
)
from shuffrand.errors import ExhaustionError, RangeError, ValidationError
from shuffrand.types import Exclusion, GenerationRequest, NormalizedBounds, NumberKind, RandomParams

__all__ = [
    'crypto_random',
    'generate_number',
    'normalize_bounds',
]

logger = get_logger(__name__)

_UINT64_SPACE = 2 ** (DOUBLE_BYTES * 8)
_UNIFORM_SAMPLING = 'the uniform sampling constraint'
_NON_INTEGER = 'the non-integer requirement'


# -----------------------------------------------------------------------------
# Bound normalization
# -----------------------------------------------------------------------------


def _integer_window(minimum: float, maximum: float, exclusion: Exclusion) -> tuple[int, int]:
    """Whole numbers in [ceil(minimum), floor(maximum)], each excluded end stepped inward by one."""
    low = math.ceil(minimum)
    if exclusion.excludes_lower:
        low += 1
    high = math.floor(maximum)
    if exclusion.excludes_upper:
        high -= 1
    return low, high


def _fractional_bounds(request: GenerationRequest, minimum: float, maximum: float) -> NormalizedBounds:
    """Float bounds whose span and scaled magnitude stay finite at the requested precision."""
    try:
        low, high = float(minimum), float(maximum)
    except OverflowError:
        low, high = -math.inf, math.inf
    magnitude = max(abs(low), abs(high)) * 10**request.fraction_digits
    if not (math.isfinite(high - low) and math.isfinite(magnitude)):
        raise RangeError(
            request.lower_bound,
            request.upper_bound,
            f'the range is too wide to sample with {request.fraction_digits} fraction digits',
        )
    return NormalizedBounds(low, high, low, high)


def normalize_bounds(request: GenerationRequest) -> NormalizedBounds:
    """Order the bounds and, for integers, narrow them by the exclusion mode.

    Args:
        request: The generation request.

    Returns:
        The ordered bounds and the effective window to sample from.

    Raises:
        RangeError: If an integer window is empty after exclusion, or a
            fractional range is too wide to scale and round as a float.
    """
    minimum = min(request.lower_bound, request.upper_bound)
    maximum = max(request.lower_bound, request.upper_bound)
    kind = NumberKind(request.kind)
    exclusion = Exclusion(request.exclusion)

    if minimum == maximum:
        return NormalizedBounds(minimum, maximum, minimum, maximum)
    if kind is NumberKind.FRACTIONAL:
        return _fractional_bounds(request, minimum, maximum)

    effective_min, effective_max = _integer_window(minimum, maximum, exclusion)
    if effective_min > effective_max:
        raise RangeError(
            request.lower_bound,
            request.upper_bound,
            f"exclusion '{exclusion}' leaves no integer in the range",
        )
    return NormalizedBounds(minimum, maximum, effective_min, effective_max)


# -----------------------------------------------------------------------------
# Sampling
# -----------------------------------------------------------------------------


def _byte_width(span: int) -> int:
    """Smallest byte count w with 256**w >= span."""
    return ((span - 1).bit_length() + 7) // 8


def _sample_integer(source: EntropySource, bounds: NormalizedBounds, max_attempts: int) -> int:
    span = bounds.effective_max - bounds.effective_min + 1
    width = _byte_width(span)
    space = 1 << (8 * width)
    # Largest multiple of span that fits in the draw space; draws at or above it are biased.
    limit = space - space % span
    for _ in range(max_attempts):
        value = draw_uint(source, width)
        if value < limit:
            return bounds.effective_min + value % span
    raise ExhaustionError(bounds.minimum, bounds.maximum, (_UNIFORM_SAMPLING,), max_attempts)


def _round_half_away(value: float, digits: int) -> float:
    factor = 10**digits
    return math.copysign(math.floor(abs(value) * factor + 0.5), value) / factor


def _sample_fractional(source: EntropySource, bounds: NormalizedBounds, digits: int, max_attempts: int) -> float:
    for _ in range(max_attempts):
        fraction = draw_uint(source, DOUBLE_BYTES) / _UINT64_SPACE
        # Draws within half an ulp of 2**64 round up to exactly 1.0.
        if fraction != 1.0:
            scaled = bounds.minimum + fraction * (bounds.maximum - bounds.minimum)
            return _round_half_away(scaled, digits)
    raise ExhaustionError(bounds.minimum, bounds.maximum, (_UNIFORM_SAMPLING,), max_attempts)


def _rejection_reason(
    candidate: float,
    bounds: NormalizedBounds,
    kind: NumberKind,
    exclusion: Exclusion,
) -> str | None:
    """Why `candidate` must be redrawn, or None if it is acceptable."""
    if kind is NumberKind.INTEGER:
        hits_lower = candidate == bounds.minimum
        hits_upper = candidate == bounds.maximum
    else:
        hits_lower = abs(candidate - bounds.minimum) < FLOAT_TOLERANCE
        hits_upper = abs(candidate - bounds.maximum) < FLOAT_TOLERANCE

    if (exclusion.excludes_lower and hits_lower) or (exclusion.excludes_upper and hits_upper):
        return 'exclusion'
    if kind is NumberKind.FRACTIONAL and float(candidate).is_integer():
        return 'whole number'
    return None


def _unmet_constraints(kind: NumberKind, exclusion: Exclusion) -> tuple[str, ...]:
    constraints = (f"the exclusion constraint: '{exclusion.value}'",)
    if kind is NumberKind.FRACTIONAL:
        constraints += (_NON_INTEGER,)
    return constraints


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------


def _check_fraction_digits(digits: object) -> None:
    if (
        isinstance(digits, bool)
        or not isinstance(digits, int)
        or not MIN_FRACTIONAL_DIGITS <= digits <= MAX_FRACTIONAL_DIGITS
    ):
        msg = (
            f'fraction_digits (currently {digits!r}) must be an integer between {MIN_FRACTIONAL_DIGITS} '
            f'and {MAX_FRACTIONAL_DIGITS} (inclusive) to ensure reliable precision.'
        )
        raise ValidationError(msg)


def _check_request(request: GenerationRequest) -> None:
    for name in ('lower_bound', 'upper_bound'):
        value = getattr(request, name)
        if isinstance(value, bool) or not isinstance(value, int | float):
            msg = f'Invalid generation request: {name} must be a number, got {value!r}'
            raise ValidationError(msg)
        assert_finite(name, value, operation='generation request')

    digits = request.fraction_digits
    _check_fraction_digits(digits)

    try:
        kind = NumberKind(request.kind)
        Exclusion(request.exclusion)
    except ValueError as exc:
        msg = f'Invalid generation request: {exc}'
        raise ValidationError(msg) from exc

    if kind is NumberKind.FRACTIONAL and digits == 0:
        msg = (
            "Invalid crypto_random parameters: 'fraction_digits' cannot be 0 when 'kind' is "
            f"'{NumberKind.FRACTIONAL}'. Use kind='{NumberKind.INTEGER}' for whole numbers."
        )
        raise ValidationError(msg)


def generate_number(request: GenerationRequest) -> int | float:
    """Generate one cryptographically secure number satisfying `request`.

    Args:
        request: Resolved bounds, kind, exclusion mode and precision.

    Returns:
        An int for `NumberKind.INTEGER` and a float with a fractional part
        for `NumberKind.FRACTIONAL`. When both bounds are equal that single
        value is returned unchanged.

    Raises:
        ConfigurationError: If no secure entropy source is available.
        ValidationError: If the request is malformed, including a
            fractional request with zero fraction digits.
        RangeError: If no value can satisfy the bounds and exclusion.
        ExhaustionError: If the retry budget runs out.

    Example:
        ```python
        request = GenerationRequest(lower_bound=10, upper_bound=1, exclusion=Exclusion.BOTH)
        generate_number(request)  # one of 2..9
        ```
    """
    source = get_entropy_source()
    _check_request(request)

    kind = NumberKind(request.kind)
    exclusion = Exclusion(request.exclusion)
    bounds = normalize_bounds(request)

    if bounds.is_point:
        if kind is NumberKind.FRACTIONAL and exclusion is Exclusion.BOTH:
            raise RangeError(
                request.lower_bound,
                request.upper_bound,
                f"a single-point range cannot exclude both bounds for kind '{kind}'",
            )
        return bounds.minimum

    max_attempts = get_config().max_attempts
    attempts = 0
    while attempts < max_attempts:
        if kind is NumberKind.INTEGER:
            candidate: int | float = _sample_integer(source, bounds, max_attempts)
        else:
            candidate = _sample_fractional(source, bounds, request.fraction_digits, max_attempts)

        reason = _rejection_reason(candidate, bounds, kind, exclusion)
        if reason is None:
            return candidate
        attempts += 1
        logger.debug('random.redraw', reason=reason, candidate=candidate, attempts=attempts)

    constraints = _unmet_constraints(kind, exclusion)
    logger.warning(
        'random.exhausted',
        lower_bound=bounds.minimum,
        upper_bound=bounds.maximum,
        kind=kind.value,
        exclusion=exclusion.value,
        max_attempts=max_attempts,
    )
    raise ExhaustionError(bounds.minimum, bounds.maximum, constraints, max_attempts)


def _or_default(value: object, default: object) -> object:
    return default if value is msgspec.UNSET else value


def crypto_random(
    *,
    lower_bound: float | msgspec.UnsetType = msgspec.UNSET,
    upper_bound: float | msgspec.UnsetType = msgspec.UNSET,
    kind: NumberKind | str | msgspec.UnsetType = msgspec.UNSET,
    exclusion: Exclusion | str | msgspec.UnsetType = msgspec.UNSET,
    fraction_digits: int | msgspec.UnsetType = msgspec.UNSET,
) -> int | float:
    """Generate a cryptographically secure random number from keyword parameters.

    Args:
        lower_bound: One end of the range. Defaults to 0.
        upper_bound: The other end of the range. Defaults to 2.
        kind: 'integer' (default) or 'double'.
        exclusion: 'none' (default), 'lower bound', 'upper bound' or 'both'.
        fraction_digits: Decimal digits kept for doubles, in [0, 15].
            Defaults to 3; 0 is rejected for doubles.

    Returns:
        The generated number.

    Raises:
        ConfigurationError: If no secure entropy source is available.
        ValidationError: If the parameters are malformed.
        RangeError: If the bounds and exclusion leave nothing to return.
        ExhaustionError: If the retry budget runs out.
    """
    get_entropy_source()

    # Checked ahead of the schema for a message that explains the limit.
    _check_fraction_digits(_or_default(fraction_digits, DEFAULT_FRACTION_DIGITS))

    raw = supplied(
        lower_bound=lower_bound,
        upper_bound=upper_bound,
        kind=kind,
        exclusion=exclusion,
        fraction_digits=fraction_digits,
    )
    params = assert_shape(raw, RandomParams, operation='crypto_random')

    request = GenerationRequest(
        lower_bound=_or_default(params.lower_bound, DEFAULT_LOWER_BOUND),
        upper_bound=_or_default(params.upper_bound, DEFAULT_UPPER_BOUND),
        kind=_or_default(params.kind, NumberKind.INTEGER),
        exclusion=_or_default(params.exclusion, Exclusion.NONE),
        fraction_digits=_or_default(params.fraction_digits, DEFAULT_FRACTION_DIGITS),
    )
    assert_finite('lower_bound', request.lower_bound, operation='crypto_random')
    assert_finite('upper_bound', request.upper_bound, operation='crypto_random')
    return generate_number(request)
