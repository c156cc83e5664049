"""Ranged Fisher-Yates shuffling driven by the bounded random generator.

Usage:
    >>> from shuffrand.shuffle import crypto_shuffle
    >>> deck = list(range(52))
    >>> shuffled = crypto_shuffle(deck)                       # new list, deck untouched
    >>> crypto_shuffle(deck, range_start=1, range_end=10, in_place=True)
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from typing import Any, TypeVar

import msgspec

from shuffrand._entropy import get_entropy_source
from shuffrand._logging import get_logger
from shuffrand._validation import assert_shape, supplied
from shuffrand.constants import FLOAT_TOLERANCE
from shuffrand.errors import ValidationError
from shuffrand.random import generate_number
from shuffrand.types import GenerationRequest, ShuffleParams, ShuffleRequest

__all__ = [
    'crypto_shuffle',
    'shuffle_sequence',
]

T = TypeVar('T')

logger = get_logger(__name__)


def _resolve_window(request: ShuffleRequest) -> tuple[int, int]:
    length = len(request.sequence)
    start = request.range_start
    end = length if request.range_end is None else request.range_end
    for name, index in (('range_start', start), ('range_end', end)):
        if isinstance(index, bool) or not isinstance(index, int):
            msg = f'Invalid shuffle request: {name} must be an integer, got {index!r}'
            raise ValidationError(msg)
    if not 0 <= start <= end <= length:
        msg = (
            f'Invalid shuffle request: range [{start}, {end}) must satisfy '
            f'0 <= range_start <= range_end <= {length}'
        )
        raise ValidationError(msg)
    return start, end


def _same_item(left: Any, right: Any) -> bool:
    if isinstance(left, float) and isinstance(right, float):
        return left == right or abs(left - right) < FLOAT_TOLERANCE
    return bool(left == right)


def _same_arrangement(snapshot: tuple[Any, ...], sequence: Sequence[Any]) -> bool:
    """Order-sensitive, value-based comparison of two whole sequences."""
    if len(snapshot) != len(sequence):
        return False
    return all(_same_item(left, right) for left, right in zip(snapshot, sequence, strict=True))


def shuffle_sequence(request: ShuffleRequest) -> Sequence[Any]:
    """Permute the window `[range_start, range_end)` of a sequence.

    Elements outside the window are never moved. Windows of zero or one
    element are returned unchanged.

    With `avoid_identical`, the whole sequence is snapshotted before
    shuffling, in both the in-place and the copying mode. If the shuffle
    reproduces that snapshot, the first and last elements of the window are
    swapped. This removes the identity permutation from the outcome space;
    do not use it where every permutation must be equally likely.

    Args:
        request: Sequence, window and mode flags.

    Returns:
        `request.sequence` itself when `in_place` is set, otherwise a new list.

    Raises:
        ConfigurationError: If no secure entropy source is available.
        ValidationError: If the window is out of bounds or inverted, or if
            `in_place` is requested for an immutable sequence.
    """
    get_entropy_source()

    sequence = request.sequence
    if not isinstance(sequence, Sequence):
        msg = f'Invalid shuffle request: expected a sequence, got {type(sequence).__name__}'
        raise ValidationError(msg)
    start, end = _resolve_window(request)
    if request.in_place and not isinstance(sequence, MutableSequence):
        msg = f'Invalid shuffle request: in_place requires a mutable sequence, got {type(sequence).__name__}'
        raise ValidationError(msg)

    snapshot = tuple(sequence) if request.avoid_identical else None
    target: MutableSequence[Any] = sequence if request.in_place else list(sequence)

    if end - start < 2:
        return target

    for i in range(end - 1, start, -1):
        j = generate_number(GenerationRequest(lower_bound=start, upper_bound=i))
        target[i], target[j] = target[j], target[i]

    if snapshot is not None and _same_arrangement(snapshot, target):
        last = end - 1
        target[start], target[last] = target[last], target[start]
        logger.debug('shuffle.identity_corrected', range_start=start, range_end=end)

    return target


def crypto_shuffle(
    sequence: Sequence[T],
    *,
    range_start: int | msgspec.UnsetType = msgspec.UNSET,
    range_end: int | msgspec.UnsetType = msgspec.UNSET,
    in_place: bool | msgspec.UnsetType = msgspec.UNSET,
    avoid_identical: bool | msgspec.UnsetType = msgspec.UNSET,
) -> Sequence[T]:
    """Shuffle a sequence with cryptographically secure randomness.

    Args:
        sequence: Items to shuffle.
        range_start: First index of the window. Defaults to 0.
        range_end: End of the window (exclusive). Defaults to `len(sequence)`.
        in_place: Mutate `sequence` instead of returning a new list.
            Defaults to False.
        avoid_identical: Never return the input arrangement when the window
            has two or more distinct elements. Defaults to False.

    Returns:
        The shuffled sequence.

    Raises:
        ConfigurationError: If no secure entropy source is available.
        ValidationError: If the parameters or window are invalid.
    """
    get_entropy_source()

    raw = supplied(
        range_start=range_start,
        range_end=range_end,
        in_place=in_place,
        avoid_identical=avoid_identical,
    )
    params = assert_shape(raw, ShuffleParams, operation='crypto_shuffle')

    request = ShuffleRequest(
        sequence=sequence,
        range_start=0 if params.range_start is msgspec.UNSET else params.range_start,
        range_end=None if params.range_end is msgspec.UNSET else params.range_end,
        in_place=False if params.in_place is msgspec.UNSET else params.in_place,
        avoid_identical=False if params.avoid_identical is msgspec.UNSET else params.avoid_identical,
    )
    return shuffle_sequence(request)
