"""Random token strings built on secure number generation and shuffling."""

from __future__ import annotations

import msgspec

from shuffrand._entropy import get_entropy_source
from shuffrand._validation import assert_shape, supplied
from shuffrand.constants import CHARACTER_SETS, DEFAULT_CHARACTER_SET, DEFAULT_STRING_LENGTH
from shuffrand.errors import ValidationError
from shuffrand.random import generate_number
from shuffrand.shuffle import shuffle_sequence
from shuffrand.types import GenerationRequest, ShuffleRequest, StringParams

__all__ = [
    'crypto_string',
    'resolve_alphabet',
]


def resolve_alphabet(character_set: str) -> str:
    """Expand a preset name, or dedupe a custom alphabet keeping first occurrences."""
    if character_set in CHARACTER_SETS:
        return CHARACTER_SETS[character_set]
    return ''.join(dict.fromkeys(character_set))


def crypto_string(
    *,
    length: int | msgspec.UnsetType = msgspec.UNSET,
    character_set: str | msgspec.UnsetType = msgspec.UNSET,
    no_repeat: bool | msgspec.UnsetType = msgspec.UNSET,
) -> str:
    """Generate a random string from a character set.

    Args:
        length: Number of characters, in [1, 65536]. Defaults to 16.
        character_set: A preset ('alphanumeric', 'alpha', 'numeric', 'hex',
            'uppercase', 'lowercase') or any non-empty custom alphabet.
            Defaults to 'alphanumeric'.
        no_repeat: Use each character at most once. Defaults to False.

    Returns:
        The generated string.

    Raises:
        ConfigurationError: If no secure entropy source is available.
        ValidationError: If the parameters are invalid, or `no_repeat` asks
            for more characters than the alphabet holds.

    Example:
        ```python
        crypto_string(length=8, character_set='hex')  # e.g. '3f9a0c1e'
        ```
    """
    get_entropy_source()

    raw = supplied(length=length, character_set=character_set, no_repeat=no_repeat)
    params = assert_shape(raw, StringParams, operation='crypto_string')

    size = DEFAULT_STRING_LENGTH if params.length is msgspec.UNSET else params.length
    name = DEFAULT_CHARACTER_SET if params.character_set is msgspec.UNSET else params.character_set
    unique = False if params.no_repeat is msgspec.UNSET else params.no_repeat
    alphabet = resolve_alphabet(name)

    if unique:
        if size > len(alphabet):
            msg = (
                f'Invalid crypto_string parameters: cannot draw {size} unique characters '
                f'from an alphabet of {len(alphabet)}'
            )
            raise ValidationError(msg)
        pool = shuffle_sequence(ShuffleRequest(sequence=list(alphabet)))
        return ''.join(pool[:size])

    pick = GenerationRequest(lower_bound=0, upper_bound=len(alphabet) - 1)
    return ''.join(alphabet[generate_number(pick)] for _ in range(size))
