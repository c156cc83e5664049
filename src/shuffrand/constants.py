"""Shared constants for number generation, shuffling and token strings."""

from __future__ import annotations

import string
import sys

__all__ = [
    'CHARACTER_SETS',
    'DEFAULT_CHARACTER_SET',
    'DEFAULT_FRACTION_DIGITS',
    'DEFAULT_LOWER_BOUND',
    'DEFAULT_STRING_LENGTH',
    'DEFAULT_UPPER_BOUND',
    'DOUBLE_BYTES',
    'FLOAT_TOLERANCE',
    'MAX_ATTEMPTS_TO_GENERATE_NUM',
    'MAX_FRACTIONAL_DIGITS',
    'MAX_STRING_LENGTH',
    'MIN_FRACTIONAL_DIGITS',
]

MAX_ATTEMPTS_TO_GENERATE_NUM: int = 100
"""Retry budget shared by every redraw inside one generation call.

Covers exclusion redraws, whole-number redraws for fractional values, and
rejected byte draws during rejection sampling.
"""

MIN_FRACTIONAL_DIGITS: int = 0
MAX_FRACTIONAL_DIGITS: int = 15
"""Doubles carry 15-17 significant digits; past 15 rounding is unreliable."""

DOUBLE_BYTES: int = 8
"""Bytes drawn per fractional sample (one unsigned 64-bit integer)."""

FLOAT_TOLERANCE: float = sys.float_info.epsilon

DEFAULT_LOWER_BOUND: int = 0
DEFAULT_UPPER_BOUND: int = 2
DEFAULT_FRACTION_DIGITS: int = 3

DEFAULT_STRING_LENGTH: int = 16
MAX_STRING_LENGTH: int = 2**16
DEFAULT_CHARACTER_SET: str = 'alphanumeric'

CHARACTER_SETS: dict[str, str] = {
    'alphanumeric': string.ascii_letters + string.digits,
    'alpha': string.ascii_letters,
    'numeric': string.digits,
    'hex': '0123456789abcdef',
    'uppercase': string.ascii_uppercase,
    'lowercase': string.ascii_lowercase,
}
