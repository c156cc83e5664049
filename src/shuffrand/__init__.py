"""
shuffrand: cryptographically secure random numbers and shuffling.

Provides uniformly distributed integers and fractional values within any
bounded range (with optional endpoint exclusion), unbiased ranged
Fisher-Yates shuffling with optional identity avoidance, and random token
strings. Every draw comes from the operating system's secure entropy source.
"""

from shuffrand._config import RandomConfig, get_config, init
from shuffrand._entropy import EntropySource, SystemEntropySource, reset_entropy_source, set_entropy_source
from shuffrand._logging import add_log_hook, clear_log_hooks, configure_logging, remove_log_hook
from shuffrand.constants import MAX_ATTEMPTS_TO_GENERATE_NUM, MAX_FRACTIONAL_DIGITS, MIN_FRACTIONAL_DIGITS
from shuffrand.errors import (
    ConfigurationError,
    EmptyRange,
    EntropyUnavailable,
    ExhaustionError,
    Exhausted,
    InvalidParams,
    RangeError,
    ShuffrandError,
    ValidationError,
)
from shuffrand.random import crypto_random, generate_number
from shuffrand.shuffle import crypto_shuffle, shuffle_sequence
from shuffrand.string import crypto_string
from shuffrand.types import Exclusion, GenerationRequest, NumberKind, ShuffleRequest

__all__ = [
    'MAX_ATTEMPTS_TO_GENERATE_NUM',
    'MAX_FRACTIONAL_DIGITS',
    'MIN_FRACTIONAL_DIGITS',
    # Errors - exception variants
    'ConfigurationError',
    # Errors - struct variants
    'EmptyRange',
    'EntropySource',
    'EntropyUnavailable',
    'Exclusion',
    'ExhaustionError',
    'Exhausted',
    'GenerationRequest',
    'InvalidParams',
    'NumberKind',
    'RandomConfig',
    'RangeError',
    'ShuffleRequest',
    'ShuffrandError',
    'SystemEntropySource',
    'ValidationError',
    # Logging
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    # Operations
    'crypto_random',
    'crypto_shuffle',
    'crypto_string',
    'generate_number',
    # Config
    'get_config',
    'init',
    'remove_log_hook',
    'reset_entropy_source',
    'set_entropy_source',
    'shuffle_sequence',
]
