"""Error types: dual struct+exception for value-based and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = [
    'ConfigurationError',
    'EmptyRange',
    'EntropyUnavailable',
    'ExhaustionError',
    'Exhausted',
    'InvalidParams',
    'RangeError',
    'ShuffrandError',
    'ValidationError',
]


class ShuffrandError(Exception):
    """Base class for every exception raised by shuffrand."""


# --- Validation Errors ---


class InvalidParams(msgspec.Struct, frozen=True, gc=False):
    """Parameters violate their contract - struct variant."""

    message: str

    def to_exception(self) -> ValidationError:
        """Convert to exception for raise-based code."""
        return ValidationError(self.message)


class ValidationError(ShuffrandError, ValueError):
    """Parameters violate their contract - exception variant."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_struct(self) -> InvalidParams:
        """Convert to struct for value-based code."""
        return InvalidParams(self.message)


class EmptyRange(msgspec.Struct, frozen=True, gc=False):
    """Bounds collapse to an empty or contradictory set - struct variant."""

    lower_bound: float
    upper_bound: float
    reason: str

    def to_exception(self) -> RangeError:
        """Convert to exception for raise-based code."""
        return RangeError(self.lower_bound, self.upper_bound, self.reason)


class RangeError(ValidationError):
    """Bounds collapse to an empty or contradictory set - exception variant."""

    def __init__(self, lower_bound: float, upper_bound: float, reason: str) -> None:
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.reason = reason
        super().__init__(f'Invalid range [{lower_bound}, {upper_bound}]: {reason}')

    def to_struct(self) -> EmptyRange:  # type: ignore[override]
        """Convert to struct for value-based code."""
        return EmptyRange(self.lower_bound, self.upper_bound, self.reason)


# --- Generation Errors ---


class Exhausted(msgspec.Struct, frozen=True, gc=False):
    """Retry budget spent without a valid value - struct variant."""

    lower_bound: float
    upper_bound: float
    constraints: tuple[str, ...]
    max_attempts: int

    def to_exception(self) -> ExhaustionError:
        """Convert to exception for raise-based code."""
        return ExhaustionError(self.lower_bound, self.upper_bound, self.constraints, self.max_attempts)


class ExhaustionError(ShuffrandError, RuntimeError):
    """Retry budget spent without a valid value - exception variant.

    The message names every constraint that stayed unmet.
    """

    def __init__(
        self,
        lower_bound: float,
        upper_bound: float,
        constraints: tuple[str, ...],
        max_attempts: int,
    ) -> None:
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.constraints = tuple(constraints)
        self.max_attempts = max_attempts
        unmet = ' or '.join(self.constraints) or 'the requested constraints'
        super().__init__(
            f'Unable to generate a random number within the range [{lower_bound}, {upper_bound}] '
            f'that satisfies {unmet}. Max attempts ({max_attempts}) reached.'
        )

    def to_struct(self) -> Exhausted:
        """Convert to struct for value-based code."""
        return Exhausted(self.lower_bound, self.upper_bound, self.constraints, self.max_attempts)


# --- Configuration Errors ---


class EntropyUnavailable(msgspec.Struct, frozen=True, gc=False):
    """No secure entropy source is available - struct variant."""

    reason: str | None = None

    def to_exception(self) -> ConfigurationError:
        """Convert to exception for raise-based code."""
        return ConfigurationError(self.reason)


class ConfigurationError(ShuffrandError, RuntimeError):
    """No secure entropy source is available - exception variant."""

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason
        msg = 'Cryptographically secure random number generator is not available in this environment'
        if reason:
            msg = f'{msg}: {reason}'
        super().__init__(msg)

    def to_struct(self) -> EntropyUnavailable:
        """Convert to struct for value-based code."""
        return EntropyUnavailable(self.reason)
