"""Tests for the error taxonomy."""

from __future__ import annotations

import msgspec
import pytest
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


class TestHierarchy:
    """Tests for exception base classes."""

    @pytest.mark.parametrize(
        ('error', 'builtin'),
        [
            (ValidationError('bad'), ValueError),
            (RangeError(1, 2, 'empty'), ValueError),
            (ExhaustionError(1, 2, ('x',), 3), RuntimeError),
            (ConfigurationError(), RuntimeError),
        ],
    )
    def test_shuffrand_and_builtin_bases(self, error: ShuffrandError, builtin: type[Exception]) -> None:
        """Every error is a ShuffrandError and a matching builtin."""
        assert isinstance(error, ShuffrandError)
        assert isinstance(error, builtin)

    def test_range_error_is_validation_error(self) -> None:
        """RangeError can be caught as ValidationError."""
        with pytest.raises(ValidationError):
            raise RangeError(5, 5, 'contradiction')


class TestMessages:
    """Tests for exception messages."""

    def test_exhaustion_lists_constraints(self) -> None:
        """Every unmet constraint appears in the message."""
        error = ExhaustionError(1, 2, ("the exclusion constraint: 'both'", 'the non-integer requirement'), 100)
        message = str(error)
        assert "the exclusion constraint: 'both' or the non-integer requirement" in message
        assert '[1, 2]' in message
        assert 'Max attempts (100) reached' in message

    def test_configuration_error_reason(self) -> None:
        """The reason is appended when given."""
        assert str(ConfigurationError()).endswith('in this environment')
        assert str(ConfigurationError('no /dev/urandom')).endswith(': no /dev/urandom')

    def test_range_error_message(self) -> None:
        """The range and reason are both reported."""
        assert str(RangeError(3, 3, 'contradiction')) == 'Invalid range [3, 3]: contradiction'


class TestStructVariants:
    """Tests for struct/exception conversion."""

    def test_exhaustion_round_trip(self) -> None:
        """Struct and exception carry the same fields."""
        struct = Exhausted(0.5, 0.6, ('a', 'b'), 10)
        error = struct.to_exception()
        assert isinstance(error, ExhaustionError)
        assert error.to_struct() == struct

    def test_range_error_struct(self) -> None:
        """RangeError converts to EmptyRange, not InvalidParams."""
        assert RangeError(1, 2, 'empty').to_struct() == EmptyRange(1, 2, 'empty')

    def test_validation_struct(self) -> None:
        """ValidationError converts to InvalidParams."""
        assert InvalidParams('bad').to_exception().to_struct() == InvalidParams('bad')

    def test_entropy_struct(self) -> None:
        """EntropyUnavailable keeps its optional reason."""
        assert EntropyUnavailable().to_exception().reason is None
        assert ConfigurationError('gone').to_struct() == EntropyUnavailable('gone')

    def test_structs_are_serializable(self) -> None:
        """Struct variants encode to JSON."""
        encoded = msgspec.json.encode(Exhausted(1, 2, ('x',), 3))
        assert msgspec.json.decode(encoded, type=Exhausted) == Exhausted(1, 2, ('x',), 3)
