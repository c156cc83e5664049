"""Secure entropy source: probing, injection, and byte draws.

The system source is probed once per process. Success or failure is cached;
an unavailable source is a fatal configuration error that is never retried.
"""

from __future__ import annotations

import os
import threading
from typing import Protocol, runtime_checkable

from shuffrand._logging import get_logger
from shuffrand.errors import ConfigurationError

__all__ = [
    'EntropySource',
    'SystemEntropySource',
    'draw_uint',
    'get_entropy_source',
    'reset_entropy_source',
    'set_entropy_source',
]

logger = get_logger(__name__)


@runtime_checkable
class EntropySource(Protocol):
    """Anything that can fill a buffer with cryptographically secure bytes."""

    def fill(self, buffer: bytearray, count: int) -> None:
        """Write `count` secure random bytes into the start of `buffer`."""
        ...


class SystemEntropySource:
    """Entropy from the operating system CSPRNG (`os.urandom`)."""

    __slots__ = ()

    def fill(self, buffer: bytearray, count: int) -> None:
        buffer[:count] = os.urandom(count)

    def __repr__(self) -> str:
        return 'SystemEntropySource()'


_lock = threading.Lock()
_source: EntropySource | None = None
_failure: str | None = None


def _probe(source: EntropySource) -> None:
    """Draw one byte to prove the source works.

    Raises:
        ConfigurationError: If the source cannot produce bytes.
    """
    buffer = bytearray(1)
    try:
        source.fill(buffer, 1)
    except (NotImplementedError, OSError) as exc:
        raise ConfigurationError(str(exc) or type(exc).__name__) from exc


def get_entropy_source() -> EntropySource:
    """Return the active entropy source, probing the system source on first use.

    Returns:
        The installed or system entropy source.

    Raises:
        ConfigurationError: If no secure source is available. The failure is
            remembered for the rest of the process.
    """
    global _source, _failure  # noqa: PLW0603

    if _source is not None:
        return _source
    with _lock:
        if _failure is not None:
            raise ConfigurationError(_failure)
        if _source is None:
            candidate = SystemEntropySource()
            try:
                _probe(candidate)
            except ConfigurationError as exc:
                _failure = exc.reason
                logger.error('entropy.unavailable', reason=exc.reason)
                raise
            _source = candidate
        return _source


def set_entropy_source(source: EntropySource) -> None:
    """Install a specific entropy source for every later draw.

    Args:
        source: Object with a `fill(buffer, count)` method.

    Raises:
        ConfigurationError: If `source` is not an entropy source or fails
            its probe draw.
    """
    global _source, _failure  # noqa: PLW0603

    if not isinstance(source, EntropySource):
        msg = f'{source!r} does not provide fill(buffer, count)'
        raise ConfigurationError(msg)
    _probe(source)
    with _lock:
        _source = source
        _failure = None


def reset_entropy_source() -> None:
    """Forget the installed source and any cached probe failure."""
    global _source, _failure  # noqa: PLW0603

    with _lock:
        _source = None
        _failure = None


def draw_uint(source: EntropySource, width: int) -> int:
    """Draw `width` bytes and assemble them big-endian into an unsigned int."""
    if width == 0:
        return 0
    buffer = bytearray(width)
    source.fill(buffer, width)
    return int.from_bytes(buffer, 'big')
