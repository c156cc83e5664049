"""Pytest configuration for shuffrand tests."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

import pytest
import structlog
from shuffrand._config import reset_config
from shuffrand._entropy import reset_entropy_source, set_entropy_source
from shuffrand._logging import clear_log_hooks

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


class ScriptedSource:
    """Entropy source that replays fixed byte chunks.

    Each `fill` consumes one queued chunk, which must match the requested
    byte count. Once the queue is empty every byte is `fallback`.
    """

    def __init__(self, *, fallback: int = 0) -> None:
        self.chunks: deque[bytes] = deque()
        self.fallback = fallback
        self.requests: list[int] = []

    def load(self, *chunks: bytes) -> None:
        self.chunks.extend(chunks)
        self.requests.clear()

    def fill(self, buffer: bytearray, count: int) -> None:
        self.requests.append(count)
        if self.chunks:
            chunk = self.chunks.popleft()
            assert len(chunk) == count, f'scripted chunk has {len(chunk)} bytes, draw wanted {count}'
            buffer[:count] = chunk
        else:
            buffer[:count] = bytes([self.fallback]) * count


class BrokenSource:
    """Entropy source whose every draw fails."""

    def fill(self, buffer: bytearray, count: int) -> None:
        raise OSError('entropy device unavailable')


@pytest.fixture(autouse=True)
def isolated_state() -> Generator[None]:
    """Reset entropy, config, log hooks and root logging around each test."""
    root = logging.getLogger()
    saved_level = root.level

    reset_entropy_source()
    reset_config()
    clear_log_hooks()
    yield
    reset_entropy_source()
    reset_config()
    clear_log_hooks()

    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(saved_level)


@pytest.fixture
def scripted_entropy() -> Callable[..., ScriptedSource]:
    """Install a ScriptedSource loaded with the given chunks.

    Example:
        ```python
        def test_draw(scripted_entropy):
            source = scripted_entropy(b'\\x07', fallback=0)
        ```
    """

    def install(*chunks: bytes, fallback: int = 0) -> ScriptedSource:
        source = ScriptedSource(fallback=fallback)
        set_entropy_source(source)
        source.load(*chunks)
        return source

    return install
