"""Embedding port interface.

Adapters turn label and query text into fixed-length vectors. The index
only ever calls :meth:`EmbeddingPort.encode`; it never holds a model itself.
"""

from __future__ import annotations

from typing import Protocol


class EncodeError(RuntimeError):
    """Raised when an embedding provider cannot produce a vector for text."""


class EmbeddingPort(Protocol):
    """Port interface for text embedding providers.

    Implementations must return vectors of exactly ``dimensions`` components
    for the whole lifetime of the provider.

    Side effects: May load model weights from disk or the network on first use.
    """

    dimensions: int

    def encode(self, text: str) -> list[float]:
        """Embed ``text``.

        Raises:
            EncodeError: If the provider cannot process ``text``.
        """
        ...
