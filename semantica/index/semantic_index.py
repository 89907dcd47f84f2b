"""Projection-sorted semantic index.

Entries live in one list in insertion order. A second list, sorted by the dot
product of each embedding with a fixed projection basis, holds plain integer
positions into that list. Lookups binary-search the projection order for a
seed slot and hand off to :func:`semantica.index.search.expanding_search`,
which scans the entry list outward from that slot.
"""

from __future__ import annotations

import bisect
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

import numpy as np

from semantica.index.codecs import ValueCodec
from semantica.index.layout import decode_blob, encode_blob
from semantica.index.search import expanding_search
from semantica.index.vector import VectorLike, as_vector, default_projection, dot

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from semantica.app.ports.embedding import EmbeddingPort

logger = logging.getLogger(__name__)

V = TypeVar("V")

DEFAULT_DIMENSION = 384
DEFAULT_TOLERANCE = 0.1
DEFAULT_EMBEDDING_MINIMUM = 0.5


class IndexOutOfRange(IndexError):
    """Raised when a position does not address an entry."""


@dataclass(slots=True)
class Entry(Generic[V]):
    """One stored embedding and the value it was added with."""

    embedding: np.ndarray
    value: V


@dataclass(slots=True)
class SearchHit(Generic[V]):
    """Best match for a query."""

    position: int
    score: float
    value: V


class SemanticIndex(Generic[V]):
    """Approximate nearest-neighbour index keyed by label similarity.

    Args:
        embedder: Provider used to turn labels and queries into vectors.
        dimension: Length every embedding must have.
        tolerance: Early-exit margin for the expanding scan.
        embedding_minimum: Lowest similarity accepted as a match.
        codec: Value codec; required for :meth:`to_bytes`.
        projection: Fixed projection basis (defaults to ``[0, 1, ..., D-1]``).
    """

    def __init__(
        self,
        embedder: EmbeddingPort,
        *,
        dimension: int = DEFAULT_DIMENSION,
        tolerance: float = DEFAULT_TOLERANCE,
        embedding_minimum: float = DEFAULT_EMBEDDING_MINIMUM,
        codec: ValueCodec[V] | None = None,
        projection: VectorLike | None = None,
    ) -> None:
        if tolerance < 0:
            raise ValueError(f"tolerance must be non-negative; got {tolerance}")
        self._embedder = embedder
        self._dimension = int(dimension)
        self._tolerance = float(tolerance)
        self._embedding_minimum = float(embedding_minimum)
        self._codec = codec
        if projection is None:
            basis = default_projection(self._dimension)
        else:
            basis = as_vector(projection, dimension=self._dimension).copy()
        basis.setflags(write=False)
        self._projection = basis
        self._contents: list[Entry[V]] = []
        self._order: list[tuple[int, float]] = []

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def tolerance(self) -> float:
        return self._tolerance

    @property
    def embedding_minimum(self) -> float:
        return self._embedding_minimum

    @property
    def projection_vector(self) -> np.ndarray:
        return self._projection

    @property
    def entries(self) -> tuple[Entry[V], ...]:
        return tuple(self._contents)

    @property
    def projection_order(self) -> tuple[tuple[int, float], ...]:
        """``(entry position, projection)`` pairs sorted by projection."""
        return tuple(self._order)

    def __len__(self) -> int:
        return len(self._contents)

    def __iter__(self) -> Iterator[Entry[V]]:
        return iter(list(self._contents))

    def values(self) -> list[V]:
        return [entry.value for entry in self._contents]

    def project(self, embedding: VectorLike) -> float:
        """Reduce ``embedding`` to its scalar projection."""
        return dot(as_vector(embedding, dimension=self._dimension), self._projection)

    def quick_search(self, target: float) -> int:
        """Lowest position in the projection order whose projection is >= ``target``.

        Indexes with fewer than two records always return 0.
        """
        if len(self._order) <= 1:
            return 0
        return bisect.bisect_left(self._order, target, key=lambda record: record[1])

    def add(self, label: str, value: V) -> int:
        """Embed ``label`` and store ``value`` under it.

        Returns:
            Position of the new entry.
        """
        return self.add_embedding(self._encode(label), value)

    def add_embedding(self, embedding: VectorLike, value: V) -> int:
        """Store ``value`` under a precomputed ``embedding``."""
        vector = as_vector(embedding, dimension=self._dimension).copy()
        projected = dot(vector, self._projection)
        # Equal projections keep insertion order
        slot = bisect.bisect_right(self._order, projected, key=lambda record: record[1])

        position = len(self._contents)
        self._contents.append(Entry(embedding=vector, value=value))
        self._order.insert(slot, (position, projected))
        logger.debug("Inserted entry %d at order slot %d (projection=%.4f)", position, slot, projected)
        return position

    def remove(self, position: int) -> V:
        """Remove the entry at ``position`` and return its value.

        Later entries shift down by one; their records in the projection order
        are renumbered to match.
        """
        if not 0 <= position < len(self._contents):
            raise IndexOutOfRange(
                f"No entry at position {position} (index holds {len(self._contents)})"
            )

        removed = self._contents.pop(position)
        order: list[tuple[int, float]] = []
        for entry_position, projected in self._order:
            if entry_position == position:
                continue
            if entry_position > position:
                entry_position -= 1
            order.append((entry_position, projected))
        self._order = order
        logger.debug("Removed entry %d; %d remain", position, len(self._contents))
        return removed.value

    def search(self, query: str) -> V | None:
        """Return the value whose label best matches ``query``, if similar enough."""
        hit = self.search_hit(query)
        return None if hit is None else hit.value

    def search_embedding(self, embedding: VectorLike) -> V | None:
        hit = self.search_hit_embedding(embedding)
        return None if hit is None else hit.value

    def search_hit(self, query: str) -> SearchHit[V] | None:
        return self.search_hit_embedding(self._encode(query))

    def search_hit_embedding(self, embedding: VectorLike) -> SearchHit[V] | None:
        vector = as_vector(embedding, dimension=self._dimension)
        if not self._contents:
            return None

        # The seed is a projection-order slot, used directly as a content position
        seed = min(self.quick_search(dot(vector, self._projection)), len(self._contents) - 1)
        result = expanding_search(
            vector,
            [entry.embedding for entry in self._contents],
            seed,
            tolerance=self._tolerance,
        )
        if result.score < self._embedding_minimum:
            logger.debug(
                "Best score %.4f below minimum %.4f", result.score, self._embedding_minimum
            )
            return None

        entry = self._contents[result.position]
        return SearchHit(position=result.position, score=result.score, value=entry.value)

    def to_bytes(self) -> bytes:
        """Serialize entries (in content order) with the configured codec."""
        codec = self._require_codec()
        return encode_blob(((entry.embedding, entry.value) for entry in self._contents), codec)

    @classmethod
    def from_bytes(
        cls,
        blob: bytes,
        embedder: EmbeddingPort,
        *,
        codec: ValueCodec[V],
        dimension: int = DEFAULT_DIMENSION,
        tolerance: float = DEFAULT_TOLERANCE,
        embedding_minimum: float = DEFAULT_EMBEDDING_MINIMUM,
        projection: VectorLike | None = None,
    ) -> SemanticIndex[V]:
        """Rebuild an index from :meth:`to_bytes` output.

        The projection order is recomputed, never read from the blob.
        """
        records = decode_blob(blob, dimension=dimension, codec=codec)
        index = cls(
            embedder,
            dimension=dimension,
            tolerance=tolerance,
            embedding_minimum=embedding_minimum,
            codec=codec,
            projection=projection,
        )
        for embedding, value in records:
            index.add_embedding(embedding, value)
        return index

    def _encode(self, text: str) -> np.ndarray:
        return as_vector(self._embedder.encode(text), dimension=self._dimension)

    def _require_codec(self) -> ValueCodec[V]:
        if self._codec is None:
            raise ValueError("A value codec is required to serialize this index")
        return self._codec
