"""Index service: load, modify, search and persist a semantic index.

All file I/O is delegated to the storage port and all embedding to the
embedding port; the service only orchestrates.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from semantica.app.ports import EmbeddingPort, IndexStoragePort
from semantica.config import Settings
from semantica.index.codecs import ValueCodec
from semantica.index.semantic_index import IndexOutOfRange, SearchHit, SemanticIndex

logger = logging.getLogger(__name__)


class IndexChange(BaseModel):
    """Summary of one load/modify/save cycle."""

    path: str
    removed: list[Any]
    added: list[int]
    size: int


class IndexService:
    """Load/modify/save orchestration around :class:`SemanticIndex`."""

    def __init__(
        self,
        *,
        storage_port: IndexStoragePort,
        embedder: EmbeddingPort,
        codec: ValueCodec[Any],
        settings: Settings,
    ) -> None:
        self.storage = storage_port
        self.embedder = embedder
        self.codec = codec
        self.settings = settings

    def create_index(self) -> SemanticIndex[Any]:
        """Return an empty index configured from settings."""
        return SemanticIndex(
            self.embedder,
            dimension=self.settings.dimension,
            tolerance=self.settings.tolerance,
            embedding_minimum=self.settings.embedding_minimum,
            codec=self.codec,
        )

    def load(self, path: Path) -> SemanticIndex[Any]:
        """Load the index stored at ``path``; a missing file yields an empty index."""
        if not self.storage.exists(path):
            logger.info("No index at %s; starting empty", path)
            return self.create_index()

        index = SemanticIndex.from_bytes(
            self.storage.read_bytes(path),
            self.embedder,
            codec=self.codec,
            dimension=self.settings.dimension,
            tolerance=self.settings.tolerance,
            embedding_minimum=self.settings.embedding_minimum,
        )
        logger.info("Loaded %d entries from %s", len(index), path)
        return index

    def save(self, index: SemanticIndex[Any], path: Path) -> None:
        self.storage.write_bytes(path, index.to_bytes())
        logger.info("Wrote %d entries to %s", len(index), path)

    def apply(
        self,
        path: Path,
        *,
        remove: Sequence[int] = (),
        add: Sequence[tuple[str, Any]] = (),
    ) -> IndexChange:
        """Remove then add entries and rewrite the index file.

        Removal positions refer to the index as loaded; they are applied from
        the highest down so earlier removals do not shift later targets.
        Nothing is written if any position is out of range.
        """
        index = self.load(path)

        targets = sorted(set(remove), reverse=True)
        for position in targets:
            if not 0 <= position < len(index):
                raise IndexOutOfRange(
                    f"No entry at position {position} (index holds {len(index)})"
                )

        removed = [index.remove(position) for position in targets]
        added = [index.add(label, value) for label, value in add]

        self.save(index, path)
        return IndexChange(path=str(path), removed=removed, added=added, size=len(index))

    def search(self, path: Path, query: str) -> SearchHit[Any] | None:
        """Return the best match for ``query`` in the index at ``path``."""
        hit = self.load(path).search_hit(query)
        if hit is None:
            logger.debug("No match for %r", query)
        return hit

    def list_entries(self, path: Path) -> list[tuple[int, Any]]:
        """Return ``(position, value)`` for every stored entry."""
        return list(enumerate(self.load(path).values()))
