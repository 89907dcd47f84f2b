"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from semantica.app import IndexService
from semantica.app.adapters import (
    FileSystemIndexStorage,
    HashEmbeddingAdapter,
    SentenceTransformerAdapter,
)
from semantica.app.ports import EmbeddingPort, IndexStoragePort
from semantica.config import Settings, get_settings
from semantica.index.codecs import ValueCodec, get_codec
from semantica.utils.offline import OfflineModeGate

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    index_service: IndexService
    storage_port: IndexStoragePort
    embedder: EmbeddingPort
    codec: ValueCodec[Any]
    offline_gate: OfflineModeGate


def bootstrap_application(
    settings: Settings | None = None,
    *,
    embedder: EmbeddingPort | None = None,
) -> ApplicationContainer:
    """Instantiate adapters and services for CLI consumption."""

    active_settings = settings or get_settings()
    offline_gate = OfflineModeGate.from_settings(active_settings)

    storage = FileSystemIndexStorage()
    active_embedder = embedder or _create_embedder(active_settings, offline_gate)
    if active_embedder.dimensions != active_settings.dimension:
        raise ValueError(
            f"Embedder produces {active_embedder.dimensions}-dimensional vectors; "
            f"settings expect {active_settings.dimension}"
        )
    codec = get_codec(active_settings.value_codec)

    index_service = IndexService(
        storage_port=storage,
        embedder=active_embedder,
        codec=codec,
        settings=active_settings,
    )

    return ApplicationContainer(
        settings=active_settings,
        index_service=index_service,
        storage_port=storage,
        embedder=active_embedder,
        codec=codec,
        offline_gate=offline_gate,
    )


def _create_embedder(settings: Settings, offline_gate: OfflineModeGate) -> EmbeddingPort:
    """Create the embedding adapter selected in settings."""
    if settings.embedding_backend == "hash":
        logger.debug("Using hashed-feature embeddings (%d dims)", settings.dimension)
        return HashEmbeddingAdapter(settings.dimension)

    return SentenceTransformerAdapter(
        settings.embedding_model,
        offline_gate=offline_gate,
        dimensions=settings.dimension,
        device=settings.embedding_device,
    )
