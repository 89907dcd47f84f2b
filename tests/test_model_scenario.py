"""End-to-end lookups against the real all-MiniLM-L6-v2 model.

Skipped unless sentence-transformers is installed and the weights are cached
(or SEMANTICA_ONLINE=1 allows a download).
"""

from __future__ import annotations

import pytest

from semantica.app.adapters import SentenceTransformerAdapter
from semantica.app.ports.embedding import EncodeError
from semantica.config import Settings
from semantica.index.codecs import IntCodec
from semantica.index.semantic_index import SemanticIndex
from semantica.utils.offline import OfflineModeGate

pytestmark = pytest.mark.model


@pytest.fixture(scope="module")
def model_embedder() -> SentenceTransformerAdapter:
    pytest.importorskip("sentence_transformers")
    settings = Settings()
    adapter = SentenceTransformerAdapter(
        settings.embedding_model,
        offline_gate=OfflineModeGate.from_settings(settings),
        dimensions=384,
    )
    try:
        adapter.encode("warm up")
    except EncodeError as exc:
        pytest.skip(f"embedding model unavailable: {exc}")
    return adapter


@pytest.fixture(scope="module")
def scenario_index(model_embedder) -> SemanticIndex[int]:
    index: SemanticIndex[int] = SemanticIndex(model_embedder, codec=IntCodec())
    for label, value in [
        ("One", 1),
        ("Two", 2),
        ("Three", 3),
        ("Four", 4),
        ("Five", 5),
        ("Dog", 808),
        ("Cat", 247),
    ]:
        index.add(label, value)
    return index


def test_semantic_lookups(scenario_index: SemanticIndex[int]) -> None:
    assert scenario_index.tolerance == 0.1
    assert scenario_index.search("feline") == 247
    assert scenario_index.search("dinosaur") is None
    for query, expected in [("1", 1), ("2", 2), ("3", 3), ("4", 4), ("5", 5)]:
        assert scenario_index.search(query) == expected


def test_lookups_survive_serialization(scenario_index: SemanticIndex[int], model_embedder) -> None:
    restored = SemanticIndex.from_bytes(
        scenario_index.to_bytes(), model_embedder, codec=IntCodec()
    )
    for query in ["feline", "dinosaur", "1", "2", "3", "4", "5"]:
        assert restored.search(query) == scenario_index.search(query)
