"""Pytest configuration and fixtures."""

import shutil
import tempfile
from collections.abc import Generator, Sequence
from pathlib import Path

import pytest

from semantica.app.ports.embedding import EmbeddingPort
from semantica.config import Settings

CONCEPTS: dict[str, tuple[str, ...]] = {
    "one": ("one", "1", "single"),
    "two": ("two", "2", "pair"),
    "three": ("three", "3"),
    "four": ("four", "4"),
    "five": ("five", "5"),
    "dog": ("dog", "puppy", "canine"),
    "cat": ("cat", "kitten", "feline"),
    "dinosaur": ("dinosaur", "t-rex"),
}


class KeywordEmbedder(EmbeddingPort):
    """Maps known words onto one axis per concept; anything else is the zero vector."""

    def __init__(self, concepts: dict[str, Sequence[str]] | None = None) -> None:
        self.concepts = dict(concepts or CONCEPTS)
        self.dimensions = len(self.concepts)
        self._axis = {
            word: axis
            for axis, words in enumerate(self.concepts.values())
            for word in words
        }
        self.calls: list[str] = []

    def encode(self, text: str) -> list[float]:
        self.calls.append(text)
        vector = [0.0] * self.dimensions
        axis = self._axis.get(text.strip().lower())
        if axis is not None:
            vector[axis] = 1.0
        return vector


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def keyword_embedder() -> KeywordEmbedder:
    return KeywordEmbedder()


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated settings using offline hashed embeddings."""

    import semantica.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    data_dir = temp_dir / "appdata"
    data_dir.mkdir(parents=True, exist_ok=True)

    settings = config_module.Settings(
        data_dir=data_dir,
        embedding_backend="hash",
        value_codec="int",
    )

    config_module.set_settings(settings)

    try:
        yield settings
    finally:
        config_module._settings = original_settings
