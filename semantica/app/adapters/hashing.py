"""Deterministic hashed-feature embedding adapter implementing EmbeddingPort."""

from __future__ import annotations

import hashlib
import re
from collections import Counter

import numpy as np

from semantica.app.ports.embedding import EmbeddingPort

_WORD_RE = re.compile(r"[A-Za-z0-9]+")


class HashEmbeddingAdapter(EmbeddingPort):
    """Offline embedder built from hashed word and character n-gram features.

    Vectors are L2-normalised, so dot products behave like cosine similarity.
    Labels sharing words or spelling score high; synonyms do not.
    """

    name = "hash-v1"

    def __init__(self, dimensions: int = 384, *, ngram_range: tuple[int, int] = (3, 4)) -> None:
        if dimensions <= 0:
            raise ValueError(f"dimensions must be positive; got {dimensions}")
        self.dimensions = int(dimensions)
        self.ngram_range = ngram_range

    def _features(self, text: str) -> Counter[str]:
        lowered = text.lower()
        features: Counter[str] = Counter(f"w:{word}" for word in _WORD_RE.findall(lowered))
        low, high = self.ngram_range
        for size in range(low, high + 1):
            for start in range(len(lowered) - size + 1):
                features[f"c:{lowered[start:start + size]}"] += 1
        return features

    def encode(self, text: str) -> list[float]:
        vector = np.zeros(self.dimensions, dtype=np.float32)
        for feature, count in self._features(text).items():
            digest = hashlib.blake2b(feature.encode("utf-8"), digest_size=8).digest()
            bucket = int.from_bytes(digest[:4], "big") % self.dimensions
            sign = 1.0 if digest[4] % 2 == 0 else -1.0
            vector[bucket] += sign * count

        norm = float(np.linalg.norm(vector))
        if norm > 0.0:
            vector /= norm
        return vector.tolist()
