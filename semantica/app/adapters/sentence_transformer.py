"""sentence-transformers embedding adapter implementing EmbeddingPort."""

from __future__ import annotations

import logging
import time
from typing import Any

from semantica.app.ports.embedding import EmbeddingPort, EncodeError
from semantica.utils.offline import OfflineModeGate

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"


class SentenceTransformerAdapter(EmbeddingPort):
    """Embedding adapter backed by a local sentence-transformers model.

    The model is loaded on first use. Without online mode only weights already
    in the Hugging Face cache (or a local model directory) can be used.
    """

    def __init__(
        self,
        model_name: str = DEFAULT_MODEL,
        *,
        offline_gate: OfflineModeGate,
        dimensions: int = 384,
        device: str | None = None,
    ) -> None:
        self.model_name = model_name
        self.dimensions = int(dimensions)
        self._offline_gate = offline_gate
        self._device = device
        self._model: Any | None = None

    @property
    def model(self) -> Any:
        if self._model is None:
            self._model = self._load_model()
        return self._model

    def _load_model(self) -> Any:
        try:
            from sentence_transformers import SentenceTransformer  # imported lazily; heavy dependency
        except ImportError as exc:  # pragma: no cover - optional dep
            raise EncodeError(
                "The 'sentence-transformers' package is required for model embeddings. "
                "Install it or set SEMANTICA_EMBEDDING_BACKEND=hash."
            ) from exc

        local_only = not self._offline_gate.is_online_enabled()
        start = time.perf_counter()
        try:
            model = SentenceTransformer(
                self.model_name,
                device=self._device,
                local_files_only=local_only,
            )
        except Exception as exc:  # noqa: BLE001 - any load failure leaves the provider unusable
            hint = " Enable with `--online` or set SEMANTICA_ONLINE=1 to download it." if local_only else ""
            raise EncodeError(f"Could not load embedding model '{self.model_name}'.{hint}") from exc

        reported = model.get_sentence_embedding_dimension()
        if reported is not None and int(reported) != self.dimensions:
            raise EncodeError(
                f"Model '{self.model_name}' produces {reported}-dimensional vectors; "
                f"index expects {self.dimensions}"
            )
        logger.info(
            "Loaded embedding model %s in %.1f ms",
            self.model_name,
            (time.perf_counter() - start) * 1000.0,
        )
        return model

    def encode(self, text: str) -> list[float]:
        model = self.model
        try:
            embedding = model.encode(text, convert_to_numpy=True, normalize_embeddings=True)
        except Exception as exc:  # noqa: BLE001 - surface provider failures uniformly
            raise EncodeError(f"Embedding model failed to encode {text!r}") from exc
        return [float(v) for v in embedding]
