"""Vector math over fixed-length float sequences."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

VectorLike = Sequence[float] | np.ndarray


class SizeMismatch(ValueError):
    """Raised when two vectors (or a vector and the index) disagree on length."""


def as_vector(values: VectorLike, *, dimension: int | None = None) -> np.ndarray:
    """Coerce ``values`` to a 1-D float32 array.

    Raises:
        SizeMismatch: If ``values`` is not one-dimensional or its length
            differs from ``dimension``.
    """
    array = np.asarray(values, dtype=np.float32)
    if array.ndim != 1:
        raise SizeMismatch(f"Expected a 1-D vector; got shape {array.shape}")
    if dimension is not None and array.shape[0] != dimension:
        raise SizeMismatch(f"Expected {dimension} components; got {array.shape[0]}")
    return array


def dot(a: VectorLike, b: VectorLike) -> float:
    """Return the dot product of ``a`` and ``b``.

    Raises:
        SizeMismatch: If the inputs are not the same length.
    """
    left = as_vector(a)
    right = as_vector(b)
    if left.shape[0] != right.shape[0]:
        raise SizeMismatch(
            f"Input vectors were not the same size ({left.shape[0]} != {right.shape[0]})"
        )
    return float(np.dot(left, right))


def cosine(a: VectorLike, b: VectorLike) -> float:
    """Cosine similarity of ``a`` and ``b``; 0.0 when either is a zero vector."""
    numerator = dot(a, b)
    norm_a = float(np.linalg.norm(as_vector(a)))
    norm_b = float(np.linalg.norm(as_vector(b)))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return numerator / (norm_a * norm_b)


def default_projection(dimension: int) -> np.ndarray:
    """Return the fixed projection basis ``[0, 1, ..., dimension - 1]``."""
    if dimension <= 0:
        raise ValueError(f"dimension must be positive; got {dimension}")
    return np.arange(dimension, dtype=np.float32)
