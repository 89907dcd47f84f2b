from __future__ import annotations

import numpy as np
import pytest

from semantica.index.vector import SizeMismatch, as_vector, cosine, default_projection, dot


def test_dot_of_equal_length_vectors() -> None:
    assert dot([1, 2, 3], [4, 5, 6]) == 32.0
    assert dot(np.array([0.5, 0.5]), [2.0, 2.0]) == 2.0


def test_dot_rejects_mismatched_lengths() -> None:
    with pytest.raises(SizeMismatch):
        dot([1, 2, 3, 4], [4, 5, 6])


def test_dot_mismatch_is_value_error() -> None:
    with pytest.raises(ValueError):
        dot([], [1.0])


def test_as_vector_checks_dimension() -> None:
    vec = as_vector([1, 2, 3], dimension=3)
    assert vec.dtype == np.float32
    assert vec.shape == (3,)

    with pytest.raises(SizeMismatch):
        as_vector([1, 2, 3], dimension=4)
    with pytest.raises(SizeMismatch):
        as_vector([[1, 2], [3, 4]])


def test_cosine_handles_zero_vectors() -> None:
    assert cosine([0.0, 0.0], [1.0, 0.0]) == 0.0
    assert cosine([2.0, 0.0], [5.0, 0.0]) == pytest.approx(1.0)
    assert cosine([1.0, 0.0], [0.0, 1.0]) == 0.0


def test_default_projection_is_ascending_basis() -> None:
    basis = default_projection(4)
    assert basis.tolist() == [0.0, 1.0, 2.0, 3.0]
    with pytest.raises(ValueError):
        default_projection(0)
