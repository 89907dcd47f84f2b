"""Seeded expanding scan over stored embeddings.

The cheap one-dimensional projection only tells us roughly where a match
should be. Starting from that seed, rings of increasing radius are probed with
the true similarity until the most recent ring falls more than ``tolerance``
below the best score seen, or the ring runs off both ends of the index.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from semantica.index.vector import dot

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanResult:
    """Best candidate found by :func:`expanding_search`."""

    position: int
    score: float
    probes: int


def ring(seed: int, radius: int, size: int) -> list[int]:
    """In-range positions at ``radius`` from ``seed`` (low side first)."""
    positions = []
    for position in (seed - radius, seed + radius):
        if 0 <= position < size and position not in positions:
            positions.append(position)
    return positions


def expanding_search(
    query: np.ndarray,
    embeddings: Sequence[np.ndarray],
    seed: int,
    *,
    tolerance: float,
) -> ScanResult:
    """Scan outward from ``seed`` and return the most similar position.

    Args:
        query: Query embedding.
        embeddings: Candidate embeddings, indexed by position.
        seed: Starting position; must be a valid index into ``embeddings``.
        tolerance: How far below the best score a ring may fall before the
            scan stops.
    """
    size = len(embeddings)
    if not 0 <= seed < size:
        raise IndexError(f"Seed {seed} outside [0, {size})")

    best_position = seed
    best = dot(query, embeddings[seed])
    last_probe = best
    probes = 1
    # Radius 0 is the seed itself
    radius = 1

    while last_probe + tolerance > best:
        candidates = ring(seed, radius, size)
        if not candidates:
            break

        round_position = candidates[0]
        round_best = dot(query, embeddings[round_position])
        for position in candidates[1:]:
            score = dot(query, embeddings[position])
            if score > round_best:
                round_position, round_best = position, score
        probes += len(candidates)

        last_probe = round_best
        if round_best > best:
            best_position, best = round_position, round_best
        radius += 1

    logger.debug(
        "Scan from seed %d settled on %d (score=%.4f, probes=%d, radius=%d)",
        seed,
        best_position,
        best,
        probes,
        radius,
    )
    return ScanResult(position=best_position, score=best, probes=probes)
