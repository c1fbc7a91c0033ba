"""Cosine-similarity ranking of catalog embeddings against a style profile."""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import numpy as np


@dataclass(frozen=True)
class ScoredItem:
    id: str
    score: float


def cosine_similarity(a: Optional[Sequence[float]], b: Optional[Sequence[float]]) -> float:
    """
    Cosine of the angle between ``a`` and ``b``.

    Returns 0.0 ("no signal") instead of raising when either vector is
    missing, empty, zero-magnitude, or the lengths differ.
    """
    if a is None or b is None:
        return 0.0
    if len(a) == 0 or len(a) != len(b):
        return 0.0

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    norm_a = float(np.linalg.norm(va))
    norm_b = float(np.linalg.norm(vb))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return float(np.dot(va, vb) / (norm_a * norm_b))


def rank(
    profile: Sequence[float],
    entries: Iterable[tuple],
    top_k: int,
) -> List[ScoredItem]:
    """
    Score ``(id, embedding)`` pairs against ``profile``, best first.

    Equal scores keep input order. Returns at most ``top_k`` items and never
    pads when fewer are available.
    """
    scored = [ScoredItem(id=item_id, score=cosine_similarity(profile, embedding))
              for item_id, embedding in entries]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:max(0, top_k)]
