"""Style profile: the unweighted centroid of a board's pin embeddings."""

from typing import List, Sequence

import numpy as np


def mean_vector(vectors: Sequence[Sequence[float]]) -> List[float]:
    """
    Per-dimension arithmetic mean of equal-length vectors.

    The dimension is taken from the first vector. No vectors gives an empty
    list. Raises ValueError if a later vector has a different length.
    """
    if not len(vectors):
        return []

    dim = len(vectors[0])
    for vec in vectors:
        if len(vec) != dim:
            raise ValueError(f"Vector length {len(vec)} does not match {dim}")

    matrix = np.asarray(vectors, dtype=np.float64).reshape(len(vectors), dim)
    return matrix.mean(axis=0).tolist()
