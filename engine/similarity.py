"""
cosine similarity between word vectors.

scores are in [-1, 1]. a zero vector has no direction, so anything
compared against it scores 0 instead of dividing by zero.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .errors import DimensionMismatch


def cosine_similarity(a: ArrayLike, b: ArrayLike) -> float:
    """
    cosine similarity of two equal-length vectors.

    args:
        a, b: 1-D sequences of floats

    returns:
        similarity in [-1, 1], or 0.0 if either vector is all zeros

    raises:
        DimensionMismatch: if the lengths differ
    """
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()
    if va.shape[0] != vb.shape[0]:
        raise DimensionMismatch(va.shape[0], vb.shape[0])

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = float(np.dot(va, vb) / (norm_a * norm_b))
    # rounding can push identical vectors a hair past 1
    return min(1.0, max(-1.0, score))


def cosine_similarities(
    matrix: ArrayLike,
    vec: ArrayLike
) -> NDArray[np.float64]:
    """
    cosine similarity of every row of `matrix` against `vec`.

    args:
        matrix: shape (N, D)
        vec: shape (D,)

    returns:
        array of shape (N,); rows (or a query) with zero magnitude score 0
    """
    m = np.atleast_2d(np.asarray(matrix, dtype=np.float64))
    v = np.asarray(vec, dtype=np.float64).ravel()
    if m.shape[1] != v.shape[0]:
        raise DimensionMismatch(v.shape[0], m.shape[1])

    row_norms = np.linalg.norm(m, axis=1)
    vec_norm = np.linalg.norm(v)
    scores = np.zeros(m.shape[0], dtype=np.float64)
    if vec_norm == 0.0:
        return scores

    nonzero = row_norms > 0.0
    scores[nonzero] = (m[nonzero] @ v) / (row_norms[nonzero] * vec_norm)
    return np.clip(scores, -1.0, 1.0)
