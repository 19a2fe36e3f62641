from __future__ import annotations
from typing import Sequence
import numpy as np


def kronecker_product_vectors(vectors: Sequence[np.ndarray]) -> np.ndarray:
    """
    Tensor (Kronecker) product of a sequence of 1-D vectors.

    The first vector is outermost and the last one varies fastest, so the
    entry for indices (j_0, ..., j_{n-1}) sits at
    ``np.ravel_multi_index((j_0, ..., j_{n-1}), [len(v) for v in vectors])``.
    An empty sequence gives ``[1.0]``.
    """
    result = np.ones(1, dtype=np.float64)
    for v in vectors:
        v = np.asarray(v, dtype=np.float64).reshape(-1)
        # every current entry is scaled by the whole next vector
        result = (result[:, None] * v[None, :]).reshape(-1)
    return result
