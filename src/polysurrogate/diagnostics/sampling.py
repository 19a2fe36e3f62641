from __future__ import annotations
import itertools
import numpy as np
from scipy.stats import qmc

def make_uniform_sampler(low: float = -1.0, high: float = 1.0, seed=None):
    """
    Returns sampler(q, n) -> (q, n) i.i.d. Uniform[low, high].
    """
    lo, hi = float(low), float(high)
    rng = np.random.default_rng(seed)
    def sampler(q: int, n: int) -> np.ndarray:
        return rng.uniform(lo, hi, size=(int(q), int(n)))
    return sampler

def make_sobol_sampler(low: float = -1.0, high: float = 1.0, seed=None):
    """
    Returns sampler(q, n) -> (q, n) scrambled Sobol points scaled to [low, high]^n.
    Each call draws a fresh sequence; q need not be a power of two.
    """
    lo, hi = float(low), float(high)
    rng = np.random.default_rng(seed)
    def sampler(q: int, n: int) -> np.ndarray:
        engine = qmc.Sobol(d=int(n), scramble=True, seed=rng)
        # random_base2 keeps the balance properties; trim to q afterwards
        m = max(0, int(np.ceil(np.log2(max(int(q), 1)))))
        unit = engine.random_base2(m=m)[: int(q)]
        return qmc.scale(unit, [lo] * int(n), [hi] * int(n))
    return sampler

def grid_points(low: float, high: float, per_dim: int, n: int) -> np.ndarray:
    """Full tensor grid with `per_dim` evenly spaced values per variable: (per_dim**n, n)."""
    axis = np.linspace(float(low), float(high), int(per_dim))
    return np.array(list(itertools.product(axis, repeat=int(n))), dtype=np.float64).reshape(-1, int(n))
