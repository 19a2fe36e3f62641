from __future__ import annotations
from typing import Callable
import numpy as np

from polysurrogate.exceptions import InvalidArgumentError
from polysurrogate.utils.backend import to_point

# -----------------------
# numerical derivatives
# -----------------------

def finite_difference_jacobian(f: Callable[[np.ndarray], np.ndarray], x, h: float = 1e-6) -> np.ndarray:
    """
    Central-difference Jacobian of a vector (or scalar) valued f at x.
    Shape: (len(f(x)), len(x)); a scalar f gives a single row.
    """
    x = to_point(x)
    if h <= 0:
        raise InvalidArgumentError("step h must be positive")
    cols = []
    for i in range(x.shape[0]):
        step = np.zeros_like(x)
        step[i] = h
        fp = np.atleast_1d(np.asarray(f(x + step), dtype=np.float64))
        fm = np.atleast_1d(np.asarray(f(x - step), dtype=np.float64))
        cols.append((fp - fm) / (2.0 * h))
    return np.stack(cols, axis=1)

# -----------------------
# model checks
# -----------------------

def _rows(points) -> np.ndarray:
    P = np.asarray(points, dtype=np.float64)
    if P.ndim != 2:
        raise InvalidArgumentError(f"Expected a 2D array with shape (q, n); got {P.shape}")
    return P

def jacobian_error(model, points, h: float = 1e-6) -> float:
    """
    Largest absolute difference between the analytic basis Jacobian and its
    central-difference estimate over all points.
    """
    worst = 0.0
    for x in _rows(points):
        analytic = model.eval_basis_functions_jacobian(x)
        numeric = finite_difference_jacobian(model.eval_basis_functions, x, h=h)
        worst = max(worst, float(np.max(np.abs(analytic - numeric))))
    return worst

def gradient_error(model, points, h: float = 1e-6) -> float:
    """Same as jacobian_error for the model gradient (1, n)."""
    worst = 0.0
    for x in _rows(points):
        analytic = model.eval_jacobian(x)
        numeric = finite_difference_jacobian(model.eval, x, h=h)
        worst = max(worst, float(np.max(np.abs(analytic - numeric))))
    return worst

def compare_functions(model, func: Callable[[np.ndarray], float], points) -> float:
    """Largest |model(x) - func(x)| over the points."""
    worst = 0.0
    for x in _rows(points):
        worst = max(worst, abs(model.eval(x) - float(func(x))))
    return worst
