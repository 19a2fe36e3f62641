# bases/monomial.py
from __future__ import annotations
import operator
from typing import List, Optional, Sequence, Tuple
import numpy as np
import tensorflow as tf

from polysurrogate.bases.base import Basis
from polysurrogate.exceptions import InvalidArgumentError
from polysurrogate.utils.backend import ArrayLike, to_point, to_tensor
from polysurrogate.utils.kronecker import kronecker_product_vectors


def validate_degrees(degrees: Sequence[int]) -> Tuple[int, ...]:
    """Normalize a degree spec to a tuple of non-negative Python ints."""
    out = []
    for i, deg in enumerate(degrees):
        try:
            d = operator.index(deg)
        except TypeError:
            raise InvalidArgumentError(f"degree of variable {i} must be an integer, got {deg!r}") from None
        if d < 0:
            raise InvalidArgumentError(f"degree of variable {i} must be >= 0, got {d}")
        out.append(int(d))
    return tuple(out)


def compute_num_basis_functions(degrees: Sequence[int]) -> int:
    """
    Number of tensor-product monomials, prod(d_i + 1).

    Returns 1 for an empty spec. Python ints do not wrap, so the only ceiling
    is the memory needed to hold a coefficient vector of that length.
    """
    num_monomials = 1
    for deg in validate_degrees(degrees):
        num_monomials *= deg + 1
    return num_monomials


def monomial_index(degrees: Sequence[int], powers: Sequence[int]) -> int:
    """Position of x_0^p_0 * ... * x_{n-1}^p_{n-1} in the basis vector (last variable fastest)."""
    degrees = validate_degrees(degrees)
    if len(powers) != len(degrees):
        raise InvalidArgumentError(f"expected {len(degrees)} powers, got {len(powers)}")
    index = 0
    for i, (p, deg) in enumerate(zip(powers, degrees)):
        p = operator.index(p)
        if p < 0 or p > deg:
            raise InvalidArgumentError(f"power {p} of variable {i} outside [0, {deg}]")
        index = index * (deg + 1) + p
    return index


def power_vector(xi: float, degree: int) -> np.ndarray:
    """[1, x, x^2, ..., x^degree]; entry 0 is 1 also for x == 0."""
    return np.power(float(xi), np.arange(degree + 1, dtype=np.float64))


def differentiated_power_vector(xi: float, degree: int) -> np.ndarray:
    """[0, 1, 2x, ..., degree * x^(degree-1)]."""
    out = np.zeros(degree + 1, dtype=np.float64)
    if degree > 0:
        j = np.arange(1, degree + 1, dtype=np.float64)
        out[1:] = j * np.power(float(xi), j - 1.0)
    return out


class TensorMonomialBasis(Basis):
    """
    Tensor-product monomial basis in n variables.

    Basis function k is x_0^j_0 * ... * x_{n-1}^j_{n-1} with
    k = ravel_multi_index((j_0, ..., j_{n-1}), (d_0+1, ..., d_{n-1}+1)), i.e. the
    Kronecker product of the per-variable power vectors with the last
    variable varying fastest.

    Parameters
    ----------
    degrees : sequence of int
        Highest power per variable. A zero entry makes the basis constant
        along that variable.
    """
    def __init__(self, degrees: Sequence[int]):
        self.degrees: Tuple[int, ...] = validate_degrees(degrees)
        self._num_basis = compute_num_basis_functions(self.degrees)

    def num_variables(self) -> int:
        return len(self.degrees)

    def num_basis(self) -> int:
        return self._num_basis

    # ---- point evaluation (NumPy) ----
    def _check_point(self, x) -> np.ndarray:
        x = to_point(x)
        if x.shape[0] != self.num_variables():
            raise InvalidArgumentError(
                f"point has {x.shape[0]} coordinates, expected {self.num_variables()}"
            )
        return x

    def _check_variable(self, var) -> int:
        # bools pass operator.index but are not variable numbers
        if isinstance(var, (bool, np.bool_)):
            raise InvalidArgumentError(f"invalid variable {var!r}")
        try:
            v = operator.index(var)
        except TypeError:
            raise InvalidArgumentError(f"invalid variable {var!r}") from None
        if v < 0 or v >= self.num_variables():
            raise InvalidArgumentError(
                f"invalid variable {v}: expected 0 <= var < {self.num_variables()}"
            )
        return v

    def power_vectors(self, x, differentiate: Optional[int] = None) -> List[np.ndarray]:
        """Per-variable power vectors; variable `differentiate` gets the derivative vector."""
        x = self._check_point(x)
        powers = []
        for i, deg in enumerate(self.degrees):
            if i == differentiate:
                powers.append(differentiated_power_vector(x[i], deg))
            else:
                powers.append(power_vector(x[i], deg))
        return powers

    def evaluate(self, x) -> np.ndarray:
        return kronecker_product_vectors(self.power_vectors(x))

    def evaluate_differentiated(self, x, var: int) -> np.ndarray:
        """d/dx_var of every basis function at x, shape (num_basis,)."""
        var = self._check_variable(var)
        return kronecker_product_vectors(self.power_vectors(x, differentiate=var))

    def jacobian(self, x) -> np.ndarray:
        x = self._check_point(x)
        jac = np.zeros((self._num_basis, self.num_variables()), dtype=np.float64)
        for var in range(self.num_variables()):
            jac[:, var] = self.evaluate_differentiated(x, var)
        return jac

    # ---- batched evaluation (TensorFlow; accepts np or tf) ----
    def model_matrix(self, X_batch: ArrayLike) -> tf.Tensor:
        """
        X_batch: (B, m, n) or (m, n)  (np.ndarray or tf.Tensor)
        Returns Z: (B, m, p) or (m, p), row i holding the basis at point i.
        """
        # arrays and lists run in float64 like point evaluation; tensors keep their dtype
        X = to_tensor(X_batch) if isinstance(X_batch, tf.Tensor) else to_tensor(X_batch, dtype=tf.float64)
        unbatched = X.shape.rank == 2
        if unbatched:
            X = tf.expand_dims(X, axis=0)  # (1, m, n)
        if X.shape.rank != 3 or X.shape[-1] != self.num_variables():
            raise InvalidArgumentError(
                f"Expected (m, {self.num_variables()}) or (B, m, {self.num_variables()}) points, got {X.shape}"
            )

        Z = tf.ones_like(X[..., :1])                         # (B, m, 1)
        for i, deg in enumerate(self.degrees):
            exponents = tf.range(deg + 1, dtype=X.dtype)     # (d+1,)
            pw = tf.pow(X[..., i:i + 1], exponents)          # (B, m, d+1)
            outer = Z[..., :, None] * pw[..., None, :]       # (B, m, k, d+1)
            Z = tf.reshape(outer, tf.concat([tf.shape(outer)[:-2], [-1]], axis=0))

        return tf.squeeze(Z, axis=0) if unbatched else Z
