from __future__ import annotations
import numpy as np

from polysurrogate.exceptions import InvalidArgumentError, InvariantViolationError


class LinearCombination:
    """
    Owner of a coefficient vector c over some basis of `num_variables` inputs.

    Performs the final inner products c . phi(x) and c^T J_phi(x); it knows
    nothing about how the basis is built.
    """
    def __init__(self, num_variables: int, coefficients) -> None:
        if int(num_variables) < 1:
            raise InvalidArgumentError("num_variables must be >= 1")
        self.num_variables = int(num_variables)
        self._coefficients = self._as_vector(coefficients)

    @staticmethod
    def _as_vector(coefficients) -> np.ndarray:
        c = np.array(coefficients, dtype=np.float64)
        if c.ndim != 1:
            c = c.reshape(-1)
        return c

    def num_coefficients(self) -> int:
        return int(self._coefficients.shape[0])

    def get_coefficients(self) -> np.ndarray:
        return self._coefficients.copy()

    def set_coefficients(self, coefficients) -> None:
        c = self._as_vector(coefficients)
        if c.shape[0] != self.num_coefficients():
            raise InvalidArgumentError(
                f"expected {self.num_coefficients()} coefficients, got {c.shape[0]}"
            )
        self._coefficients = c

    def combine(self, basis: np.ndarray) -> float:
        """c . phi for a basis vector phi of matching length."""
        basis = np.asarray(basis, dtype=np.float64)
        if basis.shape[0] != self.num_coefficients():
            raise InvariantViolationError(
                f"basis has {basis.shape[0]} entries but there are {self.num_coefficients()} coefficients"
            )
        return float(self._coefficients @ basis)

    def combine_jacobian(self, basis_jacobian: np.ndarray) -> np.ndarray:
        """c^T J for a (num_coefficients, num_variables) basis Jacobian -> (1, num_variables)."""
        basis_jacobian = np.asarray(basis_jacobian, dtype=np.float64)
        if basis_jacobian.shape[0] != self.num_coefficients():
            raise InvariantViolationError(
                f"basis Jacobian has {basis_jacobian.shape[0]} rows but there are "
                f"{self.num_coefficients()} coefficients"
            )
        return (self._coefficients @ basis_jacobian).reshape(1, -1)
