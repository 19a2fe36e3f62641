from typing import Protocol
import numpy as np

class Basis(Protocol):
    """A multivariate basis: a fixed, ordered set of functions of one point."""

    def num_variables(self) -> int:
        """Dimension of the input point."""
        ...

    def num_basis(self) -> int:
        """Number of basis functions."""
        ...

    def evaluate(self, x: np.ndarray) -> np.ndarray:
        """All basis functions at point x, shape (num_basis,)."""
        ...

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        """Partial derivatives at x, shape (num_basis, num_variables)."""
        ...
