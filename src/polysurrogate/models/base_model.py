from typing import Protocol, runtime_checkable
import numpy as np


@runtime_checkable
class LinearFunction(Protocol):
    """
    Capability shared by every function of the form f(x) = c . phi(x).

    Implementations (e.g. PolynomialModel) own a basis phi and a coefficient
    vector c; nothing here is inherited, any class with these methods fits.
    """

    def get_num_variables(self) -> int:
        """Dimension of the input point."""
        ...

    def num_coefficients(self) -> int:
        """Length of the coefficient vector (== number of basis functions)."""
        ...

    def get_coefficients(self) -> np.ndarray:
        """Copy of the coefficient vector."""
        ...

    def set_coefficients(self, coefficients: np.ndarray) -> None:
        """Replace the coefficients; the length may not change."""
        ...

    def eval(self, x) -> float:
        """f(x) as a Python float."""
        ...

    def eval_jacobian(self, x) -> np.ndarray:
        """Gradient of f at x, shape (1, num_variables)."""
        ...
