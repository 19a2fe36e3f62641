"""
polysurrogate - multivariate polynomial surrogate models.

A model is a coefficient vector over a tensor-product monomial basis, one
degree per input variable. It evaluates values, basis Jacobians and
gradients at arbitrary points and saves/restores itself to/from a file.
"""

__version__ = "0.1.0"

from . import bases
from . import diagnostics
from . import models
from . import serialization
from . import utils
from .exceptions import (
    PolySurrogateError,
    InvalidArgumentError,
    InvariantViolationError,
    PersistenceError,
)
from .bases.monomial import compute_num_basis_functions
from .models.polynomial import PolynomialModel

__all__ = [
    "__version__",

    # Main modules
    "bases",
    "diagnostics",
    "models",
    "serialization",
    "utils",

    "PolynomialModel",
    "compute_num_basis_functions",
    "PolySurrogateError",
    "InvalidArgumentError",
    "InvariantViolationError",
    "PersistenceError",
]
