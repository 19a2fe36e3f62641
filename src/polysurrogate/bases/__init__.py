from polysurrogate.bases.base import Basis
from polysurrogate.bases.monomial import (
    TensorMonomialBasis,
    compute_num_basis_functions,
    monomial_index,
    power_vector,
    differentiated_power_vector,
)

__all__ = [
    "Basis",
    "TensorMonomialBasis",
    "compute_num_basis_functions",
    "monomial_index",
    "power_vector",
    "differentiated_power_vector",
]
