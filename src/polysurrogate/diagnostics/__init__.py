from polysurrogate.diagnostics.core import (
    finite_difference_jacobian,
    jacobian_error,
    gradient_error,
    compare_functions,
)
from polysurrogate.diagnostics.sampling import make_uniform_sampler, make_sobol_sampler, grid_points
from polysurrogate.diagnostics.reference_functions import ReferenceFunction, make_reference_functions

__all__ = [
    "finite_difference_jacobian",
    "jacobian_error",
    "gradient_error",
    "compare_functions",
    "make_uniform_sampler",
    "make_sobol_sampler",
    "grid_points",
    "ReferenceFunction",
    "make_reference_functions",
]
