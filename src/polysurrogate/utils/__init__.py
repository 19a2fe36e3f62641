from polysurrogate.utils.backend import to_tensor, to_float, to_point, ArrayLike
from polysurrogate.utils.kronecker import kronecker_product_vectors

__all__ = ["to_tensor", "to_float", "to_point", "ArrayLike", "kronecker_product_vectors"]
