from polysurrogate.models.base_model import LinearFunction
from polysurrogate.models.linear import LinearCombination
from polysurrogate.models.polynomial import PolynomialModel

__all__ = [
    "LinearFunction",
    "LinearCombination",
    "PolynomialModel",
]
