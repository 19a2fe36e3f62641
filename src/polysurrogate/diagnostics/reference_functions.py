"""
Reference polynomials with known values and gradients.

`make_reference_functions()` builds a fresh list on every call; there is no
shared registry to populate or reset.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple
import numpy as np

from polysurrogate.models.polynomial import PolynomialModel


@dataclass(frozen=True)
class ReferenceFunction:
    name: str
    degrees: Tuple[int, ...]
    terms: Dict[Tuple[int, ...], float]
    value: Callable[[np.ndarray], float]
    gradient: Callable[[np.ndarray], np.ndarray]

    @property
    def num_variables(self) -> int:
        return len(self.degrees)

    def build_model(self) -> PolynomialModel:
        return PolynomialModel.from_terms(self.degrees, self.terms)


def make_reference_functions() -> List[ReferenceFunction]:
    return [
        ReferenceFunction(
            name="quadratic_1d",
            degrees=(2,),
            terms={(0,): 1.0, (1,): -2.0, (2,): 3.0},
            value=lambda x: 1.0 - 2.0 * x[0] + 3.0 * x[0] ** 2,
            gradient=lambda x: np.array([-2.0 + 6.0 * x[0]]),
        ),
        ReferenceFunction(
            name="bilinear_2d",
            degrees=(1, 1),
            terms={(0, 0): 0.5, (1, 0): 1.0, (0, 1): -1.0, (1, 1): 2.0},
            value=lambda x: 0.5 + x[0] - x[1] + 2.0 * x[0] * x[1],
            gradient=lambda x: np.array([1.0 + 2.0 * x[1], -1.0 + 2.0 * x[0]]),
        ),
        ReferenceFunction(
            name="mixed_2d",
            degrees=(3, 2),
            terms={(3, 0): 1.0, (1, 2): -4.0, (0, 1): 0.25},
            value=lambda x: x[0] ** 3 - 4.0 * x[0] * x[1] ** 2 + 0.25 * x[1],
            gradient=lambda x: np.array([
                3.0 * x[0] ** 2 - 4.0 * x[1] ** 2,
                -8.0 * x[0] * x[1] + 0.25,
            ]),
        ),
        ReferenceFunction(
            name="constant_in_y_3d",
            degrees=(2, 0, 1),
            terms={(2, 0, 1): 1.5, (0, 0, 0): -1.0},
            value=lambda x: 1.5 * x[0] ** 2 * x[2] - 1.0,
            gradient=lambda x: np.array([3.0 * x[0] * x[2], 0.0, 1.5 * x[0] ** 2]),
        ),
    ]
