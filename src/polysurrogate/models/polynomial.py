from __future__ import annotations
import logging
from typing import Dict, Mapping, Sequence, Tuple
import numpy as np
import tensorflow as tf

from polysurrogate.bases.monomial import TensorMonomialBasis, monomial_index, validate_degrees
from polysurrogate.exceptions import (
    InvalidArgumentError,
    InvariantViolationError,
    PersistenceError,
)
from polysurrogate.models.linear import LinearCombination
from polysurrogate.serialization.serializer import PathLike, Serializer
from polysurrogate.utils.backend import ArrayLike, to_tensor

logger = logging.getLogger(__name__)


class PolynomialModel:
    """
    Multivariate polynomial f(x) = c . phi(x) over a tensor-product monomial basis.

    phi(x) is the Kronecker product of the power vectors
    [1, x_i, ..., x_i^d_i] in variable order (last variable fastest), so the
    coefficient of x_0^j_0 * ... * x_{n-1}^j_{n-1} sits at
    ravel_multi_index((j_0, ..., j_{n-1}), (d_0+1, ..., d_{n-1}+1)).

    Queries never modify the model and may run concurrently on one instance.
    `load` and `set_coefficients` replace state: callers must keep them
    exclusive with respect to queries and to each other.

    Parameters
    ----------
    degrees : sequence of int
        Highest power per variable (>= 0). At least one variable.
    coefficients : array-like, optional
        Coefficient vector of length prod(d_i + 1). Zeros when omitted.
    """
    def __init__(self, degrees: Sequence[int], coefficients=None) -> None:
        degrees = validate_degrees(degrees)
        if not degrees:
            raise InvalidArgumentError("a polynomial needs at least one variable")
        basis = TensorMonomialBasis(degrees)
        if coefficients is None:
            coefficients = np.zeros(basis.num_basis(), dtype=np.float64)
        else:
            coefficients = np.asarray(coefficients, dtype=np.float64).reshape(-1)
            if coefficients.shape[0] != basis.num_basis():
                raise InvalidArgumentError(
                    f"degrees {degrees} need {basis.num_basis()} coefficients, "
                    f"got {coefficients.shape[0]}"
                )
        self._basis = basis
        self._linear = LinearCombination(len(degrees), coefficients)
        logger.debug(f"Created {self.get_description()} with {basis.num_basis()} coefficients")

    # ---- alternative constructors ----
    @classmethod
    def uniform(cls, num_variables: int, degree: int) -> "PolynomialModel":
        """Same degree for every variable; zero coefficients."""
        return cls([degree] * int(num_variables))

    @classmethod
    def from_terms(cls, degrees: Sequence[int], terms: Mapping[Sequence[int], float]) -> "PolynomialModel":
        """Coefficients given per monomial, e.g. {(1, 0): 2.0, (0, 2): -1.0} for 2x - y^2."""
        model = cls(degrees)
        coefficients = model.get_coefficients()
        for powers, value in terms.items():
            coefficients[monomial_index(model.degrees, tuple(powers))] += float(value)
        model.set_coefficients(coefficients)
        return model

    @classmethod
    def from_file(cls, path: PathLike) -> "PolynomialModel":
        model = cls([0])
        model.load(path)
        return model

    # ---- coefficient bookkeeping ----
    @property
    def degrees(self) -> Tuple[int, ...]:
        return self._basis.degrees

    @property
    def basis(self) -> TensorMonomialBasis:
        return self._basis

    def get_num_variables(self) -> int:
        return self._linear.num_variables

    def num_coefficients(self) -> int:
        return self._linear.num_coefficients()

    def get_coefficients(self) -> np.ndarray:
        return self._linear.get_coefficients()

    def set_coefficients(self, coefficients) -> None:
        self._linear.set_coefficients(coefficients)

    def terms(self) -> Dict[Tuple[int, ...], float]:
        """Non-zero coefficients keyed by exponent tuple, in basis order."""
        coefficients = self._linear.get_coefficients()
        dims = [d + 1 for d in self.degrees]
        return {
            tuple(int(p) for p in powers): float(coefficients[k])
            for k, powers in enumerate(np.ndindex(*dims))
            if coefficients[k] != 0.0
        }

    def _check_basis_size(self, size: int, where: str) -> None:
        if size != self.num_coefficients():
            raise InvariantViolationError(
                f"{where}: {size} basis functions != {self.num_coefficients()} coefficients"
            )

    # ---- basis queries ----
    def eval_basis_functions(self, x) -> np.ndarray:
        monomials = self._basis.evaluate(x)
        self._check_basis_size(monomials.shape[0], "eval_basis_functions")
        return monomials

    def eval_differentiated_monomials(self, x, var: int) -> np.ndarray:
        monomials = self._basis.evaluate_differentiated(x, var)
        self._check_basis_size(monomials.shape[0], "eval_differentiated_monomials")
        return monomials

    def eval_basis_functions_jacobian(self, x) -> np.ndarray:
        jac = self._basis.jacobian(x)
        self._check_basis_size(jac.shape[0], "eval_basis_functions_jacobian")
        return jac

    # ---- model queries ----
    def eval(self, x) -> float:
        return self._linear.combine(self.eval_basis_functions(x))

    def eval_jacobian(self, x) -> np.ndarray:
        """Gradient as a (1, num_variables) row."""
        return self._linear.combine_jacobian(self.eval_basis_functions_jacobian(x))

    def eval_batch(self, X_batch: ArrayLike) -> tf.Tensor:
        """
        X_batch: (m, n) or (B, m, n)
        Returns f at every point: (m,) or (B, m)
        """
        Z = self._basis.model_matrix(X_batch)
        self._check_basis_size(int(Z.shape[-1]), "eval_batch")
        c = to_tensor(self._linear.get_coefficients(), dtype=Z.dtype)
        return tf.reduce_sum(Z * c, axis=-1)

    def eval_batch_num(self, X) -> np.ndarray:
        return np.asarray(self.eval_batch(X).numpy(), dtype=np.float64)

    # ---- description ----
    def get_description(self) -> str:
        degrees = self.degrees
        if all(d == degrees[0] for d in degrees):
            return f"polynomial of degree {degrees[0]}"
        return "polynomials of degrees (" + ", ".join(str(d) for d in degrees) + ")"

    def __str__(self) -> str:
        return self.get_description()

    def __repr__(self) -> str:
        return f"PolynomialModel(degrees={list(self.degrees)}, num_coefficients={self.num_coefficients()})"

    # ---- persistence ----
    def serialize_state(self) -> Dict[str, np.ndarray]:
        return {
            "num_variables": np.array(self.get_num_variables(), dtype=np.int64),
            "degrees": np.array(self.degrees, dtype=np.int64),
            "coefficients": self._linear.get_coefficients(),
        }

    def restore_state(self, state: Mapping[str, np.ndarray]) -> None:
        """Validate a decoded state completely, then swap it in."""
        missing = {"num_variables", "degrees", "coefficients"} - set(state)
        if missing:
            raise PersistenceError(f"stream lacks {sorted(missing)}")

        raw_degrees = np.asarray(state["degrees"])
        if raw_degrees.ndim != 1 or raw_degrees.size == 0 or not np.issubdtype(raw_degrees.dtype, np.integer):
            raise PersistenceError(f"bad degree spec in stream: {raw_degrees!r}")
        try:
            basis = TensorMonomialBasis(raw_degrees.tolist())
        except InvalidArgumentError as e:
            raise PersistenceError(f"bad degree spec in stream: {e}") from e

        raw_count = np.asarray(state["num_variables"])
        if raw_count.ndim != 0 or not np.issubdtype(raw_count.dtype, np.integer):
            raise PersistenceError("bad variable count in stream")
        num_variables = int(raw_count)
        if num_variables != basis.num_variables():
            raise PersistenceError(
                f"stream says {num_variables} variables but has {basis.num_variables()} degrees"
            )

        coefficients = np.asarray(state["coefficients"])
        if coefficients.ndim != 1 or not np.issubdtype(coefficients.dtype, np.floating):
            raise PersistenceError("bad coefficient vector in stream")
        if coefficients.shape[0] != basis.num_basis():
            raise PersistenceError(
                f"stream has {coefficients.shape[0]} coefficients, degrees need {basis.num_basis()}"
            )

        self._basis = basis
        self._linear = LinearCombination(num_variables, coefficients.astype(np.float64))

    def save(self, path: PathLike) -> None:
        s = Serializer()
        s.serialize(self)
        s.save_to_file(path)

    def load(self, path: PathLike) -> None:
        s = Serializer(path)
        s.deserialize(self)
        logger.info(f"Loaded {self.get_description()} ({self.num_coefficients()} coefficients)")
