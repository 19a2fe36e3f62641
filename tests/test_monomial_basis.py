import numpy as np
import pytest
import tensorflow as tf

from polysurrogate.bases.monomial import (
    TensorMonomialBasis,
    compute_num_basis_functions,
    differentiated_power_vector,
    monomial_index,
    power_vector,
)
from polysurrogate.diagnostics.core import finite_difference_jacobian
from polysurrogate.exceptions import InvalidArgumentError
from polysurrogate.utils.kronecker import kronecker_product_vectors


def test_num_basis_functions():
    assert compute_num_basis_functions([]) == 1
    assert compute_num_basis_functions([2]) == 3
    assert compute_num_basis_functions([1, 1]) == 4
    assert compute_num_basis_functions([3, 0, 2]) == 12


def test_num_basis_functions_does_not_wrap():
    """70 linear variables exceed 64 bits; the count must stay exact."""
    assert compute_num_basis_functions([1] * 70) == 2 ** 70


def test_negative_degree_rejected():
    with pytest.raises(InvalidArgumentError):
        compute_num_basis_functions([2, -1])
    with pytest.raises(InvalidArgumentError):
        TensorMonomialBasis([1.5])


def test_kronecker_order_last_fastest():
    out = kronecker_product_vectors([np.array([1.0, 2.0]), np.array([3.0, 4.0, 5.0])])
    np.testing.assert_array_equal(out, [3.0, 4.0, 5.0, 6.0, 8.0, 10.0])
    np.testing.assert_array_equal(kronecker_product_vectors([]), [1.0])


def test_power_vectors_at_zero():
    np.testing.assert_array_equal(power_vector(0.0, 3), [1.0, 0.0, 0.0, 0.0])
    np.testing.assert_array_equal(differentiated_power_vector(0.0, 3), [0.0, 1.0, 0.0, 0.0])
    np.testing.assert_array_equal(differentiated_power_vector(4.0, 0), [0.0])


def test_single_variable_degree_two():
    basis = TensorMonomialBasis([2])
    np.testing.assert_allclose(basis.evaluate([3.0]), [1.0, 3.0, 9.0])
    np.testing.assert_allclose(basis.jacobian([3.0])[:, 0], [0.0, 1.0, 6.0])


def test_two_variables_degree_one():
    basis = TensorMonomialBasis([1, 1])
    x = [2.0, 5.0]
    np.testing.assert_allclose(basis.evaluate(x), [1.0, 5.0, 2.0, 10.0])
    jac = basis.jacobian(x)
    assert jac.shape == (4, 2)
    np.testing.assert_allclose(jac[:, 0], [0.0, 0.0, 1.0, 5.0])
    np.testing.assert_allclose(jac[:, 1], [0.0, 1.0, 0.0, 2.0])


def test_zero_degree_dimension_is_constant():
    basis = TensorMonomialBasis([2, 0])
    for y in (-3.0, 0.0, 7.0):
        np.testing.assert_allclose(basis.evaluate([1.5, y]), [1.0, 1.5, 2.25])
        np.testing.assert_array_equal(basis.jacobian([1.5, y])[:, 1], np.zeros(3))


def test_basis_length_matches_count():
    rng = np.random.default_rng(0)
    for degrees in ([0], [4], [2, 3], [1, 0, 2], [3, 1, 1, 2]):
        basis = TensorMonomialBasis(degrees)
        x = rng.uniform(-1, 1, size=len(degrees))
        assert basis.evaluate(x).shape == (compute_num_basis_functions(degrees),)
        assert basis.jacobian(x).shape == (compute_num_basis_functions(degrees), len(degrees))


def test_jacobian_matches_finite_differences():
    rng = np.random.default_rng(1)
    basis = TensorMonomialBasis([3, 2, 1])
    for _ in range(10):
        x = rng.uniform(-1.5, 1.5, size=3)
        numeric = finite_difference_jacobian(basis.evaluate, x, h=1e-6)
        np.testing.assert_allclose(basis.jacobian(x), numeric, atol=1e-6)


def test_monomial_index_matches_evaluation():
    degrees = [3, 2]
    basis = TensorMonomialBasis(degrees)
    x, y = 1.7, -0.4
    values = basis.evaluate([x, y])
    assert monomial_index(degrees, (1, 2)) == 5
    assert values[monomial_index(degrees, (1, 2))] == pytest.approx(x * y ** 2)
    assert values[monomial_index(degrees, (3, 0))] == pytest.approx(x ** 3)
    with pytest.raises(InvalidArgumentError):
        monomial_index(degrees, (4, 0))
    with pytest.raises(InvalidArgumentError):
        monomial_index(degrees, (1,))


@pytest.mark.parametrize("var", [-1, 2, 10, True, False, 1.0])
def test_invalid_variable(var):
    basis = TensorMonomialBasis([1, 1])
    with pytest.raises(InvalidArgumentError, match="invalid variable"):
        basis.evaluate_differentiated([0.0, 0.0], var)


def test_point_length_checked():
    basis = TensorMonomialBasis([1, 1])
    with pytest.raises(InvalidArgumentError):
        basis.evaluate([1.0, 2.0, 3.0])


def test_model_matrix_matches_pointwise():
    basis = TensorMonomialBasis([2, 1, 3])
    X = np.random.default_rng(2).uniform(-1, 1, size=(5, 3))
    Z = basis.model_matrix(tf.constant(X, dtype=tf.float64))
    assert tuple(Z.shape) == (5, basis.num_basis())
    expected = np.stack([basis.evaluate(x) for x in X])
    np.testing.assert_allclose(Z.numpy(), expected, rtol=1e-12, atol=1e-12)


def test_model_matrix_batched():
    basis = TensorMonomialBasis([1, 2])
    X = np.random.default_rng(3).uniform(-1, 1, size=(4, 6, 2))
    Z = basis.model_matrix(tf.constant(X, dtype=tf.float64))
    assert tuple(Z.shape) == (4, 6, 6)
    np.testing.assert_allclose(Z.numpy()[2, 3], basis.evaluate(X[2, 3]), atol=1e-12)


def test_model_matrix_zero_point():
    basis = TensorMonomialBasis([2])
    Z = basis.model_matrix(tf.constant([[0.0]], dtype=tf.float64))
    np.testing.assert_array_equal(Z.numpy(), [[1.0, 0.0, 0.0]])


def test_model_matrix_shape_checked():
    basis = TensorMonomialBasis([1, 1])
    with pytest.raises(InvalidArgumentError):
        basis.model_matrix(tf.zeros((3, 3), dtype=tf.float64))


def test_model_matrix_numpy_input_is_float64():
    basis = TensorMonomialBasis([3, 2])
    X = np.array([[1.1, -0.3], [0.7, 2.9]])
    Z = basis.model_matrix(X)
    assert Z.dtype == tf.float64
    expected = np.stack([basis.evaluate(x) for x in X])
    np.testing.assert_allclose(Z.numpy(), expected, rtol=1e-14)
