import numpy as np
import pytest

from polysurrogate.diagnostics import (
    compare_functions,
    finite_difference_jacobian,
    gradient_error,
    grid_points,
    jacobian_error,
    make_reference_functions,
    make_sobol_sampler,
    make_uniform_sampler,
)
from polysurrogate.exceptions import InvalidArgumentError


def test_reference_functions_are_fresh_lists():
    a = make_reference_functions()
    b = make_reference_functions()
    assert a is not b
    assert [f.name for f in a] == [f.name for f in b]
    assert len({f.name for f in a}) == len(a)


@pytest.mark.parametrize("ref", make_reference_functions(), ids=lambda f: f.name)
def test_models_reproduce_reference_functions(ref):
    model = ref.build_model()
    assert model.get_num_variables() == ref.num_variables
    points = make_uniform_sampler(-2.0, 2.0, seed=0)(20, ref.num_variables)
    assert compare_functions(model, ref.value, points) < 1e-10
    for x in points:
        np.testing.assert_allclose(model.eval_jacobian(x)[0], ref.gradient(x), atol=1e-10)


@pytest.mark.parametrize("ref", make_reference_functions(), ids=lambda f: f.name)
def test_analytic_derivatives_agree_with_finite_differences(ref):
    model = ref.build_model()
    points = make_sobol_sampler(-1.0, 1.0, seed=1)(16, ref.num_variables)
    assert jacobian_error(model, points) < 1e-6
    assert gradient_error(model, points) < 1e-6


def test_finite_difference_of_scalar_function():
    jac = finite_difference_jacobian(lambda x: x[0] ** 2 + 3.0 * x[1], [2.0, 1.0])
    assert jac.shape == (1, 2)
    np.testing.assert_allclose(jac, [[4.0, 3.0]], atol=1e-6)
    with pytest.raises(InvalidArgumentError):
        finite_difference_jacobian(lambda x: x, [1.0], h=0.0)


def test_samplers_stay_in_bounds():
    for make in (make_uniform_sampler, make_sobol_sampler):
        pts = make(-0.5, 2.0, seed=4)(10, 3)
        assert pts.shape == (10, 3)
        assert np.all(pts >= -0.5) and np.all(pts <= 2.0)


def test_grid_points():
    pts = grid_points(0.0, 1.0, 3, 2)
    assert pts.shape == (9, 2)
    np.testing.assert_array_equal(pts[1], [0.0, 0.5])


def test_point_arrays_must_be_2d():
    model = make_reference_functions()[0].build_model()
    with pytest.raises(InvalidArgumentError):
        jacobian_error(model, np.zeros(3))
