import numpy as np
import pytest
import tensorflow as tf

from polysurrogate.utils.backend import to_float, to_point, to_tensor


def test_to_point_flattens():
    np.testing.assert_array_equal(to_point(2.5), [2.5])
    np.testing.assert_array_equal(to_point([[1, 2], [3, 4]]), [1.0, 2.0, 3.0, 4.0])
    np.testing.assert_array_equal(to_point(tf.constant([1.0, -1.0])), [1.0, -1.0])
    assert to_point([1, 2]).dtype == np.float64


def test_to_tensor_keeps_tensor_dtype():
    t = tf.constant([1.0], dtype=tf.float64)
    assert to_tensor(t).dtype == tf.float64
    assert to_tensor(t, dtype=tf.float32).dtype == tf.float32
    assert to_tensor(np.ones(2), dtype=tf.float64).dtype == tf.float64


def test_to_float():
    assert to_float(tf.constant(3.5)) == 3.5
    assert to_float(2) == 2.0


def test_tf_initialize_sets_float64_policy():
    from polysurrogate.utils.tf_env import initialize

    previous = tf.keras.backend.floatx()
    try:
        initialize(seed=5)
        assert tf.keras.backend.floatx() == "float64"
        assert to_tensor([1.0]).dtype == tf.float64
    finally:
        tf.keras.backend.set_floatx(previous)


def test_tf_initialize_rejects_coarse_floats():
    from polysurrogate.utils.tf_env import initialize

    with pytest.raises(ValueError):
        initialize(floatx="float32")
