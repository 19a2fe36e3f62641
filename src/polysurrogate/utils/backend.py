from typing import Union
import numpy as np
import tensorflow as tf

ArrayLike = Union[np.ndarray, tf.Tensor]

def to_tensor(x, dtype=None) -> tf.Tensor:
    # Tensors keep their dtype unless one is requested
    if isinstance(x, tf.Tensor):
        return x if dtype is None or x.dtype == dtype else tf.cast(x, dtype)
    if dtype is None:
        # Use the current global Keras float policy
        dtype = tf.as_dtype(tf.keras.backend.floatx())
    return tf.convert_to_tensor(x, dtype=dtype)

def to_float(x: Union[tf.Tensor, float]) -> float:
    # Pulls a scalar tensor to a Python float (for printing, logging, etc.)
    if isinstance(x, tf.Tensor):
        return float(x.numpy())
    return float(x)

def to_point(x) -> np.ndarray:
    """Flatten a scalar, sequence, array or eager tensor into a float64 point."""
    if isinstance(x, tf.Tensor):
        x = x.numpy()
    return np.atleast_1d(np.asarray(x, dtype=np.float64)).reshape(-1)
