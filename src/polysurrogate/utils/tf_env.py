# src/polysurrogate/utils/tf_env.py
import logging

import numpy as np
import tensorflow as tf

logger = logging.getLogger(__name__)


def initialize(seed: int = 42, *, floatx: str = "float64") -> None:
    """
    Prepare TensorFlow for a batched run: seed the global RNGs and set the
    Keras float policy that `to_tensor` falls back on for non-tensor input.

    Batched evaluation compares against float64 point evaluation, so anything
    coarser than float64 is rejected.
    """
    if tf.as_dtype(floatx) != tf.float64:
        raise ValueError(f"batched evaluation needs float64, got {floatx!r}")
    np.random.seed(seed)
    tf.random.set_seed(seed)
    tf.keras.backend.set_floatx(floatx)
    logger.debug(f"TF initialized: seed={seed} floatx={floatx}")
