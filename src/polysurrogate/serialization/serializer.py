"""
Binary serializer
Encodes an object's state (a flat mapping of names to NumPy arrays) into a
single .npz byte stream, and restores it again.

An object takes part by implementing

    serialize_state(self) -> Dict[str, np.ndarray]
    restore_state(self, state: Mapping[str, np.ndarray]) -> None

The stream also records the object's class name and a format version, which
`deserialize` checks before handing the arrays back to the object.
"""
from __future__ import annotations

import io
import logging
import os
import tempfile
import zipfile
from typing import Dict, Optional, Union

import numpy as np

from polysurrogate.exceptions import PersistenceError

logger = logging.getLogger(__name__)

PathLike = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]

FORMAT_VERSION = 1
_TYPE_KEY = "__type__"
_VERSION_KEY = "__version__"


def normalize_path(path: PathLike) -> str:
    """Accept narrow (bytes) and wide (str) paths as well as path objects."""
    return os.fsdecode(os.fspath(path))


class Serializer:
    """
    Holds one encoded object state.

    Serializer()            -> empty, fill with serialize(obj)
    Serializer(path)        -> read and decode a file
    Serializer.from_bytes() -> decode an in-memory stream
    """
    def __init__(self, path: Optional[PathLike] = None) -> None:
        self._state: Optional[Dict[str, np.ndarray]] = None
        if path is not None:
            self.load_from_file(path)

    # ---- encoding ----
    def serialize(self, obj) -> bytes:
        """Capture obj's state and return the encoded stream."""
        state = obj.serialize_state()
        for key in state:
            if key.startswith("__"):
                raise PersistenceError(f"reserved state key {key!r}")
        encoded = {
            _TYPE_KEY: np.array(type(obj).__name__),
            _VERSION_KEY: np.array(FORMAT_VERSION, dtype=np.int64),
        }
        encoded.update({key: np.asarray(value) for key, value in state.items()})
        self._state = encoded
        return self.to_bytes()

    def to_bytes(self) -> bytes:
        if self._state is None:
            raise PersistenceError("nothing has been serialized")
        buf = io.BytesIO()
        np.savez(buf, **self._state)
        return buf.getvalue()

    def save_to_file(self, path: PathLike) -> None:
        filepath = normalize_path(path)
        data = self.to_bytes()
        logger.info(f"Saving {self.type_name} to: {filepath}")
        directory = os.path.dirname(os.path.abspath(filepath))
        # Write next to the target, then swap it in so readers never see a partial file
        fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", dir=directory)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_path, filepath)
        except Exception as e:
            logger.exception(f"Failed to save to '{filepath}': {e}")
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.debug(f"Wrote {len(data)} bytes to {filepath}")

    # ---- decoding ----
    @classmethod
    def from_bytes(cls, data: bytes) -> "Serializer":
        s = cls()
        s._state = _decode(data)
        return s

    def load_from_file(self, path: PathLike) -> None:
        filepath = normalize_path(path)
        logger.info(f"Loading from: {filepath}")
        with open(filepath, "rb") as f:
            data = f.read()
        try:
            self._state = _decode(data)
        except PersistenceError as e:
            logger.error(f"File '{filepath}' is not a valid serialized stream: {e}")
            raise

    @property
    def type_name(self) -> Optional[str]:
        if self._state is None:
            return None
        return str(self._state[_TYPE_KEY])

    def deserialize(self, obj) -> None:
        """Hand the decoded state to obj.restore_state after checking its type."""
        if self._state is None:
            raise PersistenceError("nothing has been loaded")
        expected = type(obj).__name__
        if self.type_name != expected:
            raise PersistenceError(f"stream holds a {self.type_name}, cannot restore a {expected}")
        payload = {k: v for k, v in self._state.items() if not k.startswith("__")}
        obj.restore_state(payload)


def _decode(data: bytes) -> Dict[str, np.ndarray]:
    try:
        loaded = np.load(io.BytesIO(data), allow_pickle=False)
        # a bare .npy payload decodes to an ndarray, not an archive
        if not hasattr(loaded, "files"):
            raise PersistenceError("malformed stream: not an archive")
        with loaded as npz:
            state = {key: npz[key] for key in npz.files}
    except PersistenceError:
        raise
    except (ValueError, EOFError, KeyError, OSError, zipfile.BadZipFile) as e:
        raise PersistenceError(f"malformed stream: {e}") from e

    if _TYPE_KEY not in state or _VERSION_KEY not in state:
        raise PersistenceError("malformed stream: missing header")
    raw_version = state[_VERSION_KEY]
    if raw_version.ndim != 0 or not np.issubdtype(raw_version.dtype, np.integer):
        raise PersistenceError("malformed stream: bad format version")
    version = int(raw_version)
    if version != FORMAT_VERSION:
        raise PersistenceError(f"unsupported format version {version}")
    return state
