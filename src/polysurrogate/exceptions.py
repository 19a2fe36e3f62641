"""Exception types raised by polysurrogate."""


class PolySurrogateError(Exception):
    """Root of all polysurrogate errors."""


class InvalidArgumentError(PolySurrogateError, ValueError):
    """A caller passed an argument outside the accepted domain
    (variable index, degree, point length, coefficient length)."""


class InvariantViolationError(PolySurrogateError, RuntimeError):
    """Computed basis size disagrees with the coefficient count.

    Signals a corrupted degree/coefficient pairing, never a bad input.
    """


class PersistenceError(PolySurrogateError, OSError):
    """A persisted stream is malformed, truncated or of the wrong type."""
