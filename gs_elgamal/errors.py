"""
Exception Hierarchy
===================

- DecodeError: malformed, truncated or wrongly-typed encoded input
- ShapeError: matrix dimension mismatch or an ill-formed proof statement

A proof that fails verification is not an error: ``verify`` returns False.
"""


class GsElGamalError(Exception):
    """Base class for all errors raised by this package."""


class DecodeError(GsElGamalError, ValueError):
    """Raised when bytes or a transport dict cannot be decoded into a value."""


class ShapeError(GsElGamalError, ValueError):
    """Raised when matrix or vector dimensions do not line up.

    In ``prove`` this signals a caller bug (the statement was built with
    mismatched witness/public vectors), not an adversarial input.
    """
