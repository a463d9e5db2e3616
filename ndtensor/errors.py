"""
ndtensor: Errors

Every failure raised by the engine derives from TensorError. Each kind also
derives from the closest builtin exception so that generic handlers
(``except ValueError``) keep working.

"""


class TensorError(Exception):
    """Base class for all ndtensor errors."""


class InvalidShape(TensorError, ValueError):
    """The size sequence is empty, non-integer or contains values < 1."""


class ShapeMismatch(TensorError, ValueError):
    """Operand shapes are incompatible for the requested operation."""


class RankMismatch(TensorError, IndexError):
    """The number of indices differs from the tensor dimension."""


class IndexOutOfRange(TensorError, IndexError):
    """An index or flat key lies outside the valid bounds."""


class InvalidDegree(TensorError, ValueError):
    """The contraction degree is out of the allowed range."""


class InvalidData(TensorError, TypeError):
    """Malformed buffer, nested array or JSON payload."""


class AliasingViolation(TensorError, ValueError):
    """A buffer already backing a live tensor was used to construct another."""


class InsufficientOperands(TensorError, ValueError):
    """An n-ary operation received fewer operands than it needs."""
