import numbers
from typing import Sequence, Tuple

import numpy as np

from ...errors import InvalidShape
from .constants import *

##########################################################################################
# Core functions for shape and stride descriptors
##########################################################################################


def is_integer(
    value) -> bool:
    """True for python and numpy integers, False for bools and floats."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_size(
    size) -> Tuple[int, ...]:
    """
    Check a size sequence and normalise it to a tuple of python ints.

    Args:
        size (Sequence[int]): one or more integers >= 1

    Returns:
        Tuple[int, ...]: the normalised size

    Raises:
        InvalidShape: if size is not a sequence, is empty, contains a non-integer,
                      contains a value < 1 or describes more than MAX_TENSOR_LENGTH entries.
    """
    if isinstance(size, np.ndarray) and size.ndim == 1:
        size = size.tolist()
    if isinstance(size, (str, bytes)) or not isinstance(size, Sequence):
        raise InvalidShape(f"The size of a tensor must be a sequence of integers. Got {type(size).__name__}")
    if len(size) == 0:
        raise InvalidShape("The size of a tensor must include entries.")

    length = 1
    for value in size:
        if not is_integer(value):
            raise InvalidShape(f"The size of a tensor must consist of integers. Got {value!r} in {list(size)}")
        if value < MIN_AXIS_SIZE:
            raise InvalidShape(f"The size of a tensor must not contain numbers less than {MIN_AXIS_SIZE}. Got {list(size)}")
        length *= int(value)
    if length > MAX_TENSOR_LENGTH:
        raise InvalidShape(f"The size {list(size)} describes {length} entries, more than {MAX_TENSOR_LENGTH}.")

    return tuple(int(value) for value in size)


def compute_offset(
    size : Sequence[int]) -> Tuple[int, ...]:
    """
    Row-major strides: offset[i] = prod(size[i+1:]), so the last axis is contiguous.

    Args:
        size (Sequence[int]): validated size

    Returns:
        Tuple[int, ...]: the stride of each axis
    """
    offset = [1] * len(size)
    for i in range(len(size) - 2, -1, -1):
        offset[i] = offset[i + 1] * size[i + 1]
    return tuple(offset)


def compute_length(
    size : Sequence[int]) -> int:
    """Number of entries described by a size."""
    length = 1
    for value in size:
        length *= value
    return length
