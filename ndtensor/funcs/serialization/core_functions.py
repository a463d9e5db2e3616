import math
import numbers
from typing import List, Tuple

import numpy as np

from ...errors import InvalidData, ShapeMismatch
from .constants import *

##########################################################################################
# Core functions for nested-array and JSON conversion
##########################################################################################


def _is_array(
    value) -> bool:
    return isinstance(value, (list, tuple))


def _position(
    path) -> str:
    return "".join(f"[{i}]" for i in path)


def check_number(
    value,
    path=(),
    finite : bool = True) -> float:
    """
    Return value as a float if it is a real number (bools excluded).

    Args:
        value: candidate leaf
        path: multi-index of the leaf, used in messages
        finite (bool): also reject inf and nan. Default is True.

    Raises:
        InvalidData: if value is not a real number, does not fit a float64,
                     or is non-finite while finite is set
    """
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise InvalidData(f"Expected a number at position {_position(path)}. Got {value!r}")
    try:
        value = float(value)
    except OverflowError as err:
        raise InvalidData(f"The number at position {_position(path)} does not fit a float64.") from err
    if finite and not math.isfinite(value):
        raise InvalidData(f"Expected a finite number at position {_position(path)}. Got {value!r}")
    return value


def infer_size(
    nested) -> Tuple[int, ...]:
    """
    Infer the size of a nested array by following the first element of every level.

    Args:
        nested: nested list/tuple of numbers

    Returns:
        Tuple[int, ...]: the length of each nesting level
    """
    size = []
    level = nested
    while _is_array(level):
        size.append(len(level))
        if len(level) == 0:
            break
        level = level[0]
    return tuple(size)


def flatten_nested(
    nested,
    size : Tuple[int, ...]) -> np.ndarray:
    """
    Validate a nested array against size and copy its leaves in row-major order.

    Every level must be a list/tuple of exactly the inferred length and every leaf
    a finite number.

    Args:
        nested: nested list/tuple of numbers
        size (Tuple[int, ...]): size returned by infer_size

    Returns:
        np.ndarray: flat float64 buffer of length prod(size)

    Raises:
        ShapeMismatch: if sibling arrays differ in length or depth
        InvalidData: if a leaf is not a finite number
    """
    out : List[float] = []
    depth = len(size)
    stack = [(nested, ())]
    while stack:
        level, path = stack.pop()
        axis = len(path)
        if axis == depth:
            if _is_array(level):
                raise ShapeMismatch(f"Expected a number at position {_position(path)}, got a nested array")
            out.append(check_number(level, path))
            continue
        if not _is_array(level) or len(level) != size[axis]:
            raise ShapeMismatch(
                f"Expected an array of length {size[axis]} at position {_position(path)}. Got {level!r}")
        # push in reverse so the leftmost child is visited first
        for i in range(len(level) - 1, -1, -1):
            stack.append((level[i], path + (i,)))
    return np.array(out, dtype=np.float64)


def nest_flat(
    data : np.ndarray,
    size : Tuple[int, ...]) -> list:
    """
    Nested lists of python floats with nesting depth len(size).
    """
    return np.asarray(data, dtype=np.float64).reshape(size).tolist()


def check_record(
    record) -> Tuple[list, list]:
    """
    Check a parsed JSON record and return its size and data lists.

    Raises:
        InvalidData: if the record is not a serialized Tensor
    """
    if not isinstance(record, dict) or record.get("type") != JSON_TYPE_TAG:
        raise InvalidData(f"The json must be a serialized {JSON_TYPE_TAG}. Got {record!r:.80}")
    size, data = record.get("size"), record.get("data")
    if not isinstance(size, list):
        raise InvalidData(f"The serialized {JSON_TYPE_TAG} must carry a size list. Got {size!r:.80}")
    if not isinstance(data, list):
        raise InvalidData(f"The serialized {JSON_TYPE_TAG} must carry a data list. Got {data!r:.80}")
    return size, data
