from numba import njit
import numpy as np
from .constants import *

##########################################################################################
# Core functions for multi-index enumeration
##########################################################################################


def odometer_advance(
    indices,
    size):
    """
    Advance a multi-index one step in row-major order (carry-and-reset).

    Starting at the last axis, every axis that sits at its maximum is skipped
    leftwards; the first axis below its maximum is incremented and every axis
    to its right is reset to zero.

    Args:
        indices: mutable multi-index (list or int64 array), advanced in place
        size: extent of each axis

    Returns:
        int: the carry position that was incremented, or EXHAUSTED (-1) when
             indices already held the last multi-index
    """
    pos = len(indices) - 1
    while indices[pos] == size[pos] - 1:
        pos -= 1
        if pos < 0:
            return EXHAUSTED
    indices[pos] += 1
    for reset in range(pos + 1, len(indices)):
        indices[reset] = 0
    return pos


# the same step compiled for the kernels (contraction walks it in nopython mode)
odometer_advance_nb_core = njit(sig_odometer_advance, cache=True)(odometer_advance)


@njit(sig_odometer_table, cache=True)
def odometer_table_nb_core(
    size):
    """
    Materialise every multi-index of a shape, one row per flat key.

    Args:
        size: extent of each axis (int64)

    Returns:
        (prod(size), len(size)) int64 table in row-major order
    """
    dim = size.shape[0]
    length = 1
    for p in range(dim):
        length *= size[p]
    out = np.zeros((length, dim), dtype=np.int64)
    indices = np.zeros(dim, dtype=np.int64)
    for key in range(1, length):
        odometer_advance_nb_core(indices, size)
        for p in range(dim):
            out[key, p] = indices[p]
    return out


def odometer_table_np_core(
    size) -> np.ndarray:
    """
    Materialise every multi-index of a shape with numpy.

    Args:
        size: extent of each axis

    Returns:
        (prod(size), len(size)) int64 table in row-major order
    """
    length = int(np.prod(size, dtype=np.int64))
    return np.stack(np.unravel_index(np.arange(length, dtype=np.int64), tuple(size)),
                    axis=-1).astype(np.int64)


def count_positions(
    size) -> int:
    """Number of multi-indices an odometer over size visits."""
    length = 1
    for value in size:
        length *= int(value)
    return length
