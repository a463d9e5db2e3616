from numba import njit
import numpy as np
from typing import Sequence, Tuple
from ..iteration.core_functions import (
    EXHAUSTED,
    odometer_advance,
    odometer_advance_nb_core
)
from .constants import *

##########################################################################################
# Layout of the contraction walk
##########################################################################################
#
# basis  B_{b_0 .. b_{B-1}},  factor  F_{f_0 .. f_{F-1}},  degree d
# the last d basis axes coincide with the first d factor axes.
#
# One odometer runs over the combined shape  basis.size + factor.size[d:]
# (length B + F - d). Its axes split into three zones:
#
#   [0, B-d)     basis-free    -> result axis, basis axis
#   [B-d, B)     contracted    -> basis axis, factor axis
#   [B, B+F-d)   factor-free   -> result axis, factor axis
#
# All three buffers are row-major, so incrementing the carry position and zeroing
# everything to its right moves a buffer key by +1 whenever the carry axis belongs
# to that buffer and every reset axis of it was at its maximum. Per zone:
#
#   basis-free   result +1, basis +1, factor reset to 0
#   contracted   basis +1, factor +1, result loses its factor-free part:
#                -(prod(factor.size[d:]) - 1) = -(factor.offset[d-1] - 1)
#   factor-free  result +1, factor +1
#
# Several combined indices hit the same result key, so terms are accumulated.
##########################################################################################


def contraction_layout(
    basis_size : Sequence[int],
    factor_size : Sequence[int],
    factor_offset : Sequence[int],
    degree : int) -> Tuple[Tuple[int, ...], Tuple[int, ...], int]:
    """
    Derive the shapes and the backward correction for a contraction.

    Args:
        basis_size (Sequence[int]): size of the basis
        factor_size (Sequence[int]): size of the factor
        factor_offset (Sequence[int]): offset (strides) of the factor
        degree (int): number of contracted axes

    Returns:
        result_size: basis.size[:-d] + factor.size[d:] (empty for a full contraction)
        combined_size: basis.size + factor.size[d:]
        result_step_back: factor.offset[d-1] - 1
    """
    result_size = tuple(basis_size[:len(basis_size) - degree]) + tuple(factor_size[degree:])
    combined_size = tuple(basis_size) + tuple(factor_size[degree:])
    result_step_back = factor_offset[degree - 1] - 1
    return result_size, combined_size, result_step_back


##########################################################################################
# Core numba JIT functions for tensor contraction
##########################################################################################

@njit(sig_tensor_contraction, cache=True)
def tensor_contraction_nb_core(
    basis_data,
    factor_data,
    combined_size,
    basis_dim,
    degree,
    result_step_back,
    out):
    """
    Single-pass generalized product: accumulate B_{..k} F_{k..} into out
    """
    indices = np.zeros(combined_size.shape[0], dtype=np.int64)
    free_end = basis_dim - degree
    p_key = 0
    b_key = 0
    f_key = 0

    while True:
        out[p_key] += basis_data[b_key] * factor_data[f_key]

        pos = odometer_advance_nb_core(indices, combined_size)
        if pos == EXHAUSTED:
            break

        if pos >= basis_dim:
            # factor-free axis
            p_key += 1
            f_key += 1
        elif pos < free_end:
            # basis-free axis
            p_key += 1
            b_key += 1
            f_key = 0
        else:
            # contracted axis
            p_key -= result_step_back
            b_key += 1
            f_key += 1


##########################################################################################
# Core python and numpy functions for tensor contraction
##########################################################################################


def tensor_contraction_py_core(
    basis_data : np.ndarray,
    factor_data : np.ndarray,
    combined_size : Sequence[int],
    basis_dim : int,
    degree : int,
    result_step_back : int,
    out : np.ndarray) -> None:
    """
    Single-pass generalized product in pure python, same walk as the Numba kernel.
    Args:
        basis_data (np.ndarray): flat basis buffer
        factor_data (np.ndarray): flat factor buffer
        combined_size (Sequence[int]): basis.size + factor.size[degree:]
        basis_dim (int): rank of the basis
        degree (int): number of contracted axes
        result_step_back (int): factor.offset[degree-1] - 1
        out (np.ndarray): zeroed result buffer, accumulated into
    """
    indices = [0] * len(combined_size)
    free_end = basis_dim - degree
    p_key = b_key = f_key = 0

    while True:
        out[p_key] += basis_data[b_key] * factor_data[f_key]

        pos = odometer_advance(indices, combined_size)
        if pos == EXHAUSTED:
            break

        if pos >= basis_dim:
            p_key += 1
            f_key += 1
        elif pos < free_end:
            p_key += 1
            b_key += 1
            f_key = 0
        else:
            p_key -= result_step_back
            b_key += 1
            f_key += 1


def tensor_contraction_np_core(
    basis_data : np.ndarray,
    basis_size : Sequence[int],
    factor_data : np.ndarray,
    factor_size : Sequence[int],
    degree : int) -> np.ndarray:
    """
    Generalized product via numpy.tensordot on reshaped views.
    Args:
        basis_data (np.ndarray): flat basis buffer
        basis_size (Sequence[int]): size of the basis
        factor_data (np.ndarray): flat factor buffer
        factor_size (Sequence[int]): size of the factor
        degree (int): number of contracted axes
    Returns:
        the flat result buffer (length 1 for a full contraction)
    """
    out = np.tensordot(basis_data.reshape(basis_size),
                       factor_data.reshape(factor_size),
                       axes=degree)
    return np.ascontiguousarray(out, dtype=np.float64).reshape(-1)


def tensor_contraction_naive_core(
    basis_data : np.ndarray,
    basis_size : Sequence[int],
    factor_data : np.ndarray,
    factor_size : Sequence[int],
    degree : int) -> np.ndarray:
    """
    Quadratic reference: for every basis entry scan every factor entry and skip
    pairs whose shared indices disagree. Only meant for verifying the other kernels.
    Args:
        basis_data (np.ndarray): flat basis buffer
        basis_size (Sequence[int]): size of the basis
        factor_data (np.ndarray): flat factor buffer
        factor_size (Sequence[int]): size of the factor
        degree (int): number of contracted axes
    Returns:
        the flat result buffer (length 1 for a full contraction)
    """
    basis_indices = np.stack(np.unravel_index(np.arange(basis_data.shape[0]), tuple(basis_size)), axis=-1)
    factor_indices = np.stack(np.unravel_index(np.arange(factor_data.shape[0]), tuple(factor_size)), axis=-1)
    result_size = tuple(basis_size[:len(basis_size) - degree]) + tuple(factor_size[degree:])
    out = np.zeros(max(1, int(np.prod(result_size, dtype=np.int64))), dtype=np.float64)

    for b_key, b_idx in enumerate(basis_indices):
        for f_key, f_idx in enumerate(factor_indices):
            if tuple(b_idx[len(b_idx) - degree:]) != tuple(f_idx[:degree]):
                continue
            p_idx = tuple(b_idx[:len(b_idx) - degree]) + tuple(f_idx[degree:])
            p_key = int(np.ravel_multi_index(p_idx, result_size)) if result_size else 0
            out[p_key] += basis_data[b_key] * factor_data[f_key]

    return out
