from numba import njit, prange
import numpy as np
from .constants import *

##########################################################################################
# Core numba JIT functions for elementwise tensor operations
##########################################################################################

# All kernels work on flat buffers. n-ary operations receive their operands stacked
# into a (n_operands, length) array and always write a freshly allocated result.

@njit(sig_elementwise_reduce, parallel=True, fastmath=True, cache=True)
def tensor_sum_nb_core(
    operands):
    """
    Compute sum_k A_k for flat buffers
    """
    n, length = operands.shape[0], operands.shape[1]
    out = np.zeros(length, dtype=operands.dtype)

    for key in prange(length):
        sum_val = 0.0
        for k in range(n):
            sum_val += operands[k, key]
        out[key] = sum_val

    return out


@njit(sig_elementwise_reduce, parallel=True, fastmath=True, cache=True)
def tensor_subtract_nb_core(
    operands):
    """
    Compute A_0 - sum_{k>0} A_k for flat buffers
    """
    n, length = operands.shape[0], operands.shape[1]
    out = np.zeros(length, dtype=operands.dtype)

    for key in prange(length):
        diff_val = operands[0, key]
        for k in range(1, n):
            diff_val -= operands[k, key]
        out[key] = diff_val

    return out


@njit(sig_elementwise_reduce, parallel=True, fastmath=True, cache=True)
def tensor_hadamard_product_nb_core(
    operands):
    """
    Compute prod_k A_k entrywise for flat buffers
    """
    n, length = operands.shape[0], operands.shape[1]
    out = np.zeros(length, dtype=operands.dtype)

    for key in prange(length):
        prod_val = operands[0, key]
        for k in range(1, n):
            prod_val *= operands[k, key]
        out[key] = prod_val

    return out


# no fastmath and numpy error model: division by zero yields IEEE inf/nan
@njit(sig_elementwise_reduce, parallel=True, error_model="numpy", cache=True)
def tensor_hadamard_quotient_nb_core(
    operands):
    """
    Compute A_0 / prod_{k>0} A_k entrywise for flat buffers
    """
    n, length = operands.shape[0], operands.shape[1]
    out = np.zeros(length, dtype=operands.dtype)

    for key in prange(length):
        quot_val = operands[0, key]
        for k in range(1, n):
            quot_val /= operands[k, key]
        out[key] = quot_val

    return out


@njit(sig_scalar_product, cache=True)
def tensor_scalar_product_nb_core(
    operands):
    """
    Compute sum_key prod_k A_k[key] for flat buffers
    """
    n, length = operands.shape[0], operands.shape[1]
    sum_val = 0.0

    for key in range(length):
        prod_val = operands[0, key]
        for k in range(1, n):
            prod_val *= operands[k, key]
        sum_val += prod_val

    return sum_val


@njit(sig_scale_inplace, parallel=True, fastmath=True, cache=True)
def tensor_scale_nb_core(
    data,
    factor):
    """
    Compute A *= c in place
    """
    for key in prange(data.shape[0]):
        data[key] *= factor


##########################################################################################
# Core numpy functions for elementwise tensor operations
##########################################################################################


def tensor_sum_np_core(
    operands : np.ndarray) -> np.ndarray:
    """
    Compute the entrywise sum of stacked flat buffers.
    Args:
        operands (np.ndarray): (n, L) array of n flat buffers of length L
    Returns:
        (L,) array of the sum
    """
    return np.sum(operands, axis=0)


def tensor_subtract_np_core(
    operands : np.ndarray) -> np.ndarray:
    """
    Subtract every following buffer from the first one.
    Args:
        operands (np.ndarray): (n, L) array of n flat buffers of length L
    Returns:
        (L,) array of A_0 - A_1 - ... - A_{n-1}
    """
    return operands[0] - np.sum(operands[1:], axis=0)


def tensor_hadamard_product_np_core(
    operands : np.ndarray) -> np.ndarray:
    """
    Compute the entrywise (Hadamard) product of stacked flat buffers.
    Args:
        operands (np.ndarray): (n, L) array of n flat buffers of length L
    Returns:
        (L,) array of the entrywise product
    """
    return np.prod(operands, axis=0)


def tensor_hadamard_quotient_np_core(
    operands : np.ndarray) -> np.ndarray:
    """
    Divide the first buffer entrywise by every following buffer, in order.
    Args:
        operands (np.ndarray): (n, L) array of n flat buffers of length L
    Returns:
        (L,) array of A_0 / A_1 / ... / A_{n-1}
    """
    out = operands[0].copy()
    with np.errstate(divide='ignore', invalid='ignore'):
        for k in range(1, operands.shape[0]):
            out /= operands[k]
    return out


def tensor_scalar_product_np_core(
    operands : np.ndarray) -> float:
    """
    Sum over all keys of the entrywise product of stacked flat buffers.
    Args:
        operands (np.ndarray): (n, L) array of n flat buffers of length L
    Returns:
        the scalar product as a float
    """
    return float(np.sum(np.prod(operands, axis=0)))


def tensor_scale_np_core(
    data : np.ndarray,
    factor : float) -> None:
    """
    Multiply a flat buffer by a scalar in place.
    Args:
        data (np.ndarray): flat buffer, modified in place
        factor (float): scale factor
    """
    np.multiply(data, factor, out=data)
