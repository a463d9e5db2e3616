"""
ndtensor: Elementwise Tensor Operations

This module provides the elementwise kernels behind Tensor: n-ary sums, differences,
Hadamard products and quotients, scalar products and in-place scaling. Operands
are flat float64 buffers of identical length.

This code is designed to be used with the Numba library for high-performance numerical computing in Python.

"""

import logging
import numpy as np
from typing import Sequence
from .core_functions import *

logger = logging.getLogger(__name__)


class TensorOperations:
    """
    A class to perform elementwise operations on flat tensor buffers.
    No data objects. Only methods.

    Shape checks happen at the Tensor boundary; these methods assume every buffer
    has the same length.

    """
    def __init__(
        self,
        use_numba: bool = DEFAULT_USE_NUMBA):
        """
        Initialize the TensorOperations class.

        Args:
            use_numba (bool, optional): use Numba core functions. Defaults to True.
        """
        self.use_numba = use_numba
        logger.debug("TensorOperations using %s kernels", "numba" if use_numba else "numpy")


    @staticmethod
    def _stack(
        buffers : Sequence[np.ndarray]) -> np.ndarray:
        return np.stack(buffers).astype(DTYPE, copy=False)


    def sum(
        self,
        buffers : Sequence[np.ndarray]) -> np.ndarray:
        """Entrywise sum of all buffers"""
        operands = self._stack(buffers)
        if self.use_numba:
            return tensor_sum_nb_core(operands)
        return tensor_sum_np_core(operands)


    def subtract(
        self,
        buffers : Sequence[np.ndarray]) -> np.ndarray:
        """First buffer minus every following buffer"""
        operands = self._stack(buffers)
        if self.use_numba:
            return tensor_subtract_nb_core(operands)
        return tensor_subtract_np_core(operands)


    def hadamard_product(
        self,
        buffers : Sequence[np.ndarray]) -> np.ndarray:
        """Entrywise product of all buffers"""
        operands = self._stack(buffers)
        if self.use_numba:
            return tensor_hadamard_product_nb_core(operands)
        return tensor_hadamard_product_np_core(operands)


    def hadamard_quotient(
        self,
        buffers : Sequence[np.ndarray]) -> np.ndarray:
        """First buffer divided entrywise by every following buffer"""
        operands = self._stack(buffers)
        if self.use_numba:
            return tensor_hadamard_quotient_nb_core(operands)
        return tensor_hadamard_quotient_np_core(operands)


    def scalar_product(
        self,
        buffers : Sequence[np.ndarray]) -> float:
        """Sum over all keys of the entrywise product"""
        operands = self._stack(buffers)
        if self.use_numba:
            return float(tensor_scalar_product_nb_core(operands))
        return tensor_scalar_product_np_core(operands)


    def scale(
        self,
        data : np.ndarray,
        factor : float) -> np.ndarray:
        """
        Multiply a buffer by a scalar in place.

        Args:
            data (np.ndarray): flat buffer, mutated
            factor (float): scale factor

        Returns:
            np.ndarray: the same buffer
        """
        if self.use_numba:
            tensor_scale_nb_core(data, float(factor))
        else:
            tensor_scale_np_core(data, float(factor))
        return data
