"""
ndtensor: Odometer

Enumerates the multi-indices of a shape in row-major order without recursion
and without holding more than one multi-index in memory.

"""

import numpy as np
from typing import Sequence, Tuple
from .core_functions import *


class Odometer:
    """
    A finite, single-pass iterator over the multi-indices of a shape.

    Each call to ``next`` emits the current multi-index as a tuple and then
    advances it with a carry-and-reset step. ``position`` counts the emitted
    indices, ``carry`` is the axis incremented by the most recent step
    (EXHAUSTED once the last index was emitted).

    """

    __slots__ = ('_size', '_indices', '_position', '_carry')

    def __init__(
        self,
        size : Sequence[int]) -> None:
        """
        Initialise the odometer at the all-zero multi-index.

        Args:
            size (Sequence[int]): extent of each axis, already validated
        """
        self._size = tuple(size)
        self._indices = [0] * len(self._size)
        self._position = 0
        self._carry = len(self._size) - 1


    @property
    def size(
        self) -> Tuple[int, ...]:
        return self._size


    @property
    def position(
        self) -> int:
        return self._position


    @property
    def carry(
        self) -> int:
        return self._carry


    def __iter__(
        self) -> "Odometer":
        return self


    def __next__(
        self) -> Tuple[int, ...]:
        if self._carry == EXHAUSTED:
            raise StopIteration
        current = tuple(self._indices)
        self._position += 1
        self._carry = odometer_advance(self._indices, self._size)
        return current


    def __len__(
        self) -> int:
        """Number of multi-indices not yet emitted."""
        return count_positions(self._size) - self._position


    def table(
        self,
        use_numba : bool = True) -> np.ndarray:
        """
        Every multi-index of the shape at once, one row per flat key.

        Args:
            use_numba (bool, optional): use the Numba kernel. Defaults to True.

        Returns:
            np.ndarray: (prod(size), len(size)) int64 table
        """
        size = np.asarray(self._size, dtype=np.int64)
        if use_numba:
            return odometer_table_nb_core(size)
        return odometer_table_np_core(size)
