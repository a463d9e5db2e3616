"""
ndtensor: Tensor

A dense, row-major, N-dimensional float64 tensor. A Tensor owns a flat numpy buffer
and references the interned size and offset descriptors issued by the shape registry,
so two tensors of the same shape share the identical descriptor tuples.

Mutation:
    scale           in place, returns the same tensor
    everything else allocates a fresh result and leaves its operands untouched

Keep consistent throughout library:
    key     : flat position in the buffer, 0 <= key < length
    indices : multi-index, key = sum_p indices[p] * offset[p]

"""

## ###############################################################
## IMPORTS
## ###############################################################

import logging
import numbers
import threading
import weakref
from typing import Any, Dict, Iterator, Optional, Tuple, Union

import numpy as np

from .errors import (
    AliasingViolation,
    IndexOutOfRange,
    InsufficientOperands,
    InvalidData,
    RankMismatch,
    ShapeMismatch
)
from .funcs.contraction import ContractionOperations
from .funcs.iteration import Odometer
from .funcs.serialization import SerializationOperations
from .funcs.shape import is_integer, shape_registry
from .funcs.tensor import TensorOperations
from .funcs.tensor.constants import DEFAULT_USE_NUMBA, DTYPE, MIN_OPERANDS

logger = logging.getLogger(__name__)

## ###############################################################
## Default operation instances
## ###############################################################

_tensor_ops = TensorOperations(use_numba=DEFAULT_USE_NUMBA)
_contraction_ops = ContractionOperations(use_numba=DEFAULT_USE_NUMBA)
_serialization_ops = SerializationOperations()


def configure(
    use_numba : Optional[bool] = None,
    backend : Optional[str] = None) -> None:
    """
    Swap the operation instances every Tensor delegates to.

    Args:
        use_numba (bool, optional): use the Numba kernels. Unchanged if None.
        backend (str, optional): contraction fallback when Numba is off,
                                 "python" or "numpy". Unchanged if None.
    """
    global _tensor_ops, _contraction_ops
    if use_numba is None:
        use_numba = _tensor_ops.use_numba
    if backend is None:
        backend = _contraction_ops.backend
    _contraction_ops = ContractionOperations(use_numba=use_numba, backend=backend)
    _tensor_ops = TensorOperations(use_numba=use_numba)
    logger.debug("Configured use_numba=%s, backend=%s", use_numba, backend)


def get_configuration() -> Dict[str, Any]:
    """Current kernel selection."""
    return {
        "use_numba": _tensor_ops.use_numba,
        "backend": _contraction_ops.backend
    }


## ###############################################################
## Buffer ownership
## ###############################################################

# id(buffer) -> owning tensor; entries vanish with their tensor
_owners : "weakref.WeakValueDictionary[int, Tensor]" = weakref.WeakValueDictionary()
_owners_lock = threading.Lock()


def _bind_buffer(
    tensor : "Tensor",
    data : np.ndarray) -> None:
    with _owners_lock:
        owner = _owners.get(id(data))
        if owner is not None and owner._data is data:
            raise AliasingViolation("The data has already been used to construct a Tensor.")
        _owners[id(data)] = tensor


def _check_buffer(
    data) -> np.ndarray:
    if not isinstance(data, np.ndarray):
        raise InvalidData(f"The data of a tensor must be a numpy array. Got {type(data).__name__}")
    if data.dtype != DTYPE or data.ndim != 1:
        raise InvalidData(f"The data of a tensor must be a 1-D {np.dtype(DTYPE).name} array. "
                          f"Got {data.ndim}-D {data.dtype}")
    if not data.flags.writeable:
        raise InvalidData("The data of a tensor must be writeable.")
    if not data.flags.c_contiguous:
        raise InvalidData("The data of a tensor must be C-contiguous. Pass a copy of strided views.")
    return data


## ###############################################################
## Tensor
## ###############################################################

class Tensor:
    """
    Dense N-dimensional float64 tensor.

    Construction:
        Tensor([d0, d1, ...])           zero-filled
        Tensor([d0, d1, ...], buffer)   wraps buffer, no copy
        Tensor(d0, d1, ...)             rest-args size
        Tensor(n) / Tensor(n, buffer)   rank 1
        Tensor(buffer)                  rank 1, wraps buffer

    A buffer is a 1-D, writeable float64 numpy array. Ownership moves to the tensor:
    the same buffer cannot back a second live tensor.

    """

    __slots__ = ('_data', '_size', '_offset', '__weakref__')

    def __init__(
        self,
        size,
        *args):
        data = None
        if isinstance(size, np.ndarray) and size.dtype.kind == 'f':
            if args:
                raise InvalidData("No further arguments are allowed after a data buffer.")
            data = _check_buffer(size)
            size = (data.shape[0],)
        elif is_integer(size):
            if len(args) == 1 and isinstance(args[0], np.ndarray):
                data = args[0]
                size = (size,)
            else:
                size = (size,) + args
        else:
            if len(args) > 1:
                raise InvalidData(f"Expected a size and an optional buffer. Got {len(args) + 1} arguments")
            if args:
                data = args[0]

        self._size, self._offset = shape_registry.intern(size)
        length = 1
        for value in self._size:
            length *= value

        if data is None:
            self._data = np.zeros(length, dtype=DTYPE)
        else:
            data = _check_buffer(data)
            if data.shape[0] != length:
                raise ShapeMismatch(f"The length of the data must be the product of the size {list(self._size)}: "
                                    f"expected {length}, got {data.shape[0]}")
            self._data = data
        _bind_buffer(self, self._data)


    ## -----------------------------------------------------------
    ## Descriptors
    ## -----------------------------------------------------------

    @property
    def data(
        self) -> np.ndarray:
        """The owned flat buffer."""
        return self._data


    @property
    def size(
        self) -> Tuple[int, ...]:
        """Interned extent of each axis."""
        return self._size


    @property
    def offset(
        self) -> Tuple[int, ...]:
        """Interned row-major stride of each axis."""
        return self._offset


    @property
    def dimension(
        self) -> int:
        return len(self._size)


    @property
    def length(
        self) -> int:
        return self._data.shape[0]


    def __len__(
        self) -> int:
        return self._data.shape[0]


    def __repr__(
        self) -> str:
        values = np.array2string(self._data, threshold=8, separator=', ')
        return f"Tensor(size={list(self._size)}, data={values})"


    ## -----------------------------------------------------------
    ## Indexing
    ## -----------------------------------------------------------

    def key_at(
        self,
        *indices) -> int:
        """
        Flat key of a multi-index.

        Args:
            indices: the multi-index, as separate integers or as one sequence

        Returns:
            int: sum_p indices[p] * offset[p]

        Raises:
            RankMismatch: if the number of indices differs from the dimension
            IndexOutOfRange: if an index is negative, non-integer or >= size[p]
        """
        if len(indices) == 1 and isinstance(indices[0], (list, tuple, np.ndarray)):
            indices = tuple(indices[0])
        if len(indices) != len(self._size):
            raise RankMismatch(f"The indices must have a length equal to the dimension {len(self._size)}. "
                               f"Got {len(indices)}")
        key = 0
        for index, extent, stride in zip(indices, self._size, self._offset):
            if not is_integer(index) or index < 0 or index >= extent:
                raise IndexOutOfRange(f"The indices {list(indices)} must be nonnegative integers "
                                      f"less than the size {list(self._size)}")
            key += int(index) * stride
        return key


    def data_at(
        self,
        *indices) -> float:
        """Value at a multi-index (see key_at)."""
        return float(self._data[self.key_at(*indices)])


    def indices_for(
        self,
        key : int) -> Tuple[int, ...]:
        """
        Multi-index of a flat key, the inverse of key_at.

        Raises:
            IndexOutOfRange: if key is negative, non-integer or >= length
        """
        if not is_integer(key) or key < 0 or key >= self._data.shape[0]:
            raise IndexOutOfRange(f"The key must be a nonnegative integer less than {self._data.shape[0]}. "
                                  f"Got {key!r}")
        key = int(key)
        indices = []
        for stride in self._offset:
            index, key = divmod(key, stride)
            indices.append(index)
        return tuple(indices)


    ## -----------------------------------------------------------
    ## Iteration
    ## -----------------------------------------------------------

    def entries(
        self) -> Iterator[Tuple]:
        """
        Lazily yield (key, value, *indices) in row-major order.

        Every call starts an independent pass over the live buffer, so writes made
        while iterating show up in later entries.
        """
        data = self._data
        for key, indices in enumerate(Odometer(self._size)):
            yield (key, float(data[key])) + indices


    def keys(
        self) -> Iterator[Tuple[int, ...]]:
        """Lazily yield (key, *indices) in row-major order."""
        for key, indices in enumerate(Odometer(self._size)):
            yield (key,) + indices


    ## -----------------------------------------------------------
    ## Elementwise algebra
    ## -----------------------------------------------------------

    @staticmethod
    def _check_operands(
        name : str,
        operands : Tuple["Tensor", ...]) -> Tuple[int, ...]:
        if len(operands) < MIN_OPERANDS:
            raise InsufficientOperands(f"The tensor {name} needs at least {MIN_OPERANDS} operands. "
                                       f"Got {len(operands)}")
        for operand in operands:
            if not isinstance(operand, Tensor):
                raise InvalidData(f"The tensor {name} can only be solved with tensors. "
                                  f"Got {type(operand).__name__}")
        size = operands[0]._size
        for operand in operands[1:]:
            if operand._size is not size:
                raise ShapeMismatch(f"The tensor {name} can only be solved with equally sized tensors. "
                                    f"Got {list(size)} and {list(operand._size)}")
        return size


    @staticmethod
    def sum(
        *summands : "Tensor") -> "Tensor":
        """Entrywise sum of two or more equally sized tensors."""
        size = Tensor._check_operands("sum", summands)
        return Tensor(size, _tensor_ops.sum([t._data for t in summands]))


    add = sum


    @staticmethod
    def subtract(
        *operands : "Tensor") -> "Tensor":
        """First tensor minus every following tensor."""
        size = Tensor._check_operands("difference", operands)
        return Tensor(size, _tensor_ops.subtract([t._data for t in operands]))


    @staticmethod
    def hadamard_multiply(
        *factors : "Tensor") -> "Tensor":
        """Entrywise product of two or more equally sized tensors."""
        size = Tensor._check_operands("entrywise product", factors)
        return Tensor(size, _tensor_ops.hadamard_product([t._data for t in factors]))


    entrywise_product = hadamard_multiply


    @staticmethod
    def hadamard_divide(
        *operands : "Tensor") -> "Tensor":
        """First tensor divided entrywise by every following tensor (IEEE: x/0 is inf or nan)."""
        size = Tensor._check_operands("entrywise quotient", operands)
        return Tensor(size, _tensor_ops.hadamard_quotient([t._data for t in operands]))


    @staticmethod
    def scalar_product(
        *factors : "Tensor") -> float:
        """Sum over all keys of the entrywise product of two or more equally sized tensors."""
        Tensor._check_operands("scalar product", factors)
        return _tensor_ops.scalar_product([t._data for t in factors])


    def scale(
        self,
        factor : float) -> "Tensor":
        """
        Multiply every entry by factor IN PLACE.

        Returns:
            Tensor: self

        Raises:
            InvalidData: if factor is not a real number; nothing is mutated then
        """
        if isinstance(factor, (bool, np.bool_)) or not isinstance(factor, numbers.Real):
            raise InvalidData(f"Scaling a tensor requires a number. Got {factor!r}")
        _tensor_ops.scale(self._data, factor)
        return self


    def copy(
        self) -> "Tensor":
        """Independent tensor with a copied buffer and the shared descriptors."""
        return Tensor(self._size, self._data.copy())


    ## -----------------------------------------------------------
    ## Contraction
    ## -----------------------------------------------------------

    @staticmethod
    def product(
        basis : "Tensor",
        factor : "Tensor",
        degree : int = 1) -> Union["Tensor", float]:
        """
        Generalized tensor product over degree shared axes.

        The last degree axes of basis are summed against the first degree axes of
        factor. The result has size basis.size[:-degree] + factor.size[degree:]; when
        degree equals both dimensions the full contraction collapses to a float.

        Args:
            basis (Tensor): left operand
            factor (Tensor): right operand
            degree (int, optional): number of contracted axes. Defaults to 1.

        Returns:
            Tensor or float

        Raises:
            InvalidData: if an operand is not a Tensor
            InvalidDegree: if degree is not an integer in [1, min(dimensions)]
            ShapeMismatch: if the contracted axes differ in size
        """
        if not isinstance(basis, Tensor) or not isinstance(factor, Tensor):
            raise InvalidData("The tensor product can only be solved with tensors.")
        result_size, out = _contraction_ops.contract(basis, factor, degree)
        if not result_size:
            return float(out[0])
        return Tensor(result_size, out)


    ## -----------------------------------------------------------
    ## Serialization
    ## -----------------------------------------------------------

    def to_numpy(
        self) -> np.ndarray:
        """Read-only view of the buffer with shape size."""
        view = self._data.reshape(self._size)
        view.flags.writeable = False
        return view


    def to_array(
        self) -> list:
        """Nested lists of floats, one level per axis."""
        return _serialization_ops.to_array(self._data, self._size)


    @classmethod
    def from_array(
        cls,
        nested) -> "Tensor":
        """
        Tensor from a nested array of finite numbers.

        Raises:
            InvalidData: if nested is not an array or a leaf is not a finite number
            ShapeMismatch: if sibling arrays differ in length or depth
            InvalidShape: if a level is empty
        """
        size, data = _serialization_ops.from_array(nested)
        return cls(size, data)


    def to_json(
        self) -> Dict[str, Any]:
        """{"type": "Tensor", "size": [...], "data": [...]}"""
        return _serialization_ops.to_json(self._data, self._size)


    def to_json_string(
        self) -> str:
        """to_json as JSON text."""
        return _serialization_ops.dumps(self._data, self._size)


    @classmethod
    def from_json(
        cls,
        record : Union[str, bytes, Dict[str, Any]]) -> "Tensor":
        """
        Tensor from a JSON record or its text.

        Raises:
            InvalidData: for malformed input
            InvalidShape: for an invalid size
            ShapeMismatch: if the data length differs from the product of size
        """
        size, data = _serialization_ops.from_json(record)
        return cls(size, data)
