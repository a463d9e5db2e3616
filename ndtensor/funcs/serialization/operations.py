"""
ndtensor: Serialization Operations

Converts tensors to and from nested arrays and the flat JSON record
``{"type": "Tensor", "size": [...], "data": [...]}``.

"""

import json
import logging
from typing import Any, Dict, Tuple, Union

import numpy as np

from ...errors import InvalidData
from .core_functions import *

logger = logging.getLogger(__name__)


class SerializationOperations:
    """
    A class to convert flat tensor buffers to and from their public representations.
    No data objects. Only methods.

    Decoding methods return (size, buffer) pairs; building the Tensor (and interning
    its size) is left to the caller.

    """

    def to_array(
        self,
        data : np.ndarray,
        size : Tuple[int, ...]) -> list:
        """Nested python lists, one level per axis."""
        return nest_flat(data, size)


    def from_array(
        self,
        nested) -> Tuple[Tuple[int, ...], np.ndarray]:
        """
        Decode a nested array.

        Args:
            nested: nested list/tuple of numbers, or a numpy array

        Returns:
            size (Tuple[int, ...]): inferred size (may be invalid, e.g. contain 0)
            data (np.ndarray): freshly allocated flat buffer

        Raises:
            InvalidData: if nested is not an array or a leaf is not a finite number
            ShapeMismatch: if sibling arrays differ in length or depth
        """
        if isinstance(nested, np.ndarray):
            nested = nested.tolist()
        if not isinstance(nested, (list, tuple)):
            raise InvalidData(f"The nested array must be a list or tuple. Got {type(nested).__name__}")
        size = infer_size(nested)
        if 0 in size:
            return size, np.zeros(0, dtype=np.float64)
        return size, flatten_nested(nested, size)


    def to_json(
        self,
        data : np.ndarray,
        size : Tuple[int, ...]) -> Dict[str, Any]:
        """The flat JSON record of a tensor."""
        return {
            "type": JSON_TYPE_TAG,
            "size": list(size),
            "data": np.asarray(data, dtype=np.float64).tolist()
        }


    def dumps(
        self,
        data : np.ndarray,
        size : Tuple[int, ...]) -> str:
        """The JSON record as text."""
        return json.dumps(self.to_json(data, size))


    def from_json(
        self,
        record : Union[str, bytes, Dict[str, Any]]) -> Tuple[list, np.ndarray]:
        """
        Decode a JSON record or its text.

        Args:
            record: a parsed record or JSON text

        Returns:
            size (list): the size list as stored (validated by the caller)
            data (np.ndarray): freshly allocated flat buffer

        Raises:
            InvalidData: for malformed text, a wrong type tag, missing fields or non-numeric data
            ShapeMismatch: if len(data) differs from the product of size
        """
        if isinstance(record, (str, bytes, bytearray)):
            try:
                record = json.loads(record)
            except ValueError as err:
                raise InvalidData(f"The json text could not be decoded: {err}") from err
        size, values = check_record(record)
        # inf and nan are valid float64 payloads (json writes them as Infinity and NaN)
        data = np.array([check_number(value, (i,), finite=False) for i, value in enumerate(values)],
                        dtype=np.float64)
        logger.debug("Decoded %s record of size %s with %d values",
                     JSON_TYPE_TAG, size, data.shape[0])
        return size, data
