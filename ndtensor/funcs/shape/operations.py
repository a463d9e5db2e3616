"""
ndtensor: Shape Registry

Interns canonical, immutable size and offset descriptors so that tensors of
identical shape share the same tuple objects. Shape compatibility anywhere in
the engine is then an identity check (``a.size is b.size``).

"""

import logging
import threading
from typing import Dict, Sequence, Tuple

from .core_functions import *
from ...errors import InvalidShape

logger = logging.getLogger(__name__)


class ShapeRegistry:
    """
    A process-wide cache of (size, offset) descriptor pairs keyed by the size tuple.
    Interning is serialised by a lock; reads of already issued descriptors need no lock
    because the tuples are immutable.

    """

    def __init__(
        self) -> None:
        self._descriptors : Dict[Tuple[int, ...], Tuple[Tuple[int, ...], Tuple[int, ...]]] = {}
        self._lock = threading.Lock()


    def intern(
        self,
        size : Sequence[int]) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
        """
        Return the canonical (size, offset) pair for a size sequence.

        Args:
            size (Sequence[int]): one or more integers >= 1

        Returns:
            Tuple[Tuple[int, ...], Tuple[int, ...]]: the shared size and offset tuples

        Raises:
            InvalidShape: if the size sequence is invalid
        """
        key = validate_size(size)
        with self._lock:
            descriptor = self._descriptors.get(key)
            if descriptor is None:
                descriptor = (key, compute_offset(key))
                self._descriptors[key] = descriptor
                logger.debug("Interned shape %s with offset %s", key, descriptor[1])
        return descriptor


    def __contains__(
        self,
        size) -> bool:
        try:
            return validate_size(size) in self._descriptors
        except InvalidShape:
            return False


    def __len__(
        self) -> int:
        return len(self._descriptors)


# shared by every Tensor in the process
shape_registry = ShapeRegistry()
