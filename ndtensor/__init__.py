"""
ndtensor

An eager, dense, in-memory N-dimensional float64 tensor engine (JIT compiled with Numba):
interned shape descriptors, row-major odometer iteration, elementwise algebra,
a single-pass generalized contraction over any number of shared axes, and
nested-array / JSON serialization.
"""

import logging

from .errors import (
    TensorError,
    InvalidShape,
    ShapeMismatch,
    RankMismatch,
    IndexOutOfRange,
    InvalidDegree,
    InvalidData,
    AliasingViolation,
    InsufficientOperands
)
from .funcs.shape import ShapeRegistry, shape_registry
from .funcs.iteration import Odometer
from .funcs.tensor import TensorOperations
from .funcs.contraction import ContractionOperations
from .funcs.serialization import SerializationOperations
from .tensor import Tensor, configure, get_configuration
from .log import setup_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Version info
__version__ = "0.1.0"

# Define public API
__all__ = [
    'Tensor',
    'configure',
    'get_configuration',
    'ShapeRegistry',
    'shape_registry',
    'Odometer',
    'TensorOperations',
    'ContractionOperations',
    'SerializationOperations',
    'setup_logging',
    # Errors
    'TensorError',
    'InvalidShape',
    'ShapeMismatch',
    'RankMismatch',
    'IndexOutOfRange',
    'InvalidDegree',
    'InvalidData',
    'AliasingViolation',
    'InsufficientOperands'
]
