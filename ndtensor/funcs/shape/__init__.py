"""
ndtensor Shape Module

Provides the shape registry that interns size and offset descriptors,
together with the pure functions that validate sizes and compute row-major strides.
"""

# Import main classes
from .operations import ShapeRegistry, shape_registry

# Import core functions for advanced users
from .core_functions import (
    is_integer,
    validate_size,
    compute_offset,
    compute_length
)

# Define public API
__all__ = [
    'ShapeRegistry',
    'shape_registry',
    # Core functions for advanced use
    'is_integer',
    'validate_size',
    'compute_offset',
    'compute_length'
]
