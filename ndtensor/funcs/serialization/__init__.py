"""
ndtensor Serialization Module

Provides conversion between flat tensor buffers, nested arrays
and the JSON record {"type": "Tensor", "size": [...], "data": [...]}.
"""

# Import main classes
from .operations import SerializationOperations

# Import core functions for advanced users
from .core_functions import (
    check_number,
    infer_size,
    flatten_nested,
    nest_flat,
    check_record
)
from .constants import JSON_TYPE_TAG

# Define public API
__all__ = [
    'SerializationOperations',
    'JSON_TYPE_TAG',
    # Core functions for advanced use
    'check_number',
    'infer_size',
    'flatten_nested',
    'nest_flat',
    'check_record'
]
