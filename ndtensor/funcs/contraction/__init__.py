"""
ndtensor Contraction Module

Provides the generalized tensor product over shared axes: a single-pass
Numba kernel, its pure-python twin, a numpy.tensordot fallback and
a quadratic reference kernel for verification.
"""

# Import main classes
from .operations import ContractionOperations

# Import core functions for advanced users
from .core_functions import (
    contraction_layout,
    tensor_contraction_nb_core,
    tensor_contraction_py_core,
    tensor_contraction_np_core,
    tensor_contraction_naive_core
)

# Define public API
__all__ = [
    'ContractionOperations',
    # Core functions for advanced use
    'contraction_layout',
    'tensor_contraction_nb_core',
    'tensor_contraction_py_core',
    'tensor_contraction_np_core',
    'tensor_contraction_naive_core'
]
