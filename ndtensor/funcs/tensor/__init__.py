"""
ndtensor Elementwise Tensor Module

Provides optimized elementwise operations on flat tensor buffers,
including n-ary sums, differences, Hadamard products and quotients,
scalar products and in-place scaling.
"""

# Import main classes
from .operations import TensorOperations


# Import core functions for advanced users
from .core_functions import (
    tensor_sum_nb_core,
    tensor_subtract_nb_core,
    tensor_hadamard_product_nb_core,
    tensor_hadamard_quotient_nb_core,
    tensor_scalar_product_nb_core,
    tensor_scale_nb_core,
    tensor_sum_np_core,
    tensor_subtract_np_core,
    tensor_hadamard_product_np_core,
    tensor_hadamard_quotient_np_core,
    tensor_scalar_product_np_core,
    tensor_scale_np_core
)

# Define public API
__all__ = [
    'TensorOperations',
    # Core functions for advanced use
    'tensor_sum_nb_core',
    'tensor_subtract_nb_core',
    'tensor_hadamard_product_nb_core',
    'tensor_hadamard_quotient_nb_core',
    'tensor_scalar_product_nb_core',
    'tensor_scale_nb_core',
    'tensor_sum_np_core',
    'tensor_subtract_np_core',
    'tensor_hadamard_product_np_core',
    'tensor_hadamard_quotient_np_core',
    'tensor_scalar_product_np_core',
    'tensor_scale_np_core'
]
