"""
ndtensor Iteration Module

Provides the odometer used for row-major multi-index enumeration by both
tensor iteration and the contraction engine.
"""

# Import main classes
from .operations import Odometer

# Import core functions for advanced users
from .core_functions import (
    odometer_advance,
    odometer_advance_nb_core,
    odometer_table_nb_core,
    odometer_table_np_core,
    count_positions
)
from .constants import EXHAUSTED

# Define public API
__all__ = [
    'Odometer',
    'EXHAUSTED',
    # Core functions for advanced use
    'odometer_advance',
    'odometer_advance_nb_core',
    'odometer_table_nb_core',
    'odometer_table_np_core',
    'count_positions'
]
