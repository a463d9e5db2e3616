import numpy as np
from numba import types

##############################################################################
# Global constants
##############################################################################

DTYPE = np.float64          # every tensor buffer is float64
DEFAULT_USE_NUMBA = True    # kernel family used when none is requested
MIN_OPERANDS = 2            # n-ary elementwise operations need at least two tensors


##############################################################################
# Type signatures for Numba functions
##############################################################################

# Signatures for n-ary elementwise reductions over stacked operands
# operands: (n_operands, length) -> (length,)
sig_elementwise_reduce = types.float64[:](
    types.float64[:,:]
    )

# Signature for the scalar product of stacked operands
sig_scalar_product = types.float64(
    types.float64[:,:]
    )

# Signature for in-place scaling
sig_scale_inplace = types.void(
    types.float64[:],       # data: scaled in place
    types.float64           # factor
    )
