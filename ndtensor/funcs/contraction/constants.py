from numba import types

##############################################################################
# Global constants
##############################################################################

DEFAULT_DEGREE = 1              # number of contracted axes
DEFAULT_BACKEND = "python"      # single-pass fallback used when Numba is disabled
BACKENDS = ("python", "numpy")  # fallbacks selectable with use_numba=False


##############################################################################
# Type signatures for Numba functions
##############################################################################

# Signature for the single-pass contraction kernel
sig_tensor_contraction = types.void(
    types.float64[:],   # basis_data: flat basis buffer
    types.float64[:],   # factor_data: flat factor buffer
    types.int64[:],     # combined_size: basis.size + factor.size[degree:]
    types.int64,        # basis_dim
    types.int64,        # degree
    types.int64,        # result_step_back: factor.offset[degree-1] - 1
    types.float64[:]    # out: zeroed result buffer, accumulated into
    )
