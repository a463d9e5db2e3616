from numba import types

##############################################################################
# Global constants
##############################################################################

EXHAUSTED = -1  # carry position returned once every multi-index was visited


##############################################################################
# Type signatures for Numba functions
##############################################################################

# Signature for the in-place odometer step
sig_odometer_advance = types.int64(
    types.int64[:],     # indices: current multi-index, advanced in place
    types.int64[:]      # size: extent of each axis
    )

# Signature for the bulk multi-index table
sig_odometer_table = types.int64[:,:](
    types.int64[:]      # size: extent of each axis
    )
