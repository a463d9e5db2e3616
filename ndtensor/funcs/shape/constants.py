import numpy as np

##############################################################################
# Global constants
##############################################################################

# largest flat buffer the engine will address (int64 keys in the kernels)
MAX_TENSOR_LENGTH = int(np.iinfo(np.int64).max)

# minimum extent of a single axis
MIN_AXIS_SIZE = 1
