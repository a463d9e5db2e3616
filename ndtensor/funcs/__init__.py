"""
ndtensor kernel modules.

Each module follows the same layout:
    constants.py        constants and Numba type signatures
    core_functions.py   Numba (*_nb_core), numpy (*_np_core) and python (*_py_core) kernels
    operations.py       the class that dispatches between them
"""
