"""Pytest configuration and shared fixtures."""
import numpy as np
import pytest

from ndtensor import Tensor, configure, get_configuration


@pytest.fixture
def rng():
    """Seeded generator so failures reproduce."""
    return np.random.default_rng(20261019)


@pytest.fixture
def random_tensor(rng):
    """
    Build tensors filled with integers in [-100, 100].

    Integer-valued entries keep every kernel's float sums exact.
    """
    def _make(*size):
        length = int(np.prod(size))
        return Tensor(list(size), rng.integers(-100, 101, size=length).astype(np.float64))
    return _make


@pytest.fixture(params=[
    {"use_numba": True, "backend": "python"},
    {"use_numba": False, "backend": "python"},
    {"use_numba": False, "backend": "numpy"},
], ids=["numba", "python", "numpy"])
def kernels(request):
    """Run a test once per kernel family and restore the default afterwards."""
    previous = get_configuration()
    configure(**request.param)
    yield request.param
    configure(**previous)
