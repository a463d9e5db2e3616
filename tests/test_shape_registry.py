import threading

import numpy as np
import pytest

from ndtensor import InvalidShape, ShapeRegistry, Tensor, shape_registry
from ndtensor.funcs.shape import compute_offset, validate_size


def test_offset_is_row_major():
    assert compute_offset((2, 3, 4)) == (12, 4, 1), "offset[i] must be prod(size[i+1:])"
    assert compute_offset((5,)) == (1,)
    assert compute_offset((1, 2, 1, 3)) == (6, 3, 3, 1)


def test_intern_returns_identical_descriptors():
    registry = ShapeRegistry()
    size_a, offset_a = registry.intern([3, 2, 4])
    size_b, offset_b = registry.intern((3, 2, 4))
    size_c, offset_c = registry.intern(np.array([3, 2, 4]))
    assert size_a is size_b is size_c, "equal sizes must share one size tuple"
    assert offset_a is offset_b is offset_c, "equal sizes must share one offset tuple"
    assert size_a == (3, 2, 4) and offset_a == (8, 4, 1)
    assert len(registry) == 1
    assert [3, 2, 4] in registry
    assert [4, 2, 3] not in registry


def test_membership_normalises_sizes():
    registry = ShapeRegistry()
    registry.intern([3, 2, 4])
    assert [np.int64(3), 2, 4] in registry, "numpy integers must match their python twins"
    assert np.array([3, 2, 4]) in registry
    assert (3, 2, 4) in registry
    for size in ([3, 2.5], [], None, "324", [3, 2, 0]):
        assert size not in registry, f"{size!r} is not a valid size and cannot be interned"
    assert len(registry) == 1


def test_intern_normalises_numpy_integers():
    registry = ShapeRegistry()
    size, _ = registry.intern([np.int64(2), np.int32(3)])
    assert all(type(value) is int for value in size)
    assert registry.intern([2, 3])[0] is size


def test_tensors_of_equal_size_share_descriptors():
    v = Tensor(3)
    w = Tensor([3], np.array([1.0, 2.0, 3.0]))
    assert v is not w
    assert v.data is not w.data
    assert v.dimension == w.dimension
    assert v.size is w.size, "same shape must be the same descriptor instance"
    assert v.offset is w.offset


@pytest.mark.parametrize("size", [
    [],
    [2, 0, 3],
    [2, 3.5],
    [2, 3.0],
    [True, 2],
    [-1],
    "23",
    None,
    7,
])
def test_invalid_sizes_raise(size):
    with pytest.raises(InvalidShape):
        validate_size(size)


def test_invalid_tensor_sizes_raise():
    with pytest.raises(InvalidShape):
        Tensor([2, 0, 3])
    with pytest.raises(InvalidShape):
        Tensor([2, 3.5])
    with pytest.raises(InvalidShape):
        Tensor([])
    with pytest.raises(InvalidShape):
        Tensor("hello world")


def test_oversized_shape_raises():
    with pytest.raises(InvalidShape):
        validate_size([2 ** 40, 2 ** 40])


def test_concurrent_interning_yields_one_descriptor():
    registry = ShapeRegistry()
    results = []

    def worker():
        for _ in range(200):
            results.append(registry.intern([7, 11, 13]))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    first_size, first_offset = results[0]
    assert all(size is first_size and offset is first_offset for size, offset in results)
    assert len(registry) == 1


def test_default_registry_is_shared():
    t = Tensor(4, 9)
    assert shape_registry.intern([4, 9])[0] is t.size
