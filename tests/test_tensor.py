import gc

import numpy as np
import pytest

from ndtensor import (
    AliasingViolation,
    IndexOutOfRange,
    InsufficientOperands,
    InvalidData,
    InvalidShape,
    RankMismatch,
    ShapeMismatch,
    Tensor,
)


## construction ##################################################################

def test_construct_from_rest_args_and_sequences():
    assert Tensor(1, 2).size == (1, 2)
    assert Tensor(4, 5, 9, 1, 3).dimension == 5
    assert Tensor([3, 2, 4]).size == (3, 2, 4)
    assert Tensor(7).size == (7,)
    assert Tensor(np.array([2, 3])).size == (2, 3)


def test_construct_allocates_zero_buffer():
    w = Tensor(1, 2, 3, 4)
    assert w.data.dtype == np.float64
    assert w.length == len(w) == 1 * 2 * 3 * 4
    assert not w.data.any()
    assert all(stride > 0 for stride in w.offset)
    assert len(w.offset) == w.dimension


def test_construct_wraps_buffer_without_copy():
    a = np.array([1.0, 2.0, 3.0])
    v = Tensor(a.shape[0], a)
    assert v.data is a, "the buffer must become the tensor's own storage"
    b = np.zeros(2 * 3 * 5)
    assert Tensor([2, 3, 5], b).data is b
    c = np.array([4.0, 5.0])
    u = Tensor(c)
    assert u.data is c and u.size == (2,)


def test_buffer_length_must_match():
    with pytest.raises(ShapeMismatch):
        Tensor(4, np.zeros(3))
    with pytest.raises(ShapeMismatch):
        Tensor([2, 2], np.zeros(5))


@pytest.mark.parametrize("buffer", [
    [1.0, 2.0, 3.0, 4.0],
    np.arange(4),
    np.zeros((2, 2)),
    np.zeros(4, dtype=np.float32),
    np.arange(8.0)[::2],
    np.zeros((4, 2))[:, 0],
])
def test_buffer_type_is_checked(buffer):
    with pytest.raises(InvalidData):
        Tensor([4], buffer)


def test_read_only_buffer_is_rejected():
    buffer = np.zeros(3)
    buffer.flags.writeable = False
    with pytest.raises(InvalidData):
        Tensor(3, buffer)


def test_buffer_cannot_back_two_tensors():
    buffer = np.zeros(4)
    first = Tensor([2, 2], buffer)
    with pytest.raises(AliasingViolation):
        Tensor([4], buffer)
    del first
    gc.collect()
    assert Tensor([4], buffer).data is buffer, "a released buffer may be bound again"


def test_rest_args_with_non_integer_raise():
    with pytest.raises(InvalidShape):
        Tensor(2, 3.5)


## indexing ######################################################################

def test_key_at_and_data_at():
    t = Tensor.from_array([[[1, 2], [3, 4]], [[5, 6], [7, 8]], [[9, 10], [11, 12]]])
    assert t.offset == (4, 2, 1)
    assert t.key_at(2, 1, 0) == 10
    assert t.key_at([2, 1, 0]) == 10
    assert t.key_at((0, 0, 1)) == 1
    assert t.data_at(2, 1, 0) == 11.0
    assert t.data_at(np.array([1, 0, 1])) == 6.0


def test_key_at_rejects_bad_indices():
    t = Tensor(2, 3)
    with pytest.raises(RankMismatch):
        t.key_at(1)
    with pytest.raises(RankMismatch):
        t.key_at(1, 1, 1)
    with pytest.raises(IndexOutOfRange):
        t.key_at(2, 0)
    with pytest.raises(IndexOutOfRange):
        t.key_at(0, -1)
    with pytest.raises(IndexOutOfRange):
        t.key_at(0, 1.0)
    with pytest.raises(IndexOutOfRange):
        Tensor(3).key_at(1.5)


def test_indices_for_inverts_key_at(random_tensor):
    t = random_tensor(3, 1, 4, 2)
    for key in range(t.length):
        indices = t.indices_for(key)
        assert t.key_at(indices) == key, f"key_at(indices_for({key})) != {key}"
    for key, _, *indices in t.entries():
        assert t.indices_for(key) == tuple(indices)


@pytest.mark.parametrize("key", [-1, 6, 2.0, "1"])
def test_indices_for_rejects_bad_keys(key):
    with pytest.raises(IndexOutOfRange):
        Tensor(2, 3).indices_for(key)


## elementwise algebra ###########################################################

def test_sum_of_equal_sizes(kernels):
    result = Tensor.sum(
        Tensor.from_array([1, 2, 3]),
        Tensor.from_array([2, 4, 6]),
        Tensor.from_array([5, 2, -1]))
    assert result.to_array() == [8, 8, 8]
    assert Tensor.add is Tensor.sum


def test_sum_needs_two_equal_operands():
    Tensor.sum(Tensor.from_array([1]), Tensor.from_array([1]))
    with pytest.raises(InsufficientOperands):
        Tensor.sum(Tensor.from_array([1]))
    with pytest.raises(InsufficientOperands):
        Tensor.sum()
    with pytest.raises(ShapeMismatch):
        Tensor.sum(Tensor.from_array([1]), Tensor.from_array([2, 3]))
    with pytest.raises(ShapeMismatch):
        Tensor.sum(Tensor(2, 3), Tensor(3, 2))
    with pytest.raises(InvalidData):
        Tensor.sum(Tensor(3), np.zeros(3))


def test_elementwise_results_are_fresh(kernels):
    a = Tensor.from_array([[1, 2], [3, 4]])
    b = Tensor.from_array([[2, 2], [2, 2]])
    before_a, before_b = a.data.copy(), b.data.copy()

    for result in (Tensor.sum(a, b), Tensor.subtract(a, b),
                   Tensor.hadamard_multiply(a, b), Tensor.hadamard_divide(a, b)):
        assert result.size is a.size
        assert result.data is not a.data and result.data is not b.data

    assert np.array_equal(a.data, before_a) and np.array_equal(b.data, before_b), "operands must be untouched"


def test_elementwise_values(kernels):
    a = Tensor.from_array([[1, 2], [3, 4]])
    b = Tensor.from_array([[2, 4], [8, 16]])
    c = Tensor.from_array([[1, 1], [1, 2]])
    assert Tensor.subtract(b, a, c).to_array() == [[0, 1], [4, 10]]
    assert Tensor.hadamard_multiply(a, b, c).to_array() == [[2, 8], [24, 128]]
    assert Tensor.entrywise_product is Tensor.hadamard_multiply
    assert Tensor.hadamard_divide(b, a, c).to_array() == [[2, 2], [8 / 3, 2]]
    assert Tensor.scalar_product(a, b) == 1 * 2 + 2 * 4 + 3 * 8 + 4 * 16


def test_hadamard_divide_by_zero_follows_ieee(kernels):
    a = Tensor.from_array([1, -1, 0])
    b = Tensor.from_array([0, 0, 0])
    quotient = Tensor.hadamard_divide(a, b)
    assert quotient.data[0] == np.inf
    assert quotient.data[1] == -np.inf
    assert np.isnan(quotient.data[2])


def test_scale_is_in_place(kernels):
    t = Tensor.from_array([1, 2, 3])
    data = t.data
    assert t.scale(2) is t, "scale must return the same tensor"
    assert t.data is data
    assert t.to_array() == [2, 4, 6]
    t.scale(np.float64(0.5))
    assert t.to_array() == [1, 2, 3]


@pytest.mark.parametrize("factor", ["2", None, True, 1 + 2j])
def test_scale_rejects_non_numbers(factor):
    t = Tensor.from_array([1, 2, 3])
    with pytest.raises(InvalidData):
        t.scale(factor)
    assert t.to_array() == [1, 2, 3], "a rejected scale must not mutate"


def test_copy_is_independent():
    t = Tensor.from_array([[1, 2], [3, 4]])
    u = t.copy()
    assert u.size is t.size and u.data is not t.data
    u.scale(0)
    assert t.to_array() == [[1, 2], [3, 4]]


def test_to_numpy_is_read_only_view():
    t = Tensor.from_array([[1, 2, 3], [4, 5, 6]])
    view = t.to_numpy()
    assert view.shape == (2, 3)
    assert np.shares_memory(view, t.data)
    with pytest.raises(ValueError):
        view[0, 0] = 10.0


def test_repr_names_size():
    assert repr(Tensor(2, 2)).startswith("Tensor(size=[2, 2]")
