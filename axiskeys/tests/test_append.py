import numpy as np
import pytest
from numpy.testing import assert_array_equal

from axiskeys import (DimensionMismatchError, KeyedArray, KeyLookupError, KeyRange,
                      UnextendableKeyError, wrapdims)


def test_append_1d_key_range():
    a = KeyedArray(np.array([1.0, 2.0, 3.0]), (KeyRange(0.0, 0.5, 3),))
    assert (4,) == a.append(9)
    assert isinstance(a.axiskeys(0), KeyRange)
    assert [0.0, 0.5, 1.0, 1.5] == list(a.axiskeys(0))
    assert 9 == a[3]
    assert 9 == a(1.5)

    # a key on the next step keeps the range
    assert (5,) == a.append(10, key=2.0)
    assert KeyRange(0.0, 0.5, 5) == a.axiskeys(0)

    # any other key turns the range into a list
    assert (6,) == a.append(11, key=7.0)
    assert [0.0, 0.5, 1.0, 1.5, 2.0, 7.0] == a.axiskeys(0)
    assert 11 == a(7.0)


def test_append_1d_list():
    keys = ["a", "b"]
    a = KeyedArray(np.array([1, 2]), (keys,))
    assert (3,) == a.append(3, key="c")
    assert ["a", "b", "c"] == a.axiskeys(0)
    # the numpy data was replaced, so the list given is left alone
    assert ["a", "b"] == keys
    assert 3 == a("c")


def test_append_leaves_derived_arrays():
    a = wrapdims(np.arange(3.0), ["a", "b", "c"])
    b = a + 1
    t = wrapdims(np.zeros((2, 3)), ["x", "y"], ["a", "b", "c"])
    tt = t.T
    c = KeyedArray(a.raw(), (a.axiskeys(0),))

    assert (4,) == a.append(9.0, key="d")
    assert ["a", "b", "c", "d"] == a.axiskeys(0)
    assert (3,) == b.shape
    assert ["a", "b", "c"] == b.axiskeys(0)
    assert 2 == c("c")
    assert ["a", "b", "c"] == c.axiskeys(0)
    with pytest.raises(KeyLookupError):
        b("d")

    assert (3, 3) == t.append(np.zeros(3), key="z", axis=0)
    assert (3, 2) == tt.shape
    assert ["x", "y"] == tt.axiskeys(1)
    assert ["x", "y", "z"] == t.axiskeys(0)


def test_append_1d_array_keys():
    keys = np.array([1.5, 2.5])
    a = KeyedArray(np.array([1, 2]), (keys,))
    assert (3,) == a.append(3, key=3.5)
    assert_array_equal([1.5, 2.5, 3.5], a.axiskeys(0))
    assert 2 == len(keys)
    assert 3 == a(3.5)


def test_append_unextendable():
    data = np.array([1, 2])
    a = KeyedArray(data, (["a", "b"],))
    with pytest.raises(UnextendableKeyError):
        a.append(3)
    assert (2,) == a.shape
    assert ["a", "b"] == a.axiskeys(0)
    assert a.raw() is data


def test_append_shape_mismatch():
    keys = ["a", "b"]
    a = KeyedArray(np.zeros((2, 3)), (keys, None))
    with pytest.raises(DimensionMismatchError):
        a.append([1, 2], key="c")
    # nothing was modified
    assert (2, 3) == a.shape
    assert ["a", "b"] == keys


def test_append_2d():
    a = wrapdims(np.array([[1, 2, 3], [4, 5, 6]]), row=range(10, 30, 10),
                 col=["a", "b", "c"])
    assert (3, 3) == a.append(np.array([7, 8, 9]))
    assert KeyRange(10, 10, 3) == a.axiskeys("row")
    assert [7, 8, 9] == a(30).tolist()

    assert (3, 4) == a.append([0, 0, 1], axis="col", key="d")
    assert ["a", "b", "c", "d"] == a.axiskeys(1)
    assert_array_equal([[1, 2, 3, 0], [4, 5, 6, 0], [7, 8, 9, 1]], a)
    assert 1 == a(30, "d")


class GrowableArray:
    """Minimal resizable array, growing in place like ``zarr.Array.append``."""

    def __init__(self, data):
        self.data = np.asarray(data)
        self.calls = 0

    @property
    def shape(self):
        return self.data.shape

    @property
    def dtype(self):
        return self.data.dtype

    def __getitem__(self, selection):
        return self.data[selection]

    def __setitem__(self, selection, value):
        self.data[selection] = value

    def append(self, data, axis=0):
        self.calls += 1
        self.data = np.concatenate([self.data, data], axis=axis)
        return self.data.shape


def test_append_in_place():
    raw = GrowableArray([[1, 2], [3, 4]])
    a = KeyedArray(raw, (None, ["x", "y"]))
    assert (3, 2) == a.append([5, 6])
    assert a.raw() is raw
    assert 1 == raw.calls
    assert KeyRange(0, 1, 3) == a.axiskeys(0)
    assert [5, 6] == a(2).tolist()
    assert 6 == a(2, "y")


def test_append_in_place_list_keys():
    raw = GrowableArray([[1, 2], [3, 4]])
    keys = ["x", "y"]
    a = KeyedArray(raw, (keys, None))
    assert (3, 2) == a.append([5, 6], key="z")
    assert a.raw() is raw
    # data and keys grow together
    assert ["x", "y", "z"] == keys
    assert [5, 6] == a("z").tolist()
