import numpy as np
import pytest
from numpy.testing import assert_array_equal

from axiskeys.errors import IndexOutOfBoundsError, InvalidSelectorError, KeyLookupError
from axiskeys.keys import KeyRange, RangeKeyIndex, SequenceKeyIndex
from axiskeys.selectors import (Between, Index, Interval, Near, findindex, is_key_list,
                                key_selection, resolve_position)


def test_selector_repr():
    assert "Near(1.5)" == repr(Near(1.5))
    assert "Interval(1, 2)" == repr(Between(1, 2))
    assert "Interval(1, None, closed='left')" == repr(Interval(1, None, closed="left"))
    assert "Index([0, 1])" == repr(Index([0, 1]))


def test_selector_eq():
    assert Near(1) == Near(1)
    assert Near(1) != Near(2)
    assert Between(1, 2) == Interval(1, 2, closed="both")
    assert Interval(1, 2) != Interval(1, 2, closed="left")
    assert Index(0) == Index(0)
    assert Index(0) != Near(0)
    assert len({Near(1), Near(1), Between(1, 2), Between(1, 2)}) == 2


def test_interval_contains():
    i = Interval(1, 3)
    assert 1 in i
    assert 2 in i
    assert 3 in i
    assert 0 not in i
    assert 4 not in i

    i = Interval(1, 3, closed="left")
    assert 1 in i
    assert 3 not in i
    i = Interval(1, 3, closed="right")
    assert 1 not in i
    assert 3 in i
    i = Interval(1, 3, closed="neither")
    assert 1 not in i
    assert 2 in i
    assert 3 not in i

    assert -1e9 in Interval(None, 3)
    assert 1e9 in Interval(1, None)
    assert "b" in Interval("a", "c")

    with pytest.raises(ValueError):
        Interval(1, 3, closed="open")


def test_interval_is_empty():
    assert not Interval(1, 1).is_empty()
    assert Interval(1, 1, closed="left").is_empty()
    assert Interval(2, 1).is_empty()
    assert not Interval(None, 1).is_empty()


def test_is_key_list():
    assert is_key_list([1, 2])
    assert is_key_list(np.array(["a", "b"]))
    assert not is_key_list((1, 2))
    assert not is_key_list("ab")
    assert not is_key_list(np.array(1))


def test_resolve_position():
    assert 1 == resolve_position(1, 3)
    assert 2 == resolve_position(-1, 3)
    assert slice(0, 2) == resolve_position(slice(0, 2), 3)
    assert_array_equal([0, 2], resolve_position([0, -1], 3))
    with pytest.raises(IndexOutOfBoundsError):
        resolve_position(3, 3)
    with pytest.raises(IndexOutOfBoundsError):
        resolve_position([0, 5], 3)
    with pytest.raises(InvalidSelectorError):
        resolve_position("a", 3)
    with pytest.raises(InvalidSelectorError):
        resolve_position([[0]], 3)


@pytest.fixture
def letters():
    return SequenceKeyIndex(["a", "b", "c"])


def test_findindex_exact(letters):
    assert 1 == findindex("b", letters)
    with pytest.raises(KeyLookupError):
        findindex("z", letters, 0)
    assert 2 == findindex(30, RangeKeyIndex(KeyRange(10, 10, 3)))


def test_findindex_index(letters):
    assert 1 == findindex(Index(1), letters)
    assert 2 == findindex(Index(-1), letters)
    assert slice(0, 2) == findindex(Index(slice(0, 2)), letters)
    assert_array_equal([2, 0], findindex(Index([2, 0]), letters))
    with pytest.raises(IndexOutOfBoundsError):
        findindex(Index(5), letters)
    with pytest.raises(InvalidSelectorError):
        findindex(Index("a"), letters)


def test_findindex_near():
    index = SequenceKeyIndex([1.0, 4.0, 6.0])
    assert 1 == findindex(Near(4.9), index)
    with pytest.raises(InvalidSelectorError, match="dimension 0"):
        findindex(Near("b"), SequenceKeyIndex(["a", "b"]), 0)


def test_findindex_interval(letters):
    assert_array_equal([0, 1], findindex(Between("a", "b"), letters))
    assert_array_equal([1, 2], findindex(Interval("a", None, closed="neither"), letters))
    assert_array_equal([], findindex(Between("x", "z"), letters))
    assert slice(1, 3) == findindex(Between(20, 30), RangeKeyIndex(KeyRange(10, 10, 3)))
    with pytest.raises(InvalidSelectorError):
        findindex(Between("a", 3), letters)


def test_findindex_slice(letters):
    assert slice(None) == findindex(slice(None), letters)
    assert_array_equal([0, 1], findindex(slice("a", "b"), letters))
    assert_array_equal([1, 2], findindex(slice("b", None), letters))
    with pytest.raises(InvalidSelectorError):
        findindex(slice("a", "c", 2), letters)


def test_findindex_predicate(letters):
    assert_array_equal([0, 2], findindex(lambda k: k != "b", letters))
    assert_array_equal([], findindex(lambda k: False, letters))


def test_findindex_list(letters):
    assert_array_equal([2, 0], findindex(["c", "a"], letters))
    assert_array_equal([1], findindex(np.array(["b"]), letters))
    with pytest.raises(KeyLookupError):
        findindex(["a", "z"], letters)


def test_key_selection(letters):
    range_index = RangeKeyIndex(KeyRange(10, 10, 2))
    assert (1, slice(None)) == key_selection(("b",), (letters, range_index))
    selection = key_selection((["a", "c"], 20), (letters, range_index))
    assert_array_equal([0, 2], selection[0])
    assert 1 == selection[1]
    with pytest.raises(InvalidSelectorError):
        key_selection(("a", 10, 1), (letters, range_index))
