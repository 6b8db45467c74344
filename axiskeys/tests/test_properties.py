import numpy as np
import pytest
from numpy.testing import assert_array_equal

pytest.importorskip("hypothesis")

import hypothesis.extra.numpy as npst
import hypothesis.strategies as st
from hypothesis import given

from axiskeys import Between, KeyedArray, KeyRange, Near, UnextendableKeyError
from axiskeys.keys import RangeKeyIndex, SequenceKeyIndex
from axiskeys.selectors import findindex


def key_ranges(max_length=50):
    return st.builds(
        KeyRange,
        st.integers(-1000, 1000),
        st.integers(-20, 20).filter(bool),
        st.integers(1, max_length),
    )


def positions(result, n):
    if isinstance(result, slice):
        return list(range(n)[result])
    return list(result)


@given(data=st.data())
def test_positional_get_matches_raw(data):
    raw = data.draw(npst.arrays(np.int64, npst.array_shapes(max_dims=3, min_side=1)))
    a = KeyedArray(raw, (None,) * raw.ndim)
    index = data.draw(st.tuples(*(st.integers(0, n - 1) for n in raw.shape)))
    assert raw[index] == a[index]
    indexer = data.draw(npst.basic_indices(shape=raw.shape, allow_newaxis=False))
    assert_array_equal(raw[indexer], a[indexer])


@given(keys=st.lists(st.integers(), min_size=1, max_size=30, unique=True))
def test_findindex_sequence(keys):
    index = SequenceKeyIndex(keys)
    for i, k in enumerate(keys):
        assert i == findindex(k, index)


@given(keys=key_ranges())
def test_findindex_range(keys):
    index = RangeKeyIndex(keys)
    for i, k in enumerate(keys):
        assert i == findindex(k, index)


def nearest(keys, target):
    return min(range(len(keys)), key=lambda i: (abs(keys[i] - target), i))


@given(keys=st.lists(st.integers(-100, 100), min_size=1, max_size=30, unique=True),
       target=st.integers(-150, 150))
def test_near_sequence(keys, target):
    keys = sorted(keys)
    assert nearest(keys, target) == findindex(Near(target), SequenceKeyIndex(keys))
    assert nearest(keys, target) == findindex(Near(target),
                                              SequenceKeyIndex(np.array(keys)))


@given(keys=key_ranges(), target=st.integers(-2000, 2000))
def test_near_range(keys, target):
    assert nearest(list(keys), target) == findindex(Near(target), RangeKeyIndex(keys))


@given(keys=st.lists(st.integers(-100, 100), max_size=30),
       lo=st.integers(-120, 120), hi=st.integers(-120, 120))
def test_between_sequence(keys, lo, hi):
    expect = [i for i, k in enumerate(keys) if lo <= k <= hi]
    actual = findindex(Between(lo, hi), SequenceKeyIndex(keys))
    assert expect == positions(actual, len(keys))


@given(keys=key_ranges(), lo=st.integers(-2000, 2000), hi=st.integers(-2000, 2000))
def test_between_range(keys, lo, hi):
    expect = [i for i, k in enumerate(keys) if lo <= k <= hi]
    actual = findindex(Between(lo, hi), RangeKeyIndex(keys))
    assert expect == positions(actual, len(keys))


@given(keys=key_ranges(), value=st.integers(-1000, 1000))
def test_append_key_range(keys, value):
    a = KeyedArray(np.zeros(len(keys)), (keys,))
    a.append(value)
    assert len(keys) + 1 == len(a)
    assert keys.start + len(keys) * keys.step == a.axiskeys(0)[-1]
    assert value == a[-1]
    assert value == a(a.axiskeys(0)[-1])


@given(keys=st.lists(st.text(max_size=3), max_size=10), value=st.integers())
def test_append_unextendable(keys, value):
    raw = np.zeros(len(keys))
    a = KeyedArray(raw, (keys,))
    with pytest.raises(UnextendableKeyError):
        a.append(value)
    assert (len(keys),) == a.shape
    assert a.raw() is raw
