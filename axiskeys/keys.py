import math
import numbers
from collections.abc import MutableSequence, Sequence

import numpy as np

from axiskeys.errors import KeyLookupError, UnextendableKeyError


class KeyRange(Sequence):
    """An immutable arithmetic sequence of keys, ``start + i * step`` for
    ``i`` in ``range(length)``.

    Parameters
    ----------
    start : object
        First key. Any type supporting ``start + i * step``, e.g., int, float,
        or ``datetime.datetime`` with a ``datetime.timedelta`` step.
    step : object
        Distance between consecutive keys, must be non-zero.
    length : int
        Number of keys.

    Notes
    -----
    Lookups compute positions from ``start`` and ``step`` rather than comparing
    against stored keys, so a real-valued key matches if it is within a relative
    or absolute tolerance of 1e-12 of a key of the range. ``0.3`` is found in
    ``KeyRange(0.0, 0.1, 10)`` although its fourth key is ``0.30000000000000004``.
    The same keys held in a list or array are compared with ``==`` and have no
    such tolerance.

    Examples
    --------
    >>> from axiskeys import KeyRange
    >>> r = KeyRange(0.0, 0.5, 3)
    >>> list(r)
    [0.0, 0.5, 1.0]
    >>> r.extend(4)
    KeyRange(start=0.0, step=0.5, length=4)

    """

    __slots__ = ("_start", "_step", "_length")

    def __init__(self, start, step, length):
        if step == 0 * step:
            raise ValueError("step must be non-zero")
        length = int(length)
        if length < 0:
            raise ValueError("length must be a nonnegative integer")
        self._start = start
        self._step = step
        self._length = length

    @classmethod
    def from_range(cls, r: range) -> "KeyRange":
        return cls(r.start, r.step, len(r))

    @property
    def start(self):
        return self._start

    @property
    def step(self):
        return self._step

    @property
    def last(self):
        if not self._length:
            raise IndexError("empty KeyRange has no last key")
        return self._value(self._length - 1)

    def _value(self, i):
        return self._start + i * self._step

    def __len__(self):
        return self._length

    def __getitem__(self, item):
        if isinstance(item, slice):
            start, stop, step = item.indices(self._length)
            return KeyRange(self._value(start), self._step * step,
                            len(range(start, stop, step)))
        if not isinstance(item, numbers.Integral):
            raise TypeError(f"KeyRange indices must be integers or slices, not "
                            f"{type(item).__name__}")
        i = int(item)
        if i < 0:
            i += self._length
        if i < 0 or i >= self._length:
            raise IndexError("KeyRange index out of range")
        return self._value(i)

    def __iter__(self):
        for i in range(self._length):
            yield self._value(i)

    def __contains__(self, value):
        try:
            self.index(value)
        except (ValueError, TypeError):
            return False
        return True

    def __eq__(self, other):
        if isinstance(other, KeyRange):
            if self._length != other._length:
                return False
            if self._length == 0:
                return True
            return (self._start == other._start and
                    (self._length == 1 or self._step == other._step))
        return NotImplemented

    def __hash__(self):
        if self._length == 0:
            return hash((KeyRange, 0))
        if self._length == 1:
            return hash((KeyRange, self._start, 1))
        return hash((KeyRange, self._start, self._step, self._length))

    def __repr__(self):
        return (f"KeyRange(start={self._start!r}, step={self._step!r}, "
                f"length={self._length})")

    def position(self, value):
        """Return the (possibly fractional) position of `value` along the range."""
        offset = value - self._start
        if isinstance(offset, numbers.Integral) and isinstance(self._step, numbers.Integral):
            q, r = divmod(int(offset), int(self._step))
            return q if r == 0 else offset / self._step
        return offset / self._step

    def index(self, value, start=0, stop=None):
        """Return the position of `value`, computed from the range formula."""
        p = self.position(value)
        if not math.isfinite(p):
            raise ValueError(f"{value!r} is not in KeyRange")
        i = round(p)
        if not math.isclose(p, i, rel_tol=0, abs_tol=1e-9) or not 0 <= i < self._length:
            raise ValueError(f"{value!r} is not in KeyRange")
        found = self._value(i)
        if found != value and not _isclose(found, value):
            raise ValueError(f"{value!r} is not in KeyRange")
        return i

    def extend(self, length):
        """Return a range with the same start and step and the given length."""
        return KeyRange(self._start, self._step, length)


def _isclose(a, b):
    if isinstance(a, numbers.Real) and isinstance(b, numbers.Real):
        return math.isclose(a, b, rel_tol=1e-12, abs_tol=1e-12)
    return False


def as_key_sequence(keys):
    """Normalize a user supplied key vector. Ranges become a :class:`KeyRange`,
    anything else is used as given, by reference."""

    if isinstance(keys, KeyRange):
        return keys
    if isinstance(keys, range):
        return KeyRange.from_range(keys)
    if isinstance(keys, (str, bytes)):
        raise TypeError(f"expected a sequence of keys, got {type(keys).__name__} "
                        f"{keys!r}")
    if isinstance(keys, np.ndarray):
        if keys.ndim != 1:
            raise TypeError(f"key arrays must be 1-dimensional, got shape {keys.shape}")
        return keys
    if hasattr(keys, "__getitem__") and hasattr(keys, "__len__"):
        return keys
    # one-shot iterables (generators, sets) can't be indexed, take a copy
    return list(keys)


def default_keys(length):
    return KeyRange(0, 1, length)


class RangeKeyIndex:
    """Key lookup against a :class:`KeyRange`, resolved from the range formula
    without scanning."""

    def __init__(self, keys):
        self.keys = keys

    def find_exact(self, value, dim=None):
        try:
            return self.keys.index(value)
        except (ValueError, TypeError):
            raise KeyLookupError(dim, value)

    def find_all(self, predicate):
        return np.array([i for i, k in enumerate(self.keys) if predicate(k)],
                        dtype=np.intp)

    def find_near(self, target, dim=None):
        n = len(self.keys)
        if n == 0:
            raise KeyLookupError(dim, target)
        p = self.keys.position(target)
        if p <= 0:
            return 0
        if p >= n - 1:
            return n - 1
        i = math.floor(p)
        below = abs(self.keys[i] - target)
        above = abs(self.keys[i + 1] - target)
        # ties go to the first occurrence
        return i if below <= above else i + 1

    def find_interval(self, interval):
        keys = self.keys
        n = len(keys)
        if n == 0 or interval.is_empty():
            return slice(0, 0)
        ascending = keys.step > 0 * keys.step
        lo_p = keys.position(interval.lo) if interval.lo is not None else (
            -math.inf if ascending else math.inf)
        hi_p = keys.position(interval.hi) if interval.hi is not None else (
            math.inf if ascending else -math.inf)
        a, b = min(lo_p, hi_p), max(lo_p, hi_p)
        start = 0 if a == -math.inf else min(max(math.floor(a) - 1, 0), n)
        stop = n if b == math.inf else min(max(math.ceil(b) + 2, 0), n)

        # keys are monotonic, so anything outside the interval sits at the edges
        while start < stop and keys[start] not in interval:
            start += 1
        while stop > start and keys[stop - 1] not in interval:
            stop -= 1
        return slice(start, stop)


class SequenceKeyIndex:
    """Key lookup against a general sequence of keys, by scanning."""

    def __init__(self, keys):
        self.keys = keys

    def find_exact(self, value, dim=None):
        keys = self.keys
        if isinstance(keys, np.ndarray):
            hits = keys == value
            if np.ndim(hits) == keys.ndim:
                hits = np.flatnonzero(hits)
                if len(hits):
                    return int(hits[0])
                raise KeyLookupError(dim, value)
        for i, k in enumerate(keys):
            if k == value:
                return i
        raise KeyLookupError(dim, value)

    def find_all(self, predicate):
        return np.array([i for i, k in enumerate(self.keys) if predicate(k)],
                        dtype=np.intp)

    def find_near(self, target, dim=None):
        keys = self.keys
        if len(keys) == 0:
            raise KeyLookupError(dim, target)
        if isinstance(keys, np.ndarray) and keys.dtype.kind in "iufcmM":
            if keys.dtype.kind == "u":
                keys = keys.astype(np.int64)
            # argmin returns the first of equal minima
            return int(np.argmin(np.abs(keys - target)))
        return min(range(len(keys)), key=lambda i: abs(keys[i] - target))

    def find_interval(self, interval):
        return np.array([i for i, k in enumerate(self.keys) if k in interval],
                        dtype=np.intp)


def key_index(keys):
    """Choose the lookup strategy for one dimension's keys."""
    if isinstance(keys, KeyRange):
        return RangeKeyIndex(keys)
    return SequenceKeyIndex(keys)


def prepare_extension(keys, key=None, dim=0):
    """Work out how to grow `keys` by one entry, without touching them.

    Returns a function ``commit(in_place=False)`` which performs the extension and
    returns the new key sequence. Nothing is modified until it is called. A mutable
    sequence such as a list is appended to only if `in_place` is true, i.e., when
    the data it labels was grown in place too, otherwise a new list is returned.
    """

    if isinstance(keys, KeyRange):
        extended = keys.extend(len(keys) + 1)
        if key is None or extended.last == key:
            return lambda in_place=False: extended
        materialized = list(keys) + [key]
        return lambda in_place=False: materialized

    if key is None:
        raise UnextendableKeyError(dim, type(keys).__name__)

    if isinstance(keys, MutableSequence):
        def commit(in_place=False):
            if not in_place:
                return list(keys) + [key]
            keys.append(key)
            return keys
        return commit
    if isinstance(keys, np.ndarray):
        extended = np.append(keys, [key])
        return lambda in_place=False: extended
    if isinstance(keys, tuple):
        return lambda in_place=False: keys + (key,)
    materialized = list(keys) + [key]
    return lambda in_place=False: materialized


def keys_equal(a, b):
    if a is b:
        return True
    if isinstance(a, KeyRange) and isinstance(b, KeyRange):
        return a == b
    if len(a) != len(b):
        return False
    return all(bool(x == y) for x, y in zip(a, b))


def summarize_keys(keys, edgeitems=3):
    if isinstance(keys, KeyRange):
        return repr(keys)
    name = type(keys).__name__
    n = len(keys)
    if n <= 2 * edgeitems:
        items = ", ".join(repr(k) for k in keys)
    else:
        head = ", ".join(repr(keys[i]) for i in range(edgeitems))
        tail = ", ".join(repr(keys[i]) for i in range(n - edgeitems, n))
        items = f"{head}, ..., {tail}"
    return f"{name}[{items}] ({n})"
