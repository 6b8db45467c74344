import numpy as np

from axiskeys.errors import (IndexOutOfBoundsError, InvalidSelectorError,
                             KeyLookupError)
from axiskeys.indexing import (boundscheck_indices, is_integer, is_slice,
                               normalize_integer_selection, wraparound_indices)


_CLOSED = ("both", "left", "right", "neither")


class Near:
    """Select the single key closest to `target`, i.e., minimizing
    ``abs(key - target)``. Ties go to the first such key.

    Examples
    --------
    >>> import numpy as np
    >>> from axiskeys import wrapdims, Near
    >>> a = wrapdims(np.arange(3), [0.0, 0.5, 1.0])
    >>> int(a(Near(0.7)))
    1

    """

    def __init__(self, target):
        self.target = target

    def __eq__(self, other):
        return isinstance(other, Near) and self.target == other.target

    def __hash__(self):
        return hash((Near, self.target))

    def __repr__(self):
        return f"Near({self.target!r})"


class Interval:
    """Select all keys between `lo` and `hi`.

    Parameters
    ----------
    lo, hi : object
        Bounds of the interval. ``None`` leaves that side unbounded.
    closed : {'both', 'left', 'right', 'neither'}
        Which bounds are themselves included. Defaults to 'both'.

    """

    def __init__(self, lo, hi, closed="both"):
        if closed not in _CLOSED:
            raise ValueError(f"closed must be one of {_CLOSED!r}, got {closed!r}")
        self.lo = lo
        self.hi = hi
        self.closed = closed

    def __contains__(self, key):
        lo, hi = self.lo, self.hi
        if lo is not None:
            if self.closed in ("both", "left"):
                if not lo <= key:
                    return False
            elif not lo < key:
                return False
        if hi is not None:
            if self.closed in ("both", "right"):
                if not key <= hi:
                    return False
            elif not key < hi:
                return False
        return True

    def is_empty(self):
        if self.lo is None or self.hi is None:
            return False
        if self.closed == "both":
            return not self.lo <= self.hi
        return not self.lo < self.hi

    def __eq__(self, other):
        return (isinstance(other, Interval) and self.lo == other.lo and
                self.hi == other.hi and self.closed == other.closed)

    def __hash__(self):
        return hash((Interval, self.lo, self.hi, self.closed))

    def __repr__(self):
        r = f"Interval({self.lo!r}, {self.hi!r}"
        if self.closed != "both":
            r += f", closed={self.closed!r}"
        return r + ")"


def Between(lo, hi):
    """The closed interval ``lo <= key <= hi``."""
    return Interval(lo, hi, closed="both")


class Index:
    """Select by position, bypassing the keys.

    `i` may be an integer, a slice or a list of integers. Negative positions
    count from the end.
    """

    def __init__(self, i):
        self.i = i

    def __eq__(self, other):
        return isinstance(other, Index) and self.i == other.i

    def __hash__(self):
        return hash((Index, repr(self.i)))

    def __repr__(self):
        return f"Index({self.i!r})"


def is_key_list(query):
    return (isinstance(query, (list, np.ndarray)) and np.ndim(query) == 1)


def resolve_position(i, dim_len, dim=None):
    if is_integer(i):
        return normalize_integer_selection(i, dim_len)
    if is_slice(i):
        return i
    if isinstance(i, (list, tuple, np.ndarray)):
        sel = np.array(i, dtype=np.intp)
        if sel.ndim != 1:
            raise InvalidSelectorError(dim, Index(i), "positions must be 1-dimensional")
        wraparound_indices(sel, dim_len)
        boundscheck_indices(sel, dim_len)
        return sel
    raise InvalidSelectorError(dim, Index(i), "expected an integer, slice or list of "
                                              "integers")


def findindex(query, index, dim=None):
    """Resolve one dimension's query against its key index.

    Parameters
    ----------
    query : object
        An exact key, a predicate (any callable), a list of keys, a slice of
        keys, or one of :class:`Near`, :class:`Interval`, :class:`Index`.
    index : RangeKeyIndex or SequenceKeyIndex
        The lookup strategy of the dimension.
    dim : int, optional
        Dimension number, only used in error messages.

    Returns
    -------
    int, slice or ndarray
        An integer for queries selecting one key, which drops the dimension,
        otherwise a slice or integer array of positions in key order.

    """

    try:
        if isinstance(query, Index):
            return resolve_position(query.i, len(index.keys), dim)

        if isinstance(query, Near):
            return index.find_near(query.target, dim)

        if isinstance(query, Interval):
            return index.find_interval(query)

        if is_slice(query):
            if query == slice(None):
                return query
            if query.step is not None:
                raise InvalidSelectorError(dim, query, "slices of keys cannot have a step")
            return index.find_interval(Interval(query.start, query.stop))

        if callable(query):
            return index.find_all(query)

        if is_key_list(query):
            return np.array([index.find_exact(q, dim) for q in query], dtype=np.intp)

        return index.find_exact(query, dim)

    except (InvalidSelectorError, KeyLookupError, IndexOutOfBoundsError):
        raise
    except (TypeError, ValueError) as e:
        raise InvalidSelectorError(dim, query, e) from e


def key_selection(queries, indexes):
    """Resolve a query per dimension into an orthogonal positional selection."""

    if len(queries) > len(indexes):
        raise InvalidSelectorError(
            tuple(range(len(indexes))), queries,
            f"too many queries for array; expected {len(indexes)}, got {len(queries)}")
    queries = tuple(queries) + (slice(None),) * (len(indexes) - len(queries))
    return tuple(findindex(q, index, dim)
                 for dim, (q, index) in enumerate(zip(queries, indexes)))

