import logging

import numpy as np

from axiskeys.core import Base, append_data, prepare_append
from axiskeys.errors import ArityError, DimensionMismatchError, UnextendableKeyError
from axiskeys.indexing import select_keys
from axiskeys.keys import (as_key_sequence, default_keys, key_index,
                           prepare_extension, summarize_keys)
from axiskeys.selectors import findindex, key_selection


logger = logging.getLogger(__name__)

__all__ = ["KeyedArray"]


class KeyedArray(Base):
    """Attach one sequence of keys to each dimension of an array.

    Parameters
    ----------
    data : array-like
        Array to wrap, by reference. Either a raw array (anything with a ``shape``
        and positional indexing, e.g., a NumPy array or a ``zarr.Array``) or a
        :class:`axiskeys.NamedDimsArray`. Objects without a ``shape`` are converted
        with ``numpy.asanyarray``.
    keys : sequence
        One key vector per dimension, each of the same length as that dimension.
        ``None`` keys a dimension by position, a ``range`` is turned into a
        :class:`axiskeys.KeyRange`, other sequences are used as given.

    Notes
    -----
    No adjustment is made to keys which don't fit, see :func:`axiskeys.wrapdims`
    for a constructor which extends ranges to the right length.

    Examples
    --------
    >>> import numpy as np
    >>> from axiskeys import KeyedArray
    >>> a = KeyedArray(np.array([[1, 2, 3], [4, 5, 6]]), (range(10, 30, 10), ["a", "b", "c"]))
    >>> int(a[1, 1])
    5
    >>> int(a(20, "b"))
    5
    >>> a.axiskeys(1)
    ['a', 'b', 'c']

    """

    def __init__(self, data, keys):
        if not hasattr(data, 'shape'):
            data = np.asanyarray(data)
        keys = tuple(keys)
        shape = tuple(data.shape)
        if len(keys) != len(shape):
            raise ArityError('key vectors', len(keys), len(shape))
        checked = []
        for d, (k, n) in enumerate(zip(keys, shape)):
            k = default_keys(n) if k is None else as_key_sequence(k)
            if len(k) != n:
                raise DimensionMismatchError(d, n, len(k), k)
            checked.append(k)
        self._data = data
        self._keys = tuple(checked)
        self._key_indexes = tuple(key_index(k) for k in checked)

    @classmethod
    def with_names(cls, data, **named_keys):
        """Build ``KeyedArray(NamedDimsArray(data, names), keys)`` from one keyword
        argument per dimension, in order, mapping its name to its keys."""
        from axiskeys.named import NamedDimsArray

        if not hasattr(data, 'shape'):
            data = np.asanyarray(data)
        if len(named_keys) != len(data.shape):
            raise ArityError('names', tuple(named_keys), len(data.shape))
        return cls(NamedDimsArray(data, tuple(named_keys)), tuple(named_keys.values()))

    def axiskeys(self, d=None):
        if d is None:
            return self._keys
        return self._keys[self.dim(d)]

    def findindex(self, query, d):
        """Resolve `query` against the keys of dimension `d` (position or name),
        returning an integer, a slice or an integer array of positions."""
        d = self.dim(d)
        return findindex(query, self._key_indexes[d], d)

    def key_selection(self, queries):
        """Resolve one query per dimension into an orthogonal positional selection."""
        return key_selection(queries, self._key_indexes)

    def layer_summary(self):
        return "KeyedArray keys=({})".format(", ".join(summarize_keys(k) for k in self._keys))

    def _wrap_projection(self, result, projections):
        keys = tuple(select_keys(self._keys[p.dim], p.dim_sel) for p in projections)
        return KeyedArray(result, keys)

    def _wrap_like(self, result):
        return KeyedArray(result, self._keys)

    def _permute(self, inner, axes):
        return KeyedArray(inner, tuple(self._keys[d] for d in axes))

    def append(self, data, key=None, axis=0):
        """Append one element (or, for more than one dimension, one slice) to `axis`,
        extending that dimension's keys by one.

        Parameters
        ----------
        data : array-like
            Value to append, with the shape of the array without `axis`.
        key : object, optional
            Key of the new entry. May be omitted when the keys are a
            :class:`axiskeys.KeyRange`, which is then extended by one step.
        axis : int or str
            Dimension to grow, by position or name.

        Returns
        -------
        new_shape : tuple

        Notes
        -----
        The keys are checked before anything is modified, so a failure leaves the
        array and its keys as they were. The raw array is grown in place if it
        has an ``append(data, axis=...)`` method, e.g., ``zarr.Array``, otherwise a
        new raw array is made with ``numpy.concatenate``. Mutable key sequences such
        as lists are appended to in place only along with the raw array, so that
        other wrappers sharing the old data keep keys of the old length.

        Examples
        --------
        >>> import numpy as np
        >>> from axiskeys import KeyedArray, KeyRange
        >>> a = KeyedArray(np.array([1.0, 2.0, 3.0]), (KeyRange(0.0, 0.5, 3),))
        >>> a.append(9)
        (4,)
        >>> list(a.axiskeys(0))
        [0.0, 0.5, 1.0, 1.5]

        """
        d = self.dim(axis)
        commit = prepare_extension(self._keys[d], key, d)

        data = prepare_append(self.shape, data, d)
        raw = self.raw()
        self._data = append_data(self._data, data, d)

        new_keys = commit(in_place=self.raw() is raw)
        self._keys = self._keys[:d] + (new_keys,) + self._keys[d + 1:]
        self._key_indexes = (self._key_indexes[:d] + (key_index(new_keys),) +
                             self._key_indexes[d + 1:])
        logger.debug("appended to dimension %s, new shape %s", d, self.shape)
        return self.shape

    def _append_data(self, data, axis):
        raise UnextendableKeyError(axis, type(self._keys[axis]).__name__)

