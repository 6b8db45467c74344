import numpy as np

from axiskeys.core import Base, append_data, prepare_append
from axiskeys.errors import ArityError, DuplicateNameError

__all__ = ["NamedDimsArray", "check_names"]


def check_names(data, names):
    """Check that `names` gives one distinct name to each dimension of `data`."""
    names = tuple(names)
    ndim = len(data.shape)
    if len(names) != ndim:
        raise ArityError('names', names, ndim)
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"dimension names must be strings, got {name!r}")
        if names.count(name) > 1:
            raise DuplicateNameError(name, names)
    return names


class NamedDimsArray(Base):
    """Give each dimension of an array a name.

    Parameters
    ----------
    data : array-like
        Array to wrap, by reference. Either a raw array or a
        :class:`axiskeys.KeyedArray`. Objects without a ``shape`` are converted with
        ``numpy.asanyarray``.
    names : sequence of str
        One distinct name per dimension.

    Examples
    --------
    >>> import numpy as np
    >>> from axiskeys import NamedDimsArray
    >>> a = NamedDimsArray(np.array([[1, 2, 3], [4, 5, 6]]), ("row", "col"))
    >>> a.dim("col")
    1
    >>> a.isel(col=2).tolist()
    [3, 6]

    """

    def __init__(self, data, names):
        if not hasattr(data, 'shape'):
            data = np.asanyarray(data)
        self._names = check_names(data, names)
        self._data = data

    @classmethod
    def with_keys(cls, data, **named_keys):
        """Build ``NamedDimsArray(KeyedArray(data, keys), names)`` from one keyword
        argument per dimension, in order, mapping its name to its keys."""
        from axiskeys.keyed import KeyedArray

        if not hasattr(data, 'shape'):
            data = np.asanyarray(data)
        if len(named_keys) != len(data.shape):
            raise ArityError('names', tuple(named_keys), len(data.shape))
        return cls(KeyedArray(data, tuple(named_keys.values())), tuple(named_keys))

    @property
    def dimnames(self):
        return self._names

    def layer_summary(self):
        return f"NamedDimsArray names={self._names!r}"

    def _wrap_projection(self, result, projections):
        return NamedDimsArray(result, tuple(self._names[p.dim] for p in projections))

    def _wrap_like(self, result):
        return NamedDimsArray(result, self._names)

    def _permute(self, inner, axes):
        return NamedDimsArray(inner, tuple(self._names[d] for d in axes))

    def append(self, data, key=None, axis=0):
        """Append one element (or one slice) to `axis`, given by position or name.

        The append is handed on to the keyed layer inside, if any, see
        :meth:`axiskeys.KeyedArray.append`. Without keys the raw array is grown and
        `key` must be None.
        """
        d = self.dim(axis)
        if isinstance(self._data, Base):
            return self._data.append(data, key=key, axis=d)
        if key is not None:
            raise ValueError("array has no axis keys to extend with key "
                             f"{key!r}")
        data = prepare_append(self.shape, data, d)
        self._data = append_data(self._data, data, d)
        return self.shape
