import operator
from functools import reduce

import numpy as np
from numpy.lib.mixins import NDArrayOperatorsMixin

from axiskeys.errors import (DimensionMismatchError, InvalidSelectorError,
                             KeyConflictError, UnknownNameError)
from axiskeys.indexing import (OIndex, basic_projections, ensure_tuple, getitem,
                               is_integer, normalize_integer_selection, oindex,
                               orthogonal_projections, projected_shape,
                               replace_ellipsis, replace_lists, setitem)
from axiskeys.keys import default_keys, keys_equal, summarize_keys
from axiskeys.util import InfoReporter, TreeViewer

__all__ = ["Base"]


class Base(NDArrayOperatorsMixin):
    """Common behaviour of the wrapper layers. Should not be instantiated directly,
    see :class:`axiskeys.KeyedArray` and :class:`axiskeys.NamedDimsArray`.

    A wrapper holds a reference to an inner array-like, which is either a raw array
    or another wrapper, and forwards positional access to it. Each layer re-applies
    its own metadata to whatever the inner layer returns.
    """

    _data = None

    @property
    def parent(self):
        """The array-like wrapped by this layer."""
        return self._data

    def raw(self):
        """The innermost array, without any wrapper."""
        a = self._data
        while isinstance(a, Base):
            a = a._data
        return a

    def layers(self):
        a = self
        while isinstance(a, Base):
            yield a
            a = a._data

    @property
    def shape(self):
        """A tuple of integers describing the length of each dimension of
        the array."""
        return tuple(self._data.shape)

    @property
    def ndim(self):
        """Number of dimensions."""
        return len(self.shape)

    @property
    def size(self):
        """The total number of elements in the array."""
        return reduce(operator.mul, self.shape, 1)

    @property
    def dtype(self):
        """The data type of the raw array, if it has one."""
        return getattr(self.raw(), 'dtype', None)

    @property
    def dimnames(self):
        """Tuple of dimension names, or None if no layer carries names."""
        if isinstance(self._data, Base):
            return self._data.dimnames
        return None

    def axiskeys(self, d=None):
        """Key sequence of dimension `d` (position or name), or a tuple of all of
        them. Dimensions without keys are keyed by position."""
        if isinstance(self._data, Base):
            return self._data.axiskeys(None if d is None else self.dim(d))
        if d is None:
            return tuple(default_keys(n) for n in self.shape)
        return default_keys(self.shape[self.dim(d)])

    def keyed_layer(self):
        """The first layer carrying keys, or None."""
        for layer in self.layers():
            if hasattr(layer, 'key_selection'):
                return layer
        return None

    def findindex(self, query, d):
        """Resolve `query` against the keys of dimension `d` (position or name), see
        :meth:`axiskeys.KeyedArray.findindex`."""
        keyed = self.keyed_layer()
        if keyed is None:
            raise InvalidSelectorError(d, query, "array has no axis keys")
        return keyed.findindex(query, self.dim(d))

    def dim(self, d):
        """Return the position of dimension `d`, given by name or by position."""
        if is_integer(d):
            return normalize_integer_selection(d, self.ndim)
        names = self.dimnames
        if names is None or d not in names:
            raise UnknownNameError(d, names)
        return names.index(d)

    @property
    def oindex(self):
        """Shortcut for orthogonal (outer) indexing, see :func:`get_orthogonal_selection`."""
        return OIndex(self)

    def __array__(self, dtype=None, copy=None):
        return np.asarray(self.raw(), dtype=dtype)

    def __len__(self):
        if self.shape:
            return self.shape[0]
        else:
            # 0-dimensional array, same error message as numpy
            raise TypeError("len() of unsized object")

    def __iter__(self):
        if not self.shape:
            # Same error as numpy
            raise TypeError("iteration over a 0-d array")
        for i in range(self.shape[0]):
            yield self[i]

    def __getitem__(self, selection):
        """Retrieve data by position, exactly as the raw array would.

        Parameters
        ----------
        selection : tuple
            An integer index or slice or tuple of int/slice objects, optionally with
            one integer or Boolean array, specifying the requested item or region
            for each dimension of the array.

        Returns
        -------
        out
            A scalar for a single item. Otherwise the region, wrapped again in this
            layer with its metadata cut down to the region, unless the selection
            moves data across dimensions, in which case the bare result is returned.

        """
        result = getitem(self._data, selection)
        projections = basic_projections(selection, self.shape)
        return self._rewrap(result, projections)

    def __setitem__(self, selection, value):
        """Modify data by position, exactly as the raw array would. Keys and names
        are not consulted."""
        setitem(self._data, selection, value)

    def get_orthogonal_selection(self, selection):
        """Retrieve data by position, selecting items independently for each
        dimension.

        Parameters
        ----------
        selection : tuple
            One integer, slice, integer array or Boolean array per dimension.
            Missing trailing dimensions are selected in full.

        Returns
        -------
        out
            A scalar if every dimension is selected with an integer, otherwise this
            layer wrapping the selected items, with one dimension for every
            non-integer item of the selection.

        """
        selection = ensure_tuple(selection)
        selection = replace_lists(selection)
        selection = replace_ellipsis(selection, self.shape)
        result = oindex(self._data, selection)
        projections = orthogonal_projections(selection, self.shape)
        return self._rewrap(result, projections)

    def isel(self, **indexers):
        """Retrieve data by position, naming the dimensions to select from.

        Each keyword maps a dimension name to an integer, slice, list of integers or
        Boolean array; other dimensions are selected in full. Keys are never
        consulted.
        """
        selection = [slice(None)] * self.ndim
        for name, dim_sel in indexers.items():
            selection[self.dim(name)] = dim_sel
        return self.get_orthogonal_selection(tuple(selection))

    def _rewrap(self, result, projections):
        if projections is None or not projections:
            return result
        if tuple(np.shape(result)) != projected_shape(projections, self.shape):
            return result
        return self._wrap_projection(result, projections)

    def _wrap_projection(self, result, projections):
        raise NotImplementedError

    def _queries(self, args, kwargs):
        ndim = self.ndim
        if len(args) > ndim:
            raise InvalidSelectorError(
                tuple(range(ndim)), args,
                f"too many queries for array; expected {ndim}, got {len(args)}")
        queries = list(args) + [slice(None)] * (ndim - len(args))
        for name, query in kwargs.items():
            d = self.dim(name)
            if d < len(args):
                raise InvalidSelectorError(d, query, f"dimension {name!r} is also "
                                                     f"selected by position")
            queries[d] = query
        return tuple(queries)

    def __call__(self, *args, **kwargs):
        """Retrieve data by key.

        Each argument is a query against the keys of one dimension, in order, and
        keyword arguments select dimensions by name. Missing dimensions are
        selected in full. A query may be a key, a list of keys, a slice of keys,
        a predicate, or one of :class:`Near`, :class:`Interval` or :class:`Index`.

        Names are resolved to dimensions first, then each query is resolved to
        positions against that dimension's keys, and finally the positions are
        selected orthogonally. Dimensions selected by a single key are dropped.

        Examples
        --------
        >>> import numpy as np
        >>> from axiskeys import wrapdims, Between
        >>> a = wrapdims(np.array([[1, 2, 3], [4, 5, 6]]),
        ...              row=range(10, 30, 10), col=["a", "b", "c"])
        >>> int(a(20, "b"))
        5
        >>> int(a(col="c", row=10))
        3
        >>> a(Between(10, 20), "a").tolist()
        [1, 4]

        """
        keyed = self.keyed_layer()
        if keyed is None:
            raise InvalidSelectorError(tuple(range(self.ndim)), args or kwargs,
                                       "array has no axis keys")
        queries = self._queries(args, kwargs)
        selection = keyed.key_selection(queries)
        return self.get_orthogonal_selection(selection)

    def _append_data(self, data, axis):
        self._data = append_data(self._data, data, axis)
        return self

    def transpose(self, *axes):
        """Permute the dimensions, given by position or by name, reversing them if
        none are given. Keys and names move with their dimensions."""
        if len(axes) == 1 and isinstance(axes[0], (tuple, list)):
            axes = tuple(axes[0])
        if not axes:
            axes = tuple(reversed(range(self.ndim)))
        axes = tuple(self.dim(d) for d in axes)
        if sorted(axes) != list(range(self.ndim)):
            raise InvalidSelectorError(tuple(range(self.ndim)), axes,
                                       "axes don't match array")
        if isinstance(self._data, Base):
            inner = self._data.transpose(*axes)
        else:
            inner = np.transpose(self._data, axes)
        return self._permute(inner, axes)

    @property
    def T(self):
        return self.transpose()

    def sortkeys(self, axis=0):
        """Return a copy reordered along `axis` so that its keys are ascending."""
        d = self.dim(axis)
        keys = self.axiskeys(d)
        order = np.array(sorted(range(len(keys)), key=keys.__getitem__), dtype=np.intp)
        selection = [slice(None)] * self.ndim
        selection[d] = order
        return self.get_orthogonal_selection(tuple(selection))

    def _permute(self, inner, axes):
        raise NotImplementedError

    def _wrap_like(self, result):
        raise NotImplementedError

    def tolist(self):
        return np.asarray(self).tolist()

    def __array_ufunc__(self, ufunc, method, *inputs, out=None, **kwargs):
        wrapped = [x for x in inputs + (out or ()) if isinstance(x, Base)]
        template = max(wrapped, key=lambda x: x.ndim)
        check_aligned(template, inputs)
        raw_inputs = tuple(x.raw() if isinstance(x, Base) else x for x in inputs)
        if out is not None:
            kwargs['out'] = tuple(x.raw() if isinstance(x, Base) else x for x in out)
        result = getattr(ufunc, method)(*raw_inputs, **kwargs)
        if out is not None and any(isinstance(x, Base) for x in out):
            return out[0] if len(out) == 1 else out
        if method != '__call__':
            return result
        if isinstance(result, tuple):
            return tuple(rewrap_like(template, r) for r in result)
        return rewrap_like(template, result)

    def __repr__(self):
        t = type(self)
        r = f"<{t.__module__}.{t.__name__}"
        r += f" {str(self.shape)}"
        r += f" {self.dtype}"
        if self.dimnames is not None:
            r += f" {self.dimnames!r}"
        r += ">"
        return r

    @property
    def info(self):
        """Report some diagnostic information about the array.

        Examples
        --------
        >>> import numpy as np
        >>> from axiskeys import wrapdims
        >>> a = wrapdims(np.zeros((2, 3)), row=[10, 20], col=["a", "b", "c"])
        >>> a.info
        Type            : axiskeys.keyed.KeyedArray
        Layers          : KeyedArray > NamedDimsArray > ndarray
        Data type       : float64
        Shape           : (2, 3)
        Dimension names : ('row', 'col')
        Keys [row]      : list[10, 20] (2)
        Keys [col]      : list['a', 'b', 'c'] (3)

        """
        return InfoReporter(self)

    def info_items(self):
        t = type(self)
        layers = [type(layer).__name__ for layer in self.layers()]
        layers.append(type(self.raw()).__name__)
        items = [
            ('Type', f'{t.__module__}.{t.__name__}'),
            ('Layers', ' > '.join(layers)),
            ('Data type', str(self.dtype)),
            ('Shape', str(self.shape)),
        ]
        names = self.dimnames
        if names is not None:
            items.append(('Dimension names', repr(names)))
        if self.keyed_layer() is not None:
            for d, keys in enumerate(self.axiskeys()):
                label = names[d] if names is not None else d
                items.append((f'Keys [{label}]', summarize_keys(keys)))
        return items

    def tree(self, level=None):
        """Provide a ``print``-able display of the wrapper layers, from the outermost
        down to the raw array, showing at most `level` layers below this one.

        Examples
        --------
        >>> import numpy as np
        >>> from axiskeys import wrapdims
        >>> a = wrapdims(np.zeros((2, 3)), row=[10, 20], col=["a", "b", "c"])
        >>> print(a.tree())
        KeyedArray keys=(list[10, 20] (2), list['a', 'b', 'c'] (3))
         └── NamedDimsArray names=('row', 'col')
             └── ndarray (2, 3) float64

        """
        return TreeViewer(self, level=level)


def prepare_append(shape, data, axis):
    """Check that `data` fits `shape` without `axis` and give it that axis back."""

    # ensure data is array-like
    if not hasattr(data, "shape"):
        data = np.asanyarray(data)

    # ensure shapes are compatible for non-append dimensions
    preserved = tuple(s for i, s in enumerate(shape) if i != axis)
    if tuple(data.shape) != preserved:
        raise DimensionMismatchError(
            "shape of data to append is not compatible with the array; all "
            "dimensions must match except for the dimension being appended, "
            f"expected {preserved}, got {tuple(data.shape)}")

    return np.expand_dims(np.asarray(data), axis)


def append_data(a, data, axis):
    """Grow `a` by `data` along `axis`, in place if `a` is able to, otherwise
    returning a new array."""
    if isinstance(a, Base):
        return a._append_data(data, axis)
    if hasattr(a, 'append') and not isinstance(a, np.ndarray):
        # resizable arrays, e.g., zarr.Array
        a.append(data, axis=axis)
        return a
    return np.concatenate([np.asanyarray(a), data], axis=axis)


def rewrap_like(template, result):
    """Wrap `result` in the same layers as `template`, provided the shapes agree."""
    if tuple(np.shape(result)) != template.shape:
        return result
    layers = list(template.layers())
    for layer in reversed(layers):
        result = layer._wrap_like(result)
    return result


def check_aligned(template, inputs):
    """Check that the dimensions shared by the operands carry the same keys and
    names, aligning dimensions from the end as numpy broadcasting does."""
    t_keys = template.axiskeys() if template.keyed_layer() is not None else None
    t_names = template.dimnames
    for x in inputs:
        if x is template or not isinstance(x, Base):
            continue
        x_keys = x.axiskeys() if x.keyed_layer() is not None else None
        x_names = x.dimnames
        for i in range(1, min(template.ndim, x.ndim) + 1):
            dt, dx = template.ndim - i, x.ndim - i
            if template.shape[dt] != x.shape[dx]:
                continue
            if t_names is not None and x_names is not None and \
                    t_names[dt] != x_names[dx]:
                raise KeyConflictError('names', dt, t_names[dt], x_names[dx])
            if t_keys is not None and x_keys is not None and \
                    not keys_equal(t_keys[dt], x_keys[dx]):
                raise KeyConflictError('keys', dt, t_keys[dt], x_keys[dx])
