import collections
import numbers

import numpy as np

from axiskeys.errors import (IndexOutOfBoundsError, InvalidSelectorError)


def is_integer(x):
    return isinstance(x, numbers.Integral) and not isinstance(x, bool)


def is_integer_array(x, ndim=None):
    t = hasattr(x, 'shape') and hasattr(x, 'dtype') and x.dtype.kind in 'ui'
    if ndim is not None:
        t = t and len(x.shape) == ndim
    return t


def is_bool_array(x, ndim=None):
    t = hasattr(x, 'shape') and hasattr(x, 'dtype') and x.dtype == bool
    if ndim is not None:
        t = t and len(x.shape) == ndim
    return t


def is_slice(s):
    return isinstance(s, slice)


def normalize_integer_selection(dim_sel, dim_len):

    # normalize type to int
    dim_sel = int(dim_sel)

    # handle wraparound
    if dim_sel < 0:
        dim_sel = dim_len + dim_sel

    # handle out of bounds
    if dim_sel >= dim_len or dim_sel < 0:
        raise IndexOutOfBoundsError(f"index out of bounds for dimension with length "
                                    f"{dim_len}")

    return dim_sel


def wraparound_indices(x, dim_len):
    loc_neg = x < 0
    if np.any(loc_neg):
        x[loc_neg] = x[loc_neg] + dim_len


def boundscheck_indices(x, dim_len):
    if np.any(x < 0) or np.any(x >= dim_len):
        raise IndexOutOfBoundsError(f"index out of bounds for dimension with length "
                                    f"{dim_len}")


def ensure_tuple(v):
    if not isinstance(v, tuple):
        v = (v,)
    return v


def check_selection_length(selection, shape):
    if len(selection) > len(shape):
        raise InvalidSelectorError(tuple(range(len(shape))), selection,
                                   f"too many indices for array; expected {len(shape)}, "
                                   f"got {len(selection)}")


def replace_ellipsis(selection, shape):

    selection = ensure_tuple(selection)

    # count number of ellipsis present
    n_ellipsis = sum(1 for i in selection if i is Ellipsis)

    if n_ellipsis > 1:
        # more than 1 is an error
        raise InvalidSelectorError(tuple(range(len(shape))), selection,
                                   "an index can only have a single ellipsis ('...')")

    elif n_ellipsis == 1:
        # locate the ellipsis, count how many items to left and right
        n_items_l = [i is Ellipsis for i in selection].index(True)  # items to left of ellipsis
        n_items_r = len(selection) - (n_items_l + 1)  # items to right of ellipsis
        n_items = len(selection) - 1  # all non-ellipsis items

        if n_items >= len(shape):
            # ellipsis does nothing, just remove it
            selection = tuple(i for i in selection if i is not Ellipsis)

        else:
            # replace ellipsis with as many slices are needed for number of dims
            new_item = selection[:n_items_l] + ((slice(None),) * (len(shape) - n_items))
            if n_items_r:
                new_item += selection[-n_items_r:]
            selection = new_item

    # fill out selection if not completely specified
    if len(selection) < len(shape):
        selection += (slice(None),) * (len(shape) - len(selection))

    # check selection not too long
    check_selection_length(selection, shape)

    return selection


def replace_lists(selection):
    return tuple(
        np.asarray(dim_sel) if isinstance(dim_sel, list) else dim_sel
        for dim_sel in selection
    )


def slice_to_range(s, l):
    return range(*s.indices(l))


def ix_(selection, shape):
    """Convert an orthogonal selection to a numpy advanced (fancy) selection, like numpy.ix_
    but with support for slices and single ints."""

    # normalisation
    selection = replace_ellipsis(selection, shape)

    # replace slice and int as these are not supported by numpy.ix_
    selection = [slice_to_range(dim_sel, dim_len) if isinstance(dim_sel, slice)
                 else [dim_sel] if is_integer(dim_sel)
                 else dim_sel
                 for dim_sel, dim_len in zip(selection, shape)]

    # now get numpy to convert to a coordinate selection
    selection = np.ix_(*selection)

    return selection


def oindex(a, selection):
    """Implementation of orthogonal indexing with slices and ints."""
    # wrappers and resizable arrays know how to do this themselves
    if hasattr(a, 'get_orthogonal_selection'):
        return a.get_orthogonal_selection(selection)
    selection = replace_ellipsis(selection, a.shape)
    drop_axes = tuple([i for i, s in enumerate(selection) if is_integer(s)])
    selection = ix_(selection, a.shape)
    result = getitem(a, selection)
    if drop_axes:
        result = result.squeeze(axis=drop_axes)
    if np.ndim(result) == 0:
        result = result[()]
    return result


class OIndex:

    def __init__(self, array):
        self.array = array

    def __getitem__(self, selection):
        selection = ensure_tuple(selection)
        selection = replace_lists(selection)
        return self.array.get_orthogonal_selection(selection)


def getitem(a, selection):
    """Positional get on the wrapped array, reporting bounds failures as
    :class:`IndexOutOfBoundsError`."""
    try:
        return a[selection]
    except (IndexOutOfBoundsError, InvalidSelectorError):
        raise
    except IndexError as e:
        raise IndexOutOfBoundsError(str(e)) from e


def setitem(a, selection, value):
    try:
        a[selection] = value
    except (IndexOutOfBoundsError, InvalidSelectorError):
        raise
    except IndexError as e:
        raise IndexOutOfBoundsError(str(e)) from e


DimProjection = collections.namedtuple('DimProjection', ('dim', 'dim_sel'))
"""A dimension of the source array which survives a selection.

Parameters
----------
dim
    Dimension number in the source array.
dim_sel
    Selection of items along that dimension, a slice or a 1-dimensional integer
    array.

"""


def dim_nitems(dim_sel, dim_len):
    if is_slice(dim_sel):
        return len(slice_to_range(dim_sel, dim_len))
    return len(dim_sel)


def orthogonal_projections(selection, shape):
    """Projections of the dimensions kept by an orthogonal selection, which must
    already be normalized to one item per dimension."""
    projections = []
    for dim, dim_sel in enumerate(selection):
        if is_integer(dim_sel):
            continue
        if is_bool_array(dim_sel, 1):
            dim_sel = np.flatnonzero(dim_sel)
        projections.append(DimProjection(dim, dim_sel))
    return projections


def basic_projections(selection, shape):
    """Projections of the dimensions kept by a numpy-style (basic or single advanced
    array) selection, in the order they appear in the result.

    Returns None when the selection can't be followed dimension by dimension, e.g.,
    several index arrays, ``None`` (new axis) or multi-dimensional masks.
    """

    selection = ensure_tuple(selection)
    if any(s is None for s in selection):
        return None
    selection = replace_lists(selection)
    if any(is_bool_array(s) and s.ndim != 1 for s in selection):
        return None
    try:
        selection = replace_ellipsis(selection, shape)
    except InvalidSelectorError:
        return None

    advanced = []
    projections = []
    for dim, dim_sel in enumerate(selection):
        if is_integer(dim_sel):
            advanced.append(dim)
        elif is_slice(dim_sel):
            projections.append(DimProjection(dim, dim_sel))
        elif is_integer_array(dim_sel, 1) or is_bool_array(dim_sel, 1):
            if is_bool_array(dim_sel):
                dim_sel = np.flatnonzero(dim_sel)
            advanced.append(dim)
            projections.append(DimProjection(dim, dim_sel))
        else:
            return None

    arrays = [p for p in projections if not is_slice(p.dim_sel)]
    if len(arrays) > 1:
        return None
    if arrays and advanced != list(range(advanced[0], advanced[-1] + 1)):
        # N.B., numpy moves the dimension of an index array to the front when
        # integers and the array are separated by a slice
        projections.remove(arrays[0])
        projections.insert(0, arrays[0])
    return projections


def projected_shape(projections, shape):
    return tuple(dim_nitems(p.dim_sel, shape[p.dim]) for p in projections)


def select_keys(keys, dim_sel):
    """Subset one dimension's key sequence along with the data."""
    if is_slice(dim_sel):
        return keys[dim_sel]
    if isinstance(keys, np.ndarray):
        return keys[dim_sel]
    return [keys[int(i)] for i in dim_sel]
