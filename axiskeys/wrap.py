import logging
import warnings
from collections.abc import Mapping

import numpy as np

from axiskeys.config import get_flag
from axiskeys.core import Base
from axiskeys.errors import ArityError, AxisKeysUserWarning, DimensionMismatchError
from axiskeys.keyed import KeyedArray
from axiskeys.keys import KeyRange, as_key_sequence, default_keys
from axiskeys.named import NamedDimsArray, check_names

logger = logging.getLogger(__name__)

__all__ = ["wrapdims", "check_keys", "axiskeys", "dimnames", "keyless", "unname",
           "to_dict"]


# ranges which have already been reported as adjusted
_warned = set()


def reset_warnings():
    """Forget which range adjustments have been reported, so that they warn again."""
    _warned.clear()


def wrapdims(a, *args, key_type=None, nameouter=None, **named_keys):
    """Wrap an array with keys, names, or both, fixing up keys where possible.

    Parameters
    ----------
    a : array-like or mapping
        Array to wrap, by reference. Objects without a ``shape`` are converted with
        ``numpy.asanyarray``. A mapping becomes a one-dimensional array of its values,
        keyed by its keys.
    *args
        Either one name (str) per dimension, giving a :class:`NamedDimsArray`, or one
        key vector per dimension, giving a :class:`KeyedArray`. ``None`` keys a
        dimension by position.
    key_type : callable, optional
        Applied to every key vector after checking, e.g., ``tuple`` or
        ``numpy.asarray``.
    nameouter : bool, optional
        Nesting order when both names and keys are given. If True, the names layer
        is outermost. Defaults to the ``wrap.nameouter`` config value.
    **named_keys
        One keyword per dimension, in order, mapping its name to its key vector.

    Returns
    -------
    KeyedArray or NamedDimsArray

    Notes
    -----
    Unlike the constructors of :class:`KeyedArray` and :class:`NamedDimsArray`, a
    range of keys of the wrong length is rebuilt with the same start and step and
    the length of the array, with an :class:`AxisKeysUserWarning`. Set the config
    value ``wrap.extend_ranges`` to False to make this an error.

    Examples
    --------
    >>> import numpy as np
    >>> from axiskeys import wrapdims
    >>> a = wrapdims(np.zeros((2, 3)), "row", "col")
    >>> a.dimnames
    ('row', 'col')
    >>> a = wrapdims(np.zeros((2, 3)), [10, 20], ["a", "b", "c"])
    >>> a.axiskeys(1)
    ['a', 'b', 'c']
    >>> a = wrapdims(np.zeros((2, 3)), row=[10, 20], col=["a", "b", "c"])
    >>> a
    <axiskeys.keyed.KeyedArray (2, 3) float64 ('row', 'col')>
    >>> int(wrapdims({"x": 1, "y": 2}, "name")("y"))
    2

    """

    if isinstance(a, Mapping):
        return wrap_mapping(a, *args, nameouter=nameouter)

    if not hasattr(a, 'shape'):
        a = np.asanyarray(a)

    if args and named_keys:
        raise TypeError("give either positional names or key vectors, or keyword keys, "
                        "not both")

    if named_keys:
        names = check_names(a, tuple(named_keys))
        keys = apply_key_type(check_keys(a, named_keys.values()), key_type)
        return wrap_both(a, names, keys, nameouter)

    if args and all(isinstance(n, str) for n in args):
        if key_type is not None:
            raise TypeError("key_type requires key vectors")
        return NamedDimsArray(a, check_names(a, args))

    if any(isinstance(k, str) for k in args):
        raise TypeError(f"give either names or key vectors, not a mix of both: "
                        f"{args!r}")

    if not args:
        args = (None,) * len(a.shape)
    keys = apply_key_type(check_keys(a, args), key_type)
    return KeyedArray(a, keys)


def wrap_both(a, names, keys, nameouter=None):
    if nameouter is None:
        nameouter = get_flag("wrap.nameouter")
    if nameouter:
        return NamedDimsArray(KeyedArray(a, keys), names)
    return KeyedArray(NamedDimsArray(a, names), keys)


def wrap_mapping(m, *args, nameouter=None):
    data = np.asarray(list(m.values()))
    keys = (list(m.keys()),)
    if not args:
        return KeyedArray(data, keys)
    if len(args) != 1:
        raise ArityError('names', args, 1)
    return wrap_both(data, check_names(data, args), keys, nameouter)


def apply_key_type(keys, key_type):
    if key_type is None:
        return keys
    return tuple(key_type(k) for k in keys)


def check_keys(a, keys):
    """Reconcile one key vector per dimension with the shape of `a`.

    ``None`` becomes positional keys, key vectors of the right length are kept as
    given, ranges of the wrong length are rebuilt to fit, anything else which
    doesn't fit raises :class:`DimensionMismatchError`.
    """

    shape = tuple(a.shape)
    keys = tuple(keys)
    if len(keys) != len(shape):
        raise ArityError('key vectors', len(keys), len(shape))
    checked = []
    for d, (k, n) in enumerate(zip(keys, shape)):
        checked.append(check_key(k, n, d))
    return tuple(checked)


def check_key(keys, n, d):
    if keys is None:
        return default_keys(n)
    keys = as_key_sequence(keys)
    if len(keys) == n:
        return keys
    if isinstance(keys, KeyRange) and get_flag("wrap.extend_ranges"):
        extended = keys.extend(n)
        logger.debug("extended range %r to %r for dimension %s", keys, extended, d)
        if n > 0 and keys not in _warned:
            _warned.add(keys)
            warnings.warn(f"range {keys!r} replaced by {extended!r}, to match "
                          f"shape[{d}] == {n}", AxisKeysUserWarning, stacklevel=4)
        return extended
    raise DimensionMismatchError(d, n, len(keys), keys)


def axiskeys(a, d=None):
    """Key vector of dimension `d` of `a`, or a tuple of all of them. Arrays without
    keys are keyed by position."""
    if isinstance(a, Base):
        return a.axiskeys(d)
    shape = np.shape(a)
    if d is None:
        return tuple(default_keys(n) for n in shape)
    if not isinstance(d, int):
        raise TypeError(f"array has no dimension names, got {d!r}")
    return default_keys(shape[d])


def dimnames(a):
    """Tuple of dimension names of `a`, or None."""
    if isinstance(a, Base):
        return a.dimnames
    return None


def drop_layers(a, cls):
    if not isinstance(a, Base):
        return a
    kept = [layer for layer in a.layers() if not isinstance(layer, cls)]
    result = a.raw()
    for layer in reversed(kept):
        result = layer._wrap_like(result)
    return result


def keyless(a):
    """Remove the keys from `a`, keeping its names if it has any."""
    return drop_layers(a, KeyedArray)


def unname(a):
    """Remove the names from `a`, keeping its keys if it has any."""
    return drop_layers(a, NamedDimsArray)


def to_dict(a):
    """Convert a one-dimensional array to a dict from its keys to its values."""
    if len(np.shape(a)) != 1:
        raise ValueError(f"expected a one-dimensional array, got shape {np.shape(a)}")
    return dict(zip(axiskeys(a, 0), np.asarray(a).tolist()))
