"""Views of a keyed array as a table, with one row per element."""
import itertools

import numpy as np

from axiskeys.wrap import axiskeys, dimnames

__all__ = ["iter_rows", "to_columns", "to_dataframe"]


def column_names(a, value_name):
    names = dimnames(a)
    if names is None:
        names = tuple(f"dim_{d}" for d in range(np.ndim(a)))
    if value_name in names:
        raise ValueError(f"value_name {value_name!r} is already the name of a "
                         f"dimension, choose another")
    return names


def iter_rows(a, value_name="value"):
    """Yield one dict per element of `a`, in C order, holding the key of the element
    along each dimension and its value.

    Dimensions are labelled by their names, or ``dim_0``, ``dim_1``, ... if `a` has
    none.

    Examples
    --------
    >>> import numpy as np
    >>> from axiskeys import wrapdims, iter_rows
    >>> a = wrapdims(np.array([[1, 2], [3, 4]]), x=[10, 20], y=["a", "b"])
    >>> next(iter_rows(a))
    {'x': 10, 'y': 'a', 'value': 1}

    """
    names = column_names(a, value_name)
    keys = axiskeys(a)
    values = np.asarray(a)
    for index in itertools.product(*(range(n) for n in values.shape)):
        row = {name: k[i] for name, k, i in zip(names, keys, index)}
        row[value_name] = values[index].item()
        yield row


def to_columns(a, value_name="value"):
    """Same as :func:`iter_rows`, as a dict of lists with one entry per column."""
    names = column_names(a, value_name)
    columns = {name: [] for name in names + (value_name,)}
    for row in iter_rows(a, value_name):
        for name, v in row.items():
            columns[name].append(v)
    return columns


def to_dataframe(a, value_name="value"):
    """Build a ``pandas.DataFrame`` from :func:`to_columns`."""
    try:
        import pandas as pd
    except ImportError as error:
        raise ImportError(
            "{}: Run `pip install axiskeys[pandas]` or `conda install pandas` "
            "to get the required pandas dependency for converting to a "
            "DataFrame".format(error)
        )
    return pd.DataFrame(to_columns(a, value_name))
