# flake8: noqa
from axiskeys.config import config
from axiskeys.errors import (ArityError, AxisKeysUserWarning, DimensionMismatchError,
                             DuplicateNameError, IndexOutOfBoundsError,
                             InvalidSelectorError, KeyConflictError, KeyLookupError,
                             UnextendableKeyError, UnknownNameError)
from axiskeys.keyed import KeyedArray
from axiskeys.keys import KeyRange
from axiskeys.named import NamedDimsArray
from axiskeys.selectors import Between, Index, Interval, Near
from axiskeys.tables import iter_rows, to_columns, to_dataframe
from axiskeys.version import version as __version__
from axiskeys.wrap import axiskeys, dimnames, keyless, to_dict, unname, wrapdims
