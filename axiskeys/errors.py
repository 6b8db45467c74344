__all__ = [
    "ArityError",
    "AxisKeysUserWarning",
    "DimensionMismatchError",
    "DuplicateNameError",
    "IndexOutOfBoundsError",
    "InvalidSelectorError",
    "KeyConflictError",
    "KeyLookupError",
    "UnextendableKeyError",
    "UnknownNameError",
]


class _BaseAxisKeysError(ValueError):
    _msg = ""

    def __init__(self, *args):
        """
        If a single argument is passed, treat it as a pre-formatted message. Otherwise
        the arguments fill in the template of the class.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class _BaseAxisKeysIndexError(IndexError):
    _msg = ""

    def __init__(self, *args):
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class _BaseAxisKeysKeyError(KeyError):
    _msg = ""

    def __init__(self, *args):
        super().__init__(self._msg.format(*args))

    def __str__(self):
        # KeyError quotes its argument otherwise
        return self.args[0]


class ArityError(_BaseAxisKeysError):
    _msg = "wrong number of {0}, got {1} with ndim == {2}"


class DimensionMismatchError(_BaseAxisKeysError):
    _msg = ("length of key vector does not match size of array: "
            "shape[{0}] == {1} != len(keys) == {2}, for keys {3!r}")


class DuplicateNameError(_BaseAxisKeysError):
    _msg = "dimension names must be unique, {0!r} appears more than once in {1!r}"


class UnknownNameError(_BaseAxisKeysKeyError):
    _msg = "no dimension named {0!r}, expected one of {1!r}"


class KeyLookupError(_BaseAxisKeysKeyError):
    _msg = "key {1!r} not found in dimension {0}"


class InvalidSelectorError(_BaseAxisKeysIndexError):
    _msg = "invalid selector {1!r} for dimension {0}: {2}"


class UnextendableKeyError(_BaseAxisKeysError):
    _msg = ("cannot determine the next key for dimension {0} with keys of type "
            "{1}; supply the new key explicitly")


class IndexOutOfBoundsError(_BaseAxisKeysIndexError):
    pass


class KeyConflictError(_BaseAxisKeysError):
    _msg = "{0} of dimension {1} do not match: {2!r} != {3!r}"


class AxisKeysUserWarning(UserWarning):
    """
    A warning raised when input was silently adjusted to fit the array.
    """
