"""
The config module manages the configuration of axiskeys and is based on the Donfig python
library.

Example:
    Wrap with the names layer outermost for every subsequent call to ``wrapdims``, or only
    inside a block::

        from axiskeys.config import config

        config.set({"wrap.nameouter": True})

        with config.set({"wrap.extend_ranges": False}):
            ...

    The same values can be set with environment variables such as
    ``AXISKEYS_WRAP__NAMEOUTER=True``. The double underscore ``__`` is used to indicate
    nested access.

Items
-----
wrap.nameouter : bool
    If True, ``wrapdims(a, name=keys)`` builds ``NamedDimsArray(KeyedArray(a))``,
    otherwise ``KeyedArray(NamedDimsArray(a))``. Defaults to False.
wrap.extend_ranges : bool
    If True, a range of keys with the wrong length is rebuilt to fit the array with a
    warning. If False, such ranges raise ``DimensionMismatchError``. Defaults to True.

For more information, see the Donfig documentation at https://github.com/pytroll/donfig.
"""

from typing import Any

from donfig import Config as DConfig


class BadConfigError(ValueError):
    pass


class Config(DConfig):  # type: ignore[misc]
    """The Config will collect configuration from config files and environment variables

    Example environment variables:
    Grabs environment variables of the form "AXISKEYS_FOO__BAR_BAZ=123" and
    turns these into config variables of the form ``{"foo": {"bar-baz": 123}}``
    It transforms the key and value in the following way:

    -  Lower-cases the key text
    -  Treats ``__`` (double-underscore) as nested access
    -  Calls ``ast.literal_eval`` on the value

    """

    def reset(self) -> None:
        self.clear()
        self.refresh()


# The default configuration for axiskeys
config = Config(
    "axiskeys",
    defaults=[
        {
            "wrap": {
                "nameouter": False,
                "extend_ranges": True,
            },
        }
    ],
)


def parse_bool(key: str, data: Any) -> bool:
    if isinstance(data, bool):
        return data
    raise BadConfigError(f"Expected a bool for {key!r}, got {data!r} instead.")


def get_flag(key: str) -> bool:
    return parse_bool(key, config.get(key))
