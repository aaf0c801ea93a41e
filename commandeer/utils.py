"""
Commandeer utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the tokenizer, resolvers, renderers and faults.

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated wrappers for clean tracebacks.

- kebabize(name)
  • Command-line spelling of a canonical field name (androidMax → android-max).

- mirror("attr")
  • Read-only property exposing a private backing field (self._attr) as a fresh copy.

- verbose(level)
  • Attach a rich logging handler to the package logger while debugging.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> kebabize("expiresInDays")
    'expires-in-days'
"""
import builtins
import functools
import logging
import re
from collections.abc import Mapping, Sequence
from typing import final

from rich.logging import RichHandler


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    This is used when None is a legitimate user value (a schema field may well
    default to None), but the API needs a way to distinguish “no default” from
    “default is None”.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset" for friendly diagnostics.
    - Non-subclassable: this type is sealed; do not subclass.
    - Singleton per process: UnsetType() always yields the same instance.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in annotations (e.g., str | UnsetType).
        """
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "", or [] are preserved as-is; only Unset is replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - Function form: rename(callable, name) -> callable
    - Decorator form: rename(name) -> (decorator)
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Recursively copy container values so callers cannot mutate definition state.

    - Mapping: returns a new dict with processed values (keys preserved).
    - List-like sequences: returns a new list with each element processed.
    - Anything else (strings, tuples, named tuples included): returned as-is.
    """
    if isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Sequence) and not isinstance(object, str | tuple):
        return list(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute "_{name}".

    Containers are returned as fresh copies to discourage accidental mutation of
    definition state through the public API.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def kebabize(name, /):
    """
    Return the hyphenated command-line spelling of a canonical field name.

    Rules
    - every uppercase letter becomes a hyphen followed by its lowercase form
      (camel-style names: androidMax → android-max).
    - every underscore becomes a hyphen (snake-style names: android_max → android-max).
    - names without either are returned unchanged (verbose → verbose).

    Examples
    - kebabize("androidMax")     -> "android-max"
    - kebabize("expiresInDays")  -> "expires-in-days"
    - kebabize("dry_run")        -> "dry-run"
    """
    if not isinstance(name, str):
        raise TypeError("kebabize() argument must be a string")
    return re.sub(r"[A-Z]", lambda match: "-" + match[0].lower(), name).replace("_", "-")


def verbose(level=logging.DEBUG, /):
    """
    Route the package logger through rich while debugging a CLI.

    Attaches a single RichHandler to the "commandeer" logger (repeated calls only
    adjust the level) and returns the logger.
    """
    logger = logging.getLogger(__package__)
    logger.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(show_path=False, markup=False))
    return logger


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Distinct from None: equality and identity checks must not treat it as None.
- Typical pattern: value = coalesce(user_value, default).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "kebabize",
    "verbose",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
