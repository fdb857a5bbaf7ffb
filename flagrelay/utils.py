"""
Flagrelay utilities (internal helpers shared by specs, results and registry).

Overview
- UnsetType / Unset
  • Singleton sentinel to represent “value not provided” without conflating with None.
  • Falsey (bool(Unset) is False), printable as "Unset", and non-subclassable.

- coalesce(value, default=None)
  • Replace Unset with a concrete default, but preserve legitimate falsey values like None/0/""/[].

- rename(callable, name) / @rename("name")
  • Assign stable __name__/__qualname__ to generated accessors for clean tracebacks.

- StorageGuard / view("field") / Record
  • Write-once backing storage for value objects (FlagSpec, ParseResult) and the
    read-only properties that expose it (tuples, frozensets and mapping proxies).
  • Record adds __fields__ wiring, __repr__/__rich_repr__ and field-wise equality.

Usage guidance
- Prefer Unset for API defaults when None is a meaningful user value; materialize with coalesce().
- Declare the public fields of a guarded class in __fields__ and wire them with view().
"""
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from contextlib import contextmanager
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

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
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        """
        Support reversed PEP 604 unions when UnsetType appears on the right.
        """
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


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Falsey: bool(Unset) is False, but it is not equivalent to None or 0.
"""


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None   # None is preserved, not replaced
    """
    return object if object is not Unset else default


def rename(x, /, name=None):
    """
    set a stable __name__/__qualname__ on a callable, or return a curried renamer.

    parameters
    - x: callable | str
      • callable → rename in place.
      • str      → desired name; returns a callable that will rename a future function.
    - name: str | None
      target name to assign (required in the callable form).

    errors
    - TypeError if a callable is given and the name is not a string.
    """
    if isinstance(x, str):
        return functools.partial(rename, name=x)
    if not isinstance(name, str):
        raise TypeError("callable name must be a string")
    x.__qualname__ = name
    x.__name__ = name
    return x


class StorageGuard:
    """
    internal mixin that keeps construction-time fields write-once.

    rules
    - any attribute whose name starts with '-' is backing storage and:
      • cannot be read through normal attribute access (AttributeError),
      • cannot be written once the build phase is over.

    build phase
    - __new__ is a context manager; backing fields may only be written inside it:
        with super().__new__(cls) as self:
            setattr(self, "-field", value)
        # after the 'with' block, backing fields are locked (read-only).
    """
    __slots__ = ("__building",)

    @contextmanager
    def __new__(cls):
        self = super().__new__(cls)
        self.__building = True
        try:
            yield self
        finally:
            self.__building = False

    def __getattribute__(self, name, /):
        if isinstance(name, str) and name.startswith("-"):
            raise AttributeError("internal storage is not accessible")
        return object.__getattribute__(self, name)

    def __setattr__(self, name, value, /):
        if isinstance(name, str) and name.startswith("-") and not self.__building:
            raise AttributeError("internal storage is read-only")
        return object.__setattr__(self, name, value)

    def __delattr__(self, name, /):
        if isinstance(name, str) and name.startswith("-"):
            raise AttributeError("internal storage is read-only")
        return object.__delattr__(self, name)


def view(name, /):
    """
    internal: build a read-only property over a '-' prefixed backing field.

    behavior
    - Sequence (non-str) → tuple
    - Mapping           → MappingProxyType
    - Set               → frozenset
    - other types       → returned as-is
    """

    @rename(name)
    def getter(self):
        value = object.__getattribute__(self, "-" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping):
            return MappingProxyType(value)
        if isinstance(value, Set):
            return frozenset(value)
        return value

    return property(getter)


class Record(StorageGuard):
    """
    internal base for immutable value objects built on StorageGuard.

    conventions
    - __fields__ lists the public, read-only fields; each one is wired to view()
      when the subclass is created.
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used by __repr__.
    - equality compares the type and every declared field.
    """
    __fields__ = ()

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        cls.__typename__ = re.sub(r"(?<!^)(?=[A-Z])", r"-", cls.__name__).lower()
        for name in cls.__dict__.get("__fields__", ()):
            setattr(cls, name, view(name))

    def __rich_repr__(self):
        """
        Yield (name, object) pairs for pretty printers such as rich.pretty.
        """
        for name in type(self).__fields__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"{type(self).__typename__}({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __eq__(self, other, /):
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__fields__)

    __hash__ = None


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "StorageGuard",
    "view",
    "Record",
)
