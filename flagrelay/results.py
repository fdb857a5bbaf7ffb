"""
Flagrelay parse results and the lookups that run directly on them.

A ParseResult is self-contained: querying it never needs the FlagSpec list that
produced it, so it can be serialized, shipped across a process boundary and
queried there.

Fields
- values_by_id: dense flag id (declaration index) → tuple of values.
- name_to_id: every non-empty short/long name → flag id.
- nonflag_args: tokens left after all flags were matched, in input order.

A flag that matched nothing and has no defaults is absent from both maps.
"""
from collections.abc import Iterable, Mapping

from .faults import InvalidUsageError, NotFoundError
from .utils import *


class ParseResult(Record):
    __fields__ = (
        "values_by_id",
        "name_to_id",
        "nonflag_args",
    )

    def __new__(cls, values_by_id=Unset, name_to_id=Unset, nonflag_args=Unset):
        values_by_id = coalesce(values_by_id, {})
        name_to_id = coalesce(name_to_id, {})
        nonflag_args = coalesce(nonflag_args, ())

        if not isinstance(values_by_id, Mapping):
            raise TypeError("result 'values_by_id' must be a mapping")
        if not isinstance(name_to_id, Mapping):
            raise TypeError("result 'name_to_id' must be a mapping")
        if isinstance(nonflag_args, str) or not isinstance(nonflag_args, Iterable):
            raise TypeError("result 'nonflag_args' must be an iterable of strings")

        with super().__new__(cls) as self:
            setattr(self, "-values_by_id", {int(id): tuple(values) for id, values in values_by_id.items()})
            setattr(self, "-name_to_id", {str(name): int(id) for name, id in name_to_id.items()})
            setattr(self, "-nonflag_args", tuple(nonflag_args))
        return self


def get(name, result, /):
    """
    look up the values stored for a flag name.

    errors
    - InvalidUsageError when there is no result (nothing was parsed).
    - NotFoundError when the name was never registered, or when its id has no
      stored values.
    """
    if result is None:
        raise InvalidUsageError("parsed result is missing", hint="parse the arguments before querying flags")
    try:
        id = result.name_to_id[name]
    except KeyError:
        raise NotFoundError("flag %s not found in parsed result" % name, flag=name) from None
    try:
        return result.values_by_id[id]
    except KeyError:
        raise NotFoundError("id %d for flag %s can not be found in parsed result" % (id, name), flag=name) from None


def nonflag_args(result, /):
    """
    return the leftover positional tokens, or () when there is no result.
    """
    if result is None:
        return ()
    return result.nonflag_args


__all__ = (
    "ParseResult",
    "get",
    "nonflag_args",
)
