r"""
Flagrelay flag specifications.

Overview
- FlagType: the three value kinds a flag can carry (boolean, number, string),
  with FlagType.parse() accepting the shell-facing type tokens ("bool" included).
- FlagOptions: plain, frozen configuration for one flag (defaults, required,
  allowed values, string pattern, description, defaults-mandatory mode).
- FlagSpec: the immutable, validated declaration of one flag. Built once by a
  single validating constructor; never mutated afterwards.

Validation highlights (checked once, at construction)
- at least one of the short/long names must be non-empty after trimming spaces.
- a required flag cannot carry default values.
- with defaults_mandatory, an optional flag must carry at least one default.
- allowed values are illegal for boolean flags.
- a string pattern is illegal for boolean and number flags.
Any violation raises InvalidUsageError; wrong Python types raise TypeError.

Value validation (FlagSpec.validate)
- boolean: literally "true" or "false".
- number: a 64-bit floating point literal (decimal, inf/nan, or hexadecimal
  with a binary exponent); finite literals overflowing to infinity are rejected.
- string: full match against the pattern, when one is set.
- every type: membership in the allowed values, when any are set.

Quick example:
    >>> spec = FlagSpec("s", "short", FlagType.STRING, FlagOptions(allowed_values=("foo", "bar")))
    >>> spec.name
    '-s/--short'
    >>> spec.validate("baz")
    Traceback (most recent call last):
    ...
    flagrelay.faults.InvalidValueError: INVALID_VALUE: invalid value 'baz', allowed values: foo, bar
"""
import dataclasses
import math
import re
from collections.abc import Iterable
from enum import StrEnum

from .faults import InvalidUsageError, InvalidValueError
from .utils import *

# nan takes no sign
_DECIMAL = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?)|nan", re.IGNORECASE)
_HEXADECIMAL = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")


class FlagType(StrEnum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"

    @classmethod
    def parse(cls, token, /):
        """
        resolve a shell-facing type token into a FlagType.

        accepted tokens
        - "boolean" or "bool" → BOOLEAN
        - "number"            → NUMBER
        - "string"            → STRING

        errors
        - InvalidValueError for anything else.
        """
        if not isinstance(token, str):
            raise TypeError("flag type must be a string")
        if token == "bool":
            return cls.BOOLEAN
        try:
            return cls(token)
        except ValueError:
            raise InvalidValueError("unrecognized type: %s" % token, value=token) from None


@dataclasses.dataclass(frozen=True, kw_only=True)
class FlagOptions:
    """
    Plain configuration for one flag; FlagSpec performs all validation.

    Fields
    - default_values: ordered default values used when the flag never matches.
    - required: the flag must appear at least once.
    - allowed_values: membership whitelist for supplied values.
    - pattern: str | re.Pattern | None, full-match pattern for string flags
      ("" means no pattern).
    - description: free text for an external help renderer.
    - defaults_mandatory: optional flags must then carry at least one default.
    """
    default_values: Iterable[str] = ()
    required: bool = False
    allowed_values: Iterable[str] = ()
    pattern: str | re.Pattern | None = None
    description: str = ""
    defaults_mandatory: bool = False


def _sanitize_names(metadata, /):
    """
    Internal: trim and check the short/long names.

    Names are stored without dash prefixes; surrounding spaces are dropped.
    """
    for field in ("short_name", "long_name"):
        if not isinstance(name := metadata[field], str):
            raise TypeError(f"flag '{field}' must be a string")
        metadata[field] = name.strip(" ")

    if not metadata["short_name"] and not metadata["long_name"]:
        raise InvalidUsageError(
            "at least one of short or long flag name is required",
            hint="declare the flag with a short name (e.g., 'v'), a long name (e.g., 'verbose'), or both"
        )


def _sanitize_values(metadata, /):
    """
    Internal: normalize the value collections into tuples of strings.

    A bare string is rejected instead of being split into characters.
    """
    for field in ("default_values", "allowed_values"):
        values = metadata[field]
        if isinstance(values, str) or not isinstance(values, Iterable):
            raise TypeError(f"flag '{field}' must be an iterable of strings")
        values = tuple(values)
        if not all(isinstance(value, str) for value in values):
            raise TypeError(f"flag '{field}' must only contain strings")
        metadata[field] = values


def _sanitize_pattern(metadata, /):
    """
    Internal: compile the string pattern, if any.

    An empty pattern string means no pattern; a pattern that does not compile
    is an invalid declaration.
    """
    match pattern := metadata["pattern"]:
        case None | "":
            metadata["pattern"] = None
        case str():
            try:
                metadata["pattern"] = re.compile(pattern)
            except re.error as error:
                raise InvalidUsageError("invalid string pattern %r: %s" % (pattern, error), pattern=pattern) from None
        case re.Pattern():
            if not isinstance(pattern.pattern, str):
                raise TypeError("flag 'pattern' must be a text pattern")
        case _:
            raise TypeError("flag 'pattern' must be a string or a compiled pattern")


def _display_name(short_name, long_name, /):
    names = []
    if short_name:
        names.append("-" + short_name)
    if long_name:
        names.append("--" + long_name)
    return "/".join(names)


class FlagSpec(Record):
    """
    Immutable declaration of one command-line flag.

    Fields (read-only)
    - short_name / long_name: names without dash prefixes ("" when absent).
    - type: FlagType.
    - required, default_values, allowed_values, pattern, description.

    Derived
    - name: display name, "-s/--long" when both names are set.
    - names: the non-empty names, short first.
    """

    __fields__ = (
        "short_name",
        "long_name",
        "type",
        "required",
        "default_values",
        "allowed_values",
        "pattern",
        "description",
    )

    def __new__(cls, short_name, long_name, type, /, options=Unset):
        """
        Construct and validate a FlagSpec.

        Parameters
        - short_name, long_name: str, at least one non-empty after trimming.
        - type: FlagType | str (type token, see FlagType.parse).
        - options: FlagOptions, defaults to FlagOptions().

        Raises
        - InvalidUsageError when a declaration invariant is violated.
        - InvalidValueError when the type token is not recognized.
        - TypeError on wrong Python types.
        """
        options = coalesce(options, FlagOptions())
        if not isinstance(options, FlagOptions):
            raise TypeError("flag 'options' must be a FlagOptions instance")
        if isinstance(type, str) and not isinstance(type, FlagType):
            type = FlagType.parse(type)
        elif not isinstance(type, FlagType):
            raise TypeError("flag 'type' must be a FlagType or a type token")

        metadata = {
            "short_name": short_name,
            "long_name": long_name,
            "type": type,
            "required": bool(options.required),
            "default_values": options.default_values,
            "allowed_values": options.allowed_values,
            "pattern": options.pattern,
            "description": options.description,
        }
        if not isinstance(metadata["description"], str):
            raise TypeError("flag 'description' must be a string")

        _sanitize_names(metadata)
        _sanitize_values(metadata)
        _sanitize_pattern(metadata)

        name = _display_name(metadata["short_name"], metadata["long_name"])

        if metadata["required"] and metadata["default_values"]:
            raise InvalidUsageError("%s: a required flag can not have default values" % name, flag=name)

        if options.defaults_mandatory and not metadata["required"] and not metadata["default_values"]:
            raise InvalidUsageError("%s: an optional flag should have default value(s) provided" % name, flag=name)

        if metadata["allowed_values"] and type is FlagType.BOOLEAN:
            raise InvalidUsageError("%s: allowed values can not be provided for type %s" % (name, type), flag=name)

        if metadata["pattern"] is not None and type in (FlagType.BOOLEAN, FlagType.NUMBER):
            raise InvalidUsageError("%s: string pattern can not be provided for type %s" % (name, type), flag=name)

        with super().__new__(cls) as self:
            for field, value in metadata.items():
                setattr(self, "-" + field, value)
        return self

    @property
    def name(self):
        return _display_name(self.short_name, self.long_name)

    @property
    def names(self):
        return tuple(name for name in (self.short_name, self.long_name) if name)

    def validate(self, value, /):
        """
        check one candidate value against this flag's type and constraints.

        returns
        - None when the value is acceptable.

        errors
        - InvalidValueError naming the value and the rule it broke.
        """
        if not isinstance(value, str):
            raise TypeError("flag values must be strings")

        match self.type:
            case FlagType.BOOLEAN:
                if value not in ("true", "false"):
                    raise InvalidValueError(
                        "invalid value %r, boolean can only take true or false" % value,
                        flag=self.name,
                        value=value
                    )
            case FlagType.NUMBER:
                if not _is_number(value):
                    raise InvalidValueError(
                        "invalid value %r can not be parsed as number" % value,
                        flag=self.name,
                        value=value
                    )
            case FlagType.STRING:
                if self.pattern is not None and not self.pattern.fullmatch(value):
                    raise InvalidValueError(
                        "invalid value %r, string should be matched by pattern %r" % (value, self.pattern.pattern),
                        flag=self.name,
                        value=value
                    )

        if self.allowed_values and value not in self.allowed_values:
            raise InvalidValueError(
                "invalid value %r, allowed values: %s" % (value, ", ".join(self.allowed_values)),
                flag=self.name,
                value=value,
                hint="use one of: %s" % ", ".join(self.allowed_values)
            )


def _is_number(value, /):
    """
    Internal: True when value reads as a 64-bit floating point literal.
    """
    if _DECIMAL.fullmatch(value):
        number = float(value)
    elif _HEXADECIMAL.fullmatch(value):
        try:
            number = float.fromhex(value)
        except OverflowError:
            return False
    else:
        return False
    # an overflowing finite literal rounds to infinity
    return not math.isinf(number) or "inf" in value.lower()


__all__ = (
    "FlagType",
    "FlagOptions",
    "FlagSpec",
)
