"""
Flagrelay registry: declare flags, parse once, query many times.

What this module provides
- RegistryOptions: plain, frozen registry configuration.
- Registry: owns the ordered FlagSpec list, drives the parse engine and keeps
  the latest ParseResult plus its serialized bytes.
- get_from_token / nonflag_args_from_token (and the *_from_bytes variants):
  stateless queries for a separate invocation that only holds the encoded token.

Typical flow
    # first invocation: declare + parse, hand the token to the shell
    registry = Registry()
    registry.add("s", "short", FlagType.STRING, FlagOptions(allowed_values=("foo", "bar")))
    registry.add("t", "type", FlagType.NUMBER, FlagOptions(default_values=("123",)))
    registry.parse(["--short", "foo", "file.txt"])
    token = registry.token()

    # later invocation: no registry, no specs
    get_from_token("type", token)        # ("123",)
    nonflag_args_from_token(token)       # ("file.txt",)
"""
import dataclasses
import warnings

from . import codec, engine, results
from .faults import DuplicateNameWarning
from .specs import FlagSpec
from .utils import *


@dataclasses.dataclass(frozen=True, kw_only=True)
class RegistryOptions:
    """
    Plain configuration for a Registry.

    Fields
    - allow_unrecognized: keep unknown flag-shaped tokens as non-flag arguments
      instead of failing the parse.
    - usage: free usage text, carried for an external help renderer.
    """
    allow_unrecognized: bool = False
    usage: str = ""


class Registry:
    """
    Ordered collection of flag declarations plus the latest parse.

    Not designed for concurrent use: callers sharing one instance must provide
    their own exclusion.
    """

    def __init__(self, options=Unset):
        options = coalesce(options, RegistryOptions())
        if not isinstance(options, RegistryOptions):
            raise TypeError("registry 'options' must be a RegistryOptions instance")
        self._options = options
        self._specs = []
        self._result = None
        self._parsed = None

    @property
    def options(self):
        return self._options

    @property
    def specs(self):
        return tuple(self._specs)

    @property
    def result(self):
        return self._result

    def add(self, short_name, long_name, type, /, options=Unset):
        """
        declare one more flag; its id is its position in declaration order.

        returns
        - the constructed FlagSpec.

        errors
        - whatever FlagSpec raises (InvalidUsageError, InvalidValueError, TypeError).

        warnings
        - DuplicateNameWarning when a name was already declared by an earlier
          flag; the later declaration wins name lookups.
        """
        spec = FlagSpec(short_name, long_name, type, options)
        declared = {name: other for other in self._specs for name in other.names}
        for name in spec.names:
            if name in declared:
                warnings.warn(DuplicateNameWarning(
                    "flag name %r of %s is already declared by %s" % (name, spec.name, declared[name].name),
                    flag=spec.name,
                    hint="give each flag distinct short and long names"
                ), stacklevel=2)
        self._specs.append(spec)
        return spec

    def parse(self, tokens, /):
        """
        parse tokens against the declared flags, replacing any previous result.

        the previous result is cleared first, so a failed parse leaves nothing behind.
        """
        self._result = None
        self._parsed = None
        result = engine.parse(self._specs, tokens, allow_unrecognized=self._options.allow_unrecognized)
        self._parsed = codec.serialize(result)
        self._result = result

    def get(self, name, /):
        return results.get(name, self._result)

    def nonflag_args(self):
        return results.nonflag_args(self._result)

    def parsed_bytes(self):
        """
        serialized form of the latest result, or None before a successful parse.
        """
        return self._parsed

    def token(self):
        """
        encoded text token of the latest result, or None before a successful parse.
        """
        if self._parsed is None:
            return None
        return codec.encode(self._parsed)


def get_from_bytes(name, payload, /):
    return results.get(name, codec.deserialize(payload))


def nonflag_args_from_bytes(payload, /):
    return results.nonflag_args(codec.deserialize(payload))


def get_from_token(name, token, /):
    """
    values of a flag name straight from an encoded token.

    errors
    - InternalError (bad token), EmptyPayloadError, InvalidUsageError (bad
      payload), NotFoundError (unknown name).
    """
    return get_from_bytes(name, codec.decode(token))


def nonflag_args_from_token(token, /):
    return nonflag_args_from_bytes(codec.decode(token))


__all__ = (
    "RegistryOptions",
    "Registry",
    "get_from_bytes",
    "nonflag_args_from_bytes",
    "get_from_token",
    "nonflag_args_from_token",
)
