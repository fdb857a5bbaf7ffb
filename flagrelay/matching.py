"""
Flagrelay argument matching: pull every occurrence of one flag out of a token sequence.

match(spec, tokens) performs a single left-to-right scan, advancing by one or
two positions per step:
- head form ('-s' / '--long'):
  • boolean flags take the next token as an explicit value only when it is
    literally "true" or "false"; otherwise the implicit value "true" is used and
    the next token stays in the stream.
  • other flags need a next token that does not start with '-'; it is validated
    and consumed, else InvalidValueError("no value provided for flag ...").
- equals form ('-s=value' / '--long=value'): everything after the first '='
  is validated and consumed as one value.
- anything else is copied to the remainder untouched.

After the scan, a flag with no collected values is resolved: required flags
raise InvalidUsageError, flags with defaults yield their defaults, the rest
yield an empty tuple (absent).
"""
from .faults import InvalidUsageError, InvalidValueError
from .specs import FlagType


def _heads(spec, /):
    heads = []
    if spec.short_name:
        heads.append("-" + spec.short_name)
    if spec.long_name:
        heads.append("--" + spec.long_name)
    return tuple(heads)


def match(spec, tokens, /):
    """
    extract all values of one flag from tokens.

    parameters
    - spec: FlagSpec
    - tokens: Sequence[str], left untouched.

    returns
    - tuple[tuple[str, ...], tuple[str, ...]]: (values, remainder), both in
      encounter order. values is empty when the flag is absent.

    errors
    - InvalidValueError: a value fails validation, or a value-bearing flag
      has no usable value after its head token.
    - InvalidUsageError: the flag is required and never matched.
    """
    tokens = tuple(tokens)
    heads = _heads(spec)
    prefixes = tuple(head + "=" for head in heads)

    values = []
    remainder = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1

        if token in heads:
            if spec.type is FlagType.BOOLEAN:
                if index < len(tokens) and tokens[index] in ("true", "false"):
                    values.append(tokens[index])
                    index += 1
                else:
                    values.append("true")
            elif index < len(tokens) and not tokens[index].startswith("-"):
                spec.validate(tokens[index])
                values.append(tokens[index])
                index += 1
            else:
                raise InvalidValueError(
                    "no value provided for flag %s" % token,
                    flag=spec.name,
                    token=token,
                    hint="pass a value after a space (e.g., %s <value>) or inline (e.g., %s=<value>)" % (token, token)
                )
        elif token.startswith(prefixes):
            value = token.partition("=")[2]
            spec.validate(value)
            values.append(value)
        else:
            remainder.append(token)

    if not values:
        if spec.required:
            raise InvalidUsageError("required flag missing: %s" % spec.name, flag=spec.name)
        values = spec.default_values

    return tuple(values), tuple(remainder)


__all__ = ("match",)
