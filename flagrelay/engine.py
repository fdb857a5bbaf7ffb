"""
Flagrelay parse engine: run the matcher once per flag, in declaration order.

The token sequence shrinks as it flows through the flags: each pass removes
exactly the tokens that belong to one flag and keeps the relative order of
everything else. Overlapping token shapes are therefore resolved by declaration
order, never by input order; flags must not be reordered or matched in parallel.

Once every flag has been matched, leftovers that look like flags (start with
'-' and are not made only of dashes, so '-' and '--' survive) fail the parse
with InvalidUsageError, unless unrecognized flags are allowed. Whatever remains
becomes the non-flag arguments.
"""
from .faults import InvalidUsageError
from .matching import match
from .results import ParseResult


def _is_unrecognized(token, /):
    return token.startswith("-") and bool(token.strip("-"))


def parse(specs, tokens, /, allow_unrecognized=False):
    """
    parse tokens against an ordered sequence of FlagSpec.

    parameters
    - specs: Sequence[FlagSpec], in declaration order (index = flag id).
    - tokens: Sequence[str], the whole argument vector.
    - allow_unrecognized: keep flag-shaped leftovers as non-flag arguments.

    returns
    - ParseResult

    errors
    - whatever match() raises for any flag (first error wins).
    - InvalidUsageError for the first unrecognized flag-shaped leftover.
    """
    values_by_id = {}
    name_to_id = {}
    remainder = tuple(tokens)

    for id, spec in enumerate(specs):
        values, remainder = match(spec, remainder)
        if values:
            values_by_id[id] = values
            for name in spec.names:
                name_to_id[name] = id

    if not allow_unrecognized:
        for token in remainder:
            if _is_unrecognized(token):
                raise InvalidUsageError(
                    "unrecognized flag: %s" % token,
                    token=token,
                    hint="declare the flag, or allow unrecognized flags to keep it as a non-flag argument"
                )

    return ParseResult(values_by_id, name_to_id, remainder)


__all__ = ("parse",)
