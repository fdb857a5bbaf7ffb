"""
Flagrelay schema builder: turn declaration tokens into a populated Registry.

The builder is self-hosted: its own settings and per-flag declaration flags are
declared with a Registry and parsed by the same engine it feeds.

Sections (split by the caller, see split())
- settings: registry-wide flags
    -u/--usage                      string, default ""
    --unrecognized-flags            allow | error, default error
    --default-values-for-optional   boolean, default false
- declarations: one token group per flag, groups separated by FLAG_DELIMITER
    -s/--short, -l/--long           string, default ""
    -t/--type                       string | number | bool | boolean (required)
    -d/--description                string, default ""
    -r/--required                   boolean, default false
    --default                       string, repeatable
    -a/--allowed                    string, repeatable
    --regex                         string, default ""

Example
    settings, declarations, arguments = split(argv, SECTION_DELIMITER)
    registry = declare(settings, split(declarations, FLAG_DELIMITER))
    registry.parse(arguments)
"""
from .faults import InvalidUsageError, NotFoundError
from .registry import Registry, RegistryOptions
from .specs import FlagOptions, FlagType

SECTION_DELIMITER = "----"
FLAG_DELIMITER = "--"


def split(tokens, delimiter, /):
    """
    split tokens into groups at every delimiter token (delimiters are dropped).

    always returns at least one group; consecutive delimiters yield empty groups.
    """
    groups = [[]]
    for token in tokens:
        if token == delimiter:
            groups.append([])
        else:
            groups[-1].append(token)
    return groups


def _settings():
    registry = Registry()
    registry.add("u", "usage", FlagType.STRING, FlagOptions(
        default_values=("",),
        description="usage text for an external help renderer",
    ))
    registry.add("", "unrecognized-flags", FlagType.STRING, FlagOptions(
        default_values=("error",),
        allowed_values=("allow", "error"),
        description="unrecognized flags: 'allow' keeps them as non-flag arguments, 'error' rejects them",
    ))
    registry.add("", "default-values-for-optional", FlagType.BOOLEAN, FlagOptions(
        default_values=("false",),
        description="optional flags must declare default value(s)",
    ))
    return registry


def _declarations():
    registry = Registry()
    registry.add("s", "short", FlagType.STRING, FlagOptions(default_values=("",), description="short name for the flag"))
    registry.add("l", "long", FlagType.STRING, FlagOptions(default_values=("",), description="long name for the flag"))
    registry.add("t", "type", FlagType.STRING, FlagOptions(
        required=True,
        allowed_values=("string", "number", "bool", "boolean"),
        description="type of the flag",
    ))
    registry.add("d", "description", FlagType.STRING, FlagOptions(default_values=("",), description="description of the flag"))
    registry.add("r", "required", FlagType.BOOLEAN, FlagOptions(default_values=("false",), description="the flag is required"))
    registry.add("", "default", FlagType.STRING, FlagOptions(description="default value (repeatable)"))
    registry.add("a", "allowed", FlagType.STRING, FlagOptions(description="allowed value (repeatable)"))
    registry.add("", "regex", FlagType.STRING, FlagOptions(default_values=("",), description="pattern for string values"))
    return registry


def _optional(registry, name, /):
    try:
        return registry.get(name)
    except NotFoundError:
        return ()


def declare(settings, declarations, /):
    """
    build the external Registry described by the settings and declaration groups.

    parameters
    - settings: Sequence[str], the registry-wide flag tokens.
    - declarations: Sequence[Sequence[str]], one token group per declared flag.

    returns
    - Registry with every declared flag added, ready to parse.

    errors
    - InvalidUsageError when no declaration tokens are given.
    - any fault raised while parsing a group or constructing a FlagSpec.
    """
    if not any(declarations):
        raise InvalidUsageError("no flags provided", hint="separate each flag declaration with '%s'" % FLAG_DELIMITER)

    internal = _settings()
    internal.parse(settings)
    mandatory = internal.get("default-values-for-optional")[0] == "true"

    registry = Registry(RegistryOptions(
        allow_unrecognized=internal.get("unrecognized-flags")[0] == "allow",
        usage=internal.get("usage")[0],
    ))

    builder = _declarations()
    for group in declarations:
        builder.parse(group)
        registry.add(builder.get("short")[0], builder.get("long")[0], FlagType.parse(builder.get("type")[0]), FlagOptions(
            default_values=_optional(builder, "default"),
            required=builder.get("required")[0] == "true",
            allowed_values=_optional(builder, "allowed"),
            pattern=builder.get("regex")[0],
            description=builder.get("description")[0],
            defaults_mandatory=mandatory,
        ))
    return registry


__all__ = (
    "SECTION_DELIMITER",
    "FLAG_DELIMITER",
    "split",
    "declare",
)
