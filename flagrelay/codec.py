"""
Flagrelay codecs: ParseResult ↔ bytes ↔ text token.

Two independent codecs, each round-trip exact:
- serialize / deserialize: ParseResult ↔ UTF-8 JSON object with three fields
    {"flagValuesForID": {"<id>": [str, ...]}, "flagsNameToID": {name: id}, "nonFlagArgs": [str, ...]}
  ids are decimal string keys; non-ASCII text is escaped (lone surrogates from
  undecodable argv bytes included), keys are sorted and separators compact so equal
  results serialize to identical bytes.
- encode / decode: bytes ↔ standard base64 (with padding), safe to pass as a
  single shell argument. Line breaks inside a token are ignored on decode.

Failure kinds
- deserialize(b"")       → EmptyPayloadError
- deserialize(malformed) → InvalidUsageError
- decode(malformed)      → InternalError
"""
import base64
import binascii
import json
import re

from .faults import EmptyPayloadError, InternalError, InvalidUsageError
from .results import ParseResult

VALUES_FIELD = "flagValuesForID"
NAMES_FIELD = "flagsNameToID"
ARGUMENTS_FIELD = "nonFlagArgs"

_LINE_BREAKS = str.maketrans("", "", "\r\n")


def serialize(result, /):
    """
    ParseResult → bytes.
    """
    if not isinstance(result, ParseResult):
        raise TypeError("serialize() argument must be a parse result")
    document = {
        VALUES_FIELD: {str(id): list(values) for id, values in result.values_by_id.items()},
        NAMES_FIELD: dict(result.name_to_id),
        ARGUMENTS_FIELD: list(result.nonflag_args),
    }
    return json.dumps(document, separators=(",", ":"), sort_keys=True).encode("ascii")


def _malformed(reason, /):
    return InvalidUsageError("malformed parsed data: %s" % reason)


def _strings(values, field, /):
    if values is None:
        return ()
    if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
        raise _malformed("%r must hold arrays of strings" % field)
    return tuple(values)


def _mapping(document, field, /):
    if (mapping := document.get(field)) is None:
        return {}
    if not isinstance(mapping, dict):
        raise _malformed("%r must be an object" % field)
    return mapping


def deserialize(payload, /):
    """
    bytes → ParseResult.

    missing or null fields read as empty; every other shape mismatch is an
    InvalidUsageError.
    """
    if not isinstance(payload, bytes | bytearray | memoryview):
        raise TypeError("deserialize() argument must be bytes")
    if not payload:
        raise EmptyPayloadError("parsed data can not be empty")

    try:
        document = json.loads(bytes(payload).decode("utf-8"))
    except (ValueError, RecursionError) as error:
        raise _malformed(str(error)) from None

    if not isinstance(document, dict):
        raise _malformed("expected an object")

    values_by_id = {}
    for key, values in _mapping(document, VALUES_FIELD).items():
        if not re.fullmatch(r"-?[0-9]+", key):
            raise _malformed("%r keys must be integers, got %r" % (VALUES_FIELD, key))
        try:
            id = int(key)
        except ValueError as error:
            raise _malformed("%r key out of range: %s" % (VALUES_FIELD, error)) from None
        values_by_id[id] = _strings(values, VALUES_FIELD)

    name_to_id = {}
    for name, id in _mapping(document, NAMES_FIELD).items():
        if not isinstance(id, int) or isinstance(id, bool):
            raise _malformed("%r values must be integers, got %r" % (NAMES_FIELD, id))
        name_to_id[name] = id

    return ParseResult(values_by_id, name_to_id, _strings(document.get(ARGUMENTS_FIELD), ARGUMENTS_FIELD))


def encode(payload, /):
    """
    bytes → text token.
    """
    if not isinstance(payload, bytes | bytearray | memoryview):
        raise TypeError("encode() argument must be bytes")
    return base64.b64encode(payload).decode("ascii")


def decode(token, /):
    """
    text token → bytes; InternalError when the token is not valid base64.

    carriage returns and newlines are skipped, so a token captured with a
    trailing newline still decodes.
    """
    if not isinstance(token, str):
        raise TypeError("decode() argument must be a string")
    try:
        return base64.b64decode(token.translate(_LINE_BREAKS).encode("ascii"), validate=True)
    except (UnicodeEncodeError, binascii.Error) as error:
        raise InternalError("malformed token: %s" % error, token=token) from None


__all__ = (
    "serialize",
    "deserialize",
    "encode",
    "decode",
)
