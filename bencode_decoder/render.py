import json

from .value import ByteString, Integer, List, Mapping, Value


def to_python(value: Value) -> bytes | int | list | dict:
    """Unwrap a value tree into plain bytes, int, list and dict objects."""
    match value:
        case ByteString(value=b):
            return b

        case Integer(value=n):
            return n

        case List(items=items):
            return [to_python(v) for v in items]

        case Mapping(entries=entries):
            return {k: to_python(v) for k, v in entries.items()}

        case _:
            raise NotImplementedError


def to_json(value: Value) -> str:
    """Render a value tree as JSON.

    Byte strings become text. Bytes that are not valid UTF-8 are written
    as `\\xNN` escapes and literal backslashes are doubled, so distinct
    byte strings always render as distinct text.
    """
    return json.dumps(_jsonable(value))


def _jsonable(value: Value):
    match value:
        case ByteString(value=b):
            return _text(b)

        case Integer(value=n):
            return n

        case List(items=items):
            return [_jsonable(v) for v in items]

        case Mapping(entries=entries):
            return {_text(k): _jsonable(v) for k, v in entries.items()}

        case _:
            raise NotImplementedError


def _text(b: bytes) -> str:
    return b.replace(b"\\", b"\\\\").decode("utf-8", errors="backslashreplace")
