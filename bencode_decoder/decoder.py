import re
import sys
from dataclasses import dataclass

from .cursor import Cursor
from .errors import (
    DuplicateKey,
    IntegerOverflow,
    InvalidInteger,
    InvalidLength,
    InvalidTag,
    MalformedString,
    NestingTooDeep,
    NonStringKey,
    TrailingData,
    UnexpectedEndOfInput,
    UnsortedKeys,
)
from .value import ByteString, Integer, List, Mapping, Value

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

DIGITS = b"0123456789"

INTEGER = re.compile(rb"-?[0-9]+")
# No leading zeros, no negative zero
CANONICAL_INTEGER = re.compile(rb"0|-?[1-9][0-9]*")

RECURSION_HEADROOM = 100


@dataclass(frozen=True)
class DecodeOptions:
    """Decoder settings.

    strict: reject input that is not in canonical form, i.e. integers or
        string lengths with leading zeros, `i-0e`, and mappings whose keys
        are duplicated or not sorted. The default accepts all of these and
        keeps the last value of a repeated key.
    max_depth: how many lists/mappings may be nested inside each other.
    """

    strict: bool = False
    max_depth: int = 256

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")

        # Two frames per nesting level, plus headroom for the caller's stack
        limit = (sys.getrecursionlimit() - RECURSION_HEADROOM) // 2
        if self.max_depth > limit:
            raise ValueError(
                f"max_depth {self.max_depth} exceeds the recursion limit (at most {limit})"
            )

    @classmethod
    def strict_mode(cls, max_depth: int = 256) -> "DecodeOptions":
        return cls(strict=True, max_depth=max_depth)


DEFAULT_OPTIONS = DecodeOptions()


class Decoder:
    def __init__(self, source: bytes, options: DecodeOptions | None = None):
        if not isinstance(source, (bytes, bytearray, memoryview)):
            raise TypeError(f"Expected a bytes-like buffer, got {type(source).__name__}")

        self.cursor = Cursor(bytes(source))
        self.options = options or DEFAULT_OPTIONS

    def decode(self) -> Value:
        value = self.decode_one(0)

        if not self.cursor.is_at_end():
            raise TrailingData(
                f"{self.cursor.remaining} unexpected bytes after value",
                self.cursor.current,
            )

        return value

    def decode_one(self, depth: int) -> Value:
        c = self.cursor.peek()
        match c:
            case _ if c.isdigit():
                return self.read_string()

            case b"i":
                return self.read_integer()

            case b"l":
                return self.read_list(depth + 1)

            case b"d":
                return self.read_dict(depth + 1)

            case _:
                raise InvalidTag(f"Unknown type tag {c!r}", self.cursor.current)

    def read_string(self) -> ByteString:
        length = self.read_length()
        return ByteString(self.cursor.read(length))

    def read_length(self) -> int:
        start = self.cursor.current

        source = self.cursor.source
        end = start
        while end < len(source) and source[end] in DIGITS:
            end += 1
        digits = self.cursor.read(end - start)

        if not digits:
            raise InvalidTag(
                f"Expected string length, got {self.cursor.peek()!r}", start
            )

        if self.cursor.peek() != b":":
            raise MalformedString(
                f"Expected b':' after string length, got {self.cursor.peek()!r}",
                self.cursor.current,
            )
        self.cursor.advance()

        if self.options.strict and len(digits) > 1 and digits.startswith(b"0"):
            raise InvalidLength(f"String length {digits!r} has a leading zero", start)

        significant = digits.lstrip(b"0") or b"0"
        if len(significant) > len(str(sys.maxsize)):
            raise InvalidLength(f"String length {digits!r} is too large", start)

        length = int(significant)
        if length > sys.maxsize:
            raise InvalidLength(f"String length {digits!r} is too large", start)

        return length

    def read_integer(self) -> Integer:
        start = self.cursor.current
        self.cursor.expect(b"i")

        end = self.cursor.find(b"e")
        if end == -1:
            raise UnexpectedEndOfInput("Unterminated integer", start)
        literal = self.cursor.read(end - self.cursor.current)

        pattern = CANONICAL_INTEGER if self.options.strict else INTEGER
        if not pattern.fullmatch(literal):
            raise InvalidInteger(f"Invalid integer {literal!r}", start)

        negative = literal.startswith(b"-")
        significant = literal.lstrip(b"-").lstrip(b"0") or b"0"

        # Bounded before int() so huge digit runs are never converted
        if len(significant) > len(str(INT64_MAX)):
            raise IntegerOverflow(f"Integer {literal!r} out of 64-bit range", start)

        n = -int(significant) if negative else int(significant)
        if not INT64_MIN <= n <= INT64_MAX:
            raise IntegerOverflow(f"Integer {literal!r} out of 64-bit range", start)

        self.cursor.expect(b"e")

        return Integer(n)

    def read_list(self, depth: int) -> List:
        self.check_depth(depth)
        self.cursor.expect(b"l")

        lst = []
        while self.cursor.peek() != b"e":
            lst.append(self.decode_one(depth))

        self.cursor.expect(b"e")

        return List(lst)

    def read_dict(self, depth: int) -> Mapping:
        self.check_depth(depth)
        self.cursor.expect(b"d")

        entries = {}
        previous = None

        while self.cursor.peek() != b"e":
            key_offset = self.cursor.current

            match self.decode_one(depth):
                case ByteString(value=key):
                    pass
                case other:
                    raise NonStringKey(
                        f"Mapping key must be a byte string, got {type(other).__name__}",
                        key_offset,
                    )

            if self.options.strict and previous is not None:
                if key == previous:
                    raise DuplicateKey(f"Duplicate key {key!r}", key_offset)
                if key < previous:
                    raise UnsortedKeys(
                        f"Key {key!r} sorts before {previous!r}", key_offset
                    )

            entries[key] = self.decode_one(depth)
            previous = key

        self.cursor.expect(b"e")

        return Mapping(entries)

    def check_depth(self, depth: int):
        if depth > self.options.max_depth:
            raise NestingTooDeep(
                f"Nesting deeper than {self.options.max_depth} levels",
                self.cursor.current,
            )


def decode(data: bytes | bytearray | memoryview, options: DecodeOptions | None = None) -> Value:
    """Decode a complete bencoded buffer.

    The whole buffer must hold exactly one value, otherwise `TrailingData`
    is raised. All failures are `DecodeError` subclasses.
    """
    return Decoder(data, options).decode()
