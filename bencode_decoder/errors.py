class DecodeError(ValueError):
    """Raised when a buffer is not valid bencode.

    `offset` is the position in the input where decoding failed.
    """

    def __init__(self, message: str, offset: int):
        super().__init__(f"{message} at offset {offset}")
        self.message = message
        self.offset = offset

    @property
    def kind(self) -> str:
        return type(self).__name__


class InvalidTag(DecodeError):
    pass


class UnexpectedEndOfInput(DecodeError):
    pass


class MalformedString(DecodeError):
    pass


class InvalidLength(DecodeError):
    pass


class InvalidInteger(DecodeError):
    pass


class IntegerOverflow(DecodeError):
    pass


class NonStringKey(DecodeError):
    pass


class TrailingData(DecodeError):
    pass


class NestingTooDeep(DecodeError):
    pass


# Strict mode only
class DuplicateKey(DecodeError):
    pass


class UnsortedKeys(DecodeError):
    pass
