from .errors import InvalidTag, UnexpectedEndOfInput


class Cursor:
    """Read position over an immutable buffer.

    Every read is bounds checked, so `current` never moves past the end of
    `source`.
    """

    def __init__(self, source: bytes):
        self.source = source
        self.current = 0

    @property
    def remaining(self) -> int:
        return len(self.source) - self.current

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def peek(self) -> bytes:
        if self.is_at_end():
            raise UnexpectedEndOfInput("Unexpected end of input", self.current)
        return self.source[self.current : self.current + 1]

    def advance(self) -> bytes:
        c = self.peek()
        self.current += 1
        return c

    def expect(self, char: bytes) -> bytes:
        c = self.peek()
        if c != char:
            raise InvalidTag(f"Expected {char!r}, got {c!r} instead", self.current)

        return self.advance()

    def read(self, n: int) -> bytes:
        if n > self.remaining:
            raise UnexpectedEndOfInput(
                f"Need {n} bytes, only {self.remaining} left", self.current
            )

        chunk = self.source[self.current : self.current + n]
        self.current += n
        return chunk

    def find(self, char: bytes) -> int:
        """Offset of the next `char` at or after the cursor, or -1."""
        return self.source.find(char, self.current)
