from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ByteString:
    value: bytes

    def text(self, encoding: str = "utf-8") -> str:
        return self.value.decode(encoding)

    def __len__(self) -> int:
        return len(self.value)


@dataclass
class Integer:
    value: int

    def __int__(self) -> int:
        return self.value


@dataclass
class List:
    items: list["Value"] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)


@dataclass
class Mapping:
    """Byte-string keyed entries, kept in the order they were read.

    Lookups accept either bytes or str keys; str keys are UTF-8 encoded.
    """

    entries: dict[bytes, "Value"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, key: bytes | str) -> "Value":
        return self.entries[_as_key(key)]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (bytes, str)):
            return False
        return _as_key(key) in self.entries

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.entries)

    def get(self, key: bytes | str, default: "Value | None" = None) -> "Value | None":
        return self.entries.get(_as_key(key), default)

    def keys(self):
        return self.entries.keys()

    def values(self):
        return self.entries.values()

    def items(self):
        return self.entries.items()


Value = ByteString | Integer | List | Mapping


def _as_key(key: bytes | str) -> bytes:
    if isinstance(key, str):
        return key.encode()
    return key
