import logging

from .decoder import DecodeOptions, decode
from .value import ByteString, Integer, Mapping, Value

PIECE_HASH_SIZE = 20

logger = logging.getLogger(__name__)


class TorrentInfo:
    def __init__(self, metainfo: Value):
        if not isinstance(metainfo, Mapping):
            raise ValueError(
                f"Torrent metainfo must be a mapping, got {type(metainfo).__name__}"
            )
        self.metainfo = metainfo

    def __str__(self):
        str = f"Tracker URL: {self.url}\n"
        str += f"Length: {self.length}"
        return str

    @property
    def info(self) -> Mapping:
        return _expect(self.metainfo, b"info", Mapping)

    @property
    def url(self) -> str:
        return _expect(self.metainfo, b"announce", ByteString).text()

    @property
    def length(self) -> int:
        return _expect(self.info, b"length", Integer).value

    @property
    def name(self) -> str:
        return _expect(self.info, b"name", ByteString).text()

    @property
    def pieces(self) -> list[bytes]:
        all = _expect(self.info, b"pieces", ByteString).value
        pieces = [
            all[i : i + PIECE_HASH_SIZE] for i in range(0, len(all), PIECE_HASH_SIZE)
        ]
        return pieces

    @property
    def piece_length(self) -> int:
        return _expect(self.info, b"piece length", Integer).value

    @classmethod
    def from_bytes(
        cls, data: bytes, options: DecodeOptions | None = None
    ) -> "TorrentInfo":
        return TorrentInfo(decode(data, options))

    @classmethod
    def from_file(
        cls, file: str, options: DecodeOptions | None = None
    ) -> "TorrentInfo":
        with open(file, mode="rb") as f:
            data = f.read()
        logger.debug(f"Read {len(data)} bytes from {file}")
        return cls.from_bytes(data, options)


def _expect(mapping: Mapping, key: bytes, kind: type):
    value = mapping[key]
    if not isinstance(value, kind):
        raise TypeError(
            f"Expected {key!r} to be a {kind.__name__}, got {type(value).__name__}"
        )
    return value
