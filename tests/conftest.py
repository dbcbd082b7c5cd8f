import logging
from pathlib import Path

import pytest

logging.basicConfig(format="%(levelname)s:%(name)s:%(message)s", level=logging.DEBUG)
logger = logging.getLogger()

TRACKER_URL = "http://localhost:8080/announce"

# A single file torrent, keys in canonical order.
SAMPLE_TORRENT = (
    b"d8:announce40:http://tracker.example.com:8080/announce"
    b"4:infod6:lengthi1024e4:name8:test.txt12:piece lengthi16384e"
    b"6:pieces60:" + b"12345678901234567890" * 3 + b"ee"
)


@pytest.fixture
def sample_torrent() -> bytes:
    return SAMPLE_TORRENT


@pytest.fixture
def torrent_file(tmp_path, sample_torrent) -> str:
    """Write the sample torrent to disk"""
    path = tmp_path / "sample.torrent"
    path.write_bytes(sample_torrent)
    return str(path)


@pytest.fixture
def create_payload(tmp_path):
    """Create test payload files in the temp workspace"""

    def _create_payload(size: int = 1024 * 1024) -> str:
        payload_file = tmp_path / "payload.dat"
        payload_file.write_bytes(b"A" * size)
        return str(payload_file)

    return _create_payload


@pytest.fixture
def create_torrent_file(tmp_path):
    """Create real torrent files with libtorrent"""
    lt = pytest.importorskip("libtorrent")

    def _create_torrent_file(payload_file: str, tracker: str = TRACKER_URL) -> str:
        payload_path = Path(payload_file)

        fs = lt.file_storage()
        lt.add_files(fs, str(payload_path))

        t = lt.create_torrent(fs)
        t.add_tracker(tracker)
        t.set_creator("test-setup")

        lt.set_piece_hashes(t, str(payload_path.parent))
        torrent_data = lt.bencode(t.generate())

        torrent_path = payload_path.with_suffix(".torrent")
        torrent_path.write_bytes(torrent_data)

        logger.debug(f"Torrent file: {str(torrent_path)}")

        info = lt.torrent_info(str(torrent_path))
        logger.debug(f"  Name: {info.name()}")
        logger.debug(f"  Total size: {info.total_size()} bytes")
        logger.debug(f"  Piece length: {info.piece_length()} bytes")
        logger.debug(f"  Num pieces: {info.num_pieces()}")

        return str(torrent_path)

    return _create_torrent_file
