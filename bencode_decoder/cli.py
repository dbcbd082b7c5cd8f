import argparse
import logging
import os
import sys

from .decoder import DEFAULT_OPTIONS, DecodeOptions, decode
from .errors import DecodeError
from .render import to_json
from .torrent_info import TorrentInfo

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bencode-decoder", description="Decode bencoded values and torrent files."
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="reject input that is not in canonical bencode form",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_OPTIONS.max_depth,
        help="maximum nesting of lists and dictionaries (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    commands = parser.add_subparsers(dest="command", required=True)

    decode_cmd = commands.add_parser("decode", help="decode a bencoded value")
    decode_cmd.add_argument("encoded_value")

    info_cmd = commands.add_parser("info", help="show tracker URL and length")
    info_cmd.add_argument("torrent_file")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(levelname)s:%(name)s:%(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        options = DecodeOptions(strict=args.strict, max_depth=args.max_depth)
    except ValueError as e:
        parser.error(str(e))

    logger.debug(f"{args.command=}, {options=}")

    try:
        match args.command:
            case "decode":
                value = decode(os.fsencode(args.encoded_value), options)
                print(to_json(value))

            case "info":
                torrent = TorrentInfo.from_file(args.torrent_file, options)
                print(torrent)

    except DecodeError as e:
        logger.debug(f"Decoding failed: {e.kind} at offset {e.offset}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    except KeyError as e:
        print(f"error: torrent file has no {e} field", file=sys.stderr)
        return 1

    except (OSError, TypeError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
