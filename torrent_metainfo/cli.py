"""Command line interface for inspecting and repairing .torrent files."""

import argparse
import logging
from pathlib import Path

from torrent_metainfo.bencode import BencodeError
from torrent_metainfo.loader import load_from_file

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="torrent-metainfo", description="Inspect a .torrent file, recovering it if it is malformed.")
    p.add_argument("torrent", type=Path, help="Path to the .torrent file")
    p.add_argument("--hash", action="store_true", help="Print only the info hash")
    p.add_argument("--magnet", action="store_true", help="Print a magnet link")
    p.add_argument("--files", action="store_true", help="List the files in the torrent")
    p.add_argument("--rewrite", type=Path, metavar="OUT", help="Write the canonical (recovered) torrent to OUT")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        mi = load_from_file(args.torrent)
        info = mi.unmarshal_info()
    except (OSError, BencodeError) as e:
        logger.error("Failed to load %s: %s", args.torrent, e)
        return 1

    info_hash = mi.hash_info_bytes()
    if args.hash:
        print(info_hash)
    elif args.magnet:
        print(mi.magnet(info_hash=info_hash, info=info))
    else:
        print(f"name: {info.name}")
        print(f"info hash: {info_hash}")
        print(f"size: {info.total_length}")
        print(f"pieces: {info.num_pieces} x {info.piece_length}")
        if info.private is not None:
            print(f"private: {info.private}")
        for tracker in mi.upverted_announce_list():
            print(f"tracker tier: {', '.join(tracker)}")

    if args.files:
        for f in info.upverted_files():
            print(f"{f.length}\t{f.display_path}")

    if args.rewrite:
        with args.rewrite.open("wb") as out:
            mi.write(out)
        logger.info("Wrote %s", args.rewrite)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
