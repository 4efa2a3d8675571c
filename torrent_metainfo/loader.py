"""Loading torrents, with recovery as a fallback for malformed input."""

import logging
from pathlib import Path
from typing import BinaryIO

from torrent_metainfo.bencode import BencodeError
from torrent_metainfo.metainfo import MetaInfo
from torrent_metainfo.recovery import recover

logger = logging.getLogger(__name__)


def load_bytes(data: bytes) -> MetaInfo:
    """Load a MetaInfo from bencoded bytes.

    Well-formed input is returned from the strict decoder as is. Otherwise
    recovery is attempted and its output must itself pass the strict
    decoder. If recovery has nothing to offer, the strict decoder's error is
    raised.
    """
    try:
        return MetaInfo.from_bytes(data)
    except BencodeError as e:
        recovered = recover(data)
        if recovered is None:
            raise
        logger.debug("Strict decode failed (%s); using recovered torrent", e)
        return MetaInfo.from_bytes(recovered)


def load(stream: BinaryIO) -> MetaInfo:
    """Read a stream to the end and load it."""
    return load_bytes(stream.read())


def load_from_file(path: str | Path) -> MetaInfo:
    with Path(path).open("rb") as f:
        return load(f)
