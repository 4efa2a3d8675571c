"""Torrent metainfo descriptor."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, BinaryIO

from torrent_metainfo.announce import AnnounceList, distinct_values, upvert
from torrent_metainfo.bencode import (
    BYTES_TYPES,
    BencodeError,
    FieldTypeError,
    MissingFieldError,
    decode,
    encode,
    get_dict,
    get_list,
    get_str,
    raw,
    str_list,
    text,
)
from torrent_metainfo.hashing import Hash, hash_bytes
from torrent_metainfo.info import Info
from torrent_metainfo.magnet import Magnet

logger = logging.getLogger(__name__)

CREATED_BY = "torrent-metainfo"


def _node(value: Any) -> str:
    """Parse a DHT bootstrap node given as "host:port" or [host, port]."""
    if isinstance(value, BYTES_TYPES):
        return text(value)
    if isinstance(value, list) and len(value) == 2 and isinstance(value[0], BYTES_TYPES) and isinstance(value[1], int):
        host = text(value[0])
        if ":" in host:
            host = f"[{host}]"
        return f"{host}:{value[1]}"
    raise FieldTypeError(b"nodes", value, "'host:port' string or [host, port] pair")


def _url_list(root: dict) -> list[str]:
    # BEP19 allows a single URL string as well as a list
    v = root.get(b"url-list")
    if v is None:
        return []
    if isinstance(v, BYTES_TYPES):
        return [text(v)] if v else []
    if isinstance(v, list):
        return str_list(b"url-list", v)
    raise FieldTypeError(b"url-list", v, "byte string or list")


@dataclass
class MetaInfo:
    info_bytes: bytes = b""
    announce: str = ""
    announce_list: AnnounceList = field(default_factory=list)
    nodes: list[str] = field(default_factory=list)
    creation_date: int = 0
    comment: str = ""
    created_by: str = ""
    encoding: str = ""
    url_list: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, root: Any) -> "MetaInfo":
        """Strictly build a MetaInfo from a decoded torrent dictionary.

        ``creation date`` is the only key whose type mismatch is tolerated.
        The info dictionary is validated and re-encoded in its source key order,
        unknown keys included, so info_bytes equals the raw info span.
        """
        if not isinstance(root, dict):
            raise BencodeError("Torrent root must be a dict")

        info = get_dict(root, b"info")
        if info is None:
            raise MissingFieldError("Missing 'info' dict")
        Info.from_dict(info)

        announce_list: AnnounceList = []
        for tier in get_list(root, b"announce-list") or []:
            if not isinstance(tier, list):
                raise FieldTypeError(b"announce-list", tier, "list of tiers")
            announce_list.append(str_list(b"announce-list", tier))

        creation_date = root.get(b"creation date", 0)
        if not isinstance(creation_date, int):
            logger.debug("Ignoring non-integer 'creation date' of type %s", type(creation_date).__name__)
            creation_date = 0

        return cls(
            info_bytes=encode(info),
            announce=get_str(root, b"announce") or "",
            announce_list=announce_list,
            nodes=[_node(n) for n in get_list(root, b"nodes") or []],
            creation_date=creation_date,
            comment=get_str(root, b"comment") or "",
            created_by=get_str(root, b"created by") or "",
            encoding=get_str(root, b"encoding") or "",
            url_list=_url_list(root),
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "MetaInfo":
        """Strict decode; no recovery is attempted."""
        return cls.from_dict(decode(data))

    def to_dict(self) -> dict[bytes, Any]:
        """Return the bencodable form; empty fields are omitted."""
        d: dict[bytes, Any] = {}
        if self.info_bytes:
            # decoding keeps source key order, so encoding reproduces info_bytes exactly
            d[b"info"] = decode(self.info_bytes)
        if self.announce:
            d[b"announce"] = raw(self.announce)
        if self.announce_list:
            d[b"announce-list"] = [[raw(url) for url in tier] for tier in self.announce_list]
        if self.nodes:
            d[b"nodes"] = [raw(n) for n in self.nodes]
        if self.creation_date:
            d[b"creation date"] = self.creation_date
        if self.comment:
            d[b"comment"] = raw(self.comment)
        if self.created_by:
            d[b"created by"] = raw(self.created_by)
        if self.encoding:
            d[b"encoding"] = raw(self.encoding)
        if self.url_list:
            d[b"url-list"] = [raw(u) for u in self.url_list]
        return dict(sorted(d.items()))

    def to_bytes(self) -> bytes:
        return encode(self.to_dict())

    def write(self, stream: BinaryIO) -> None:
        """Write the bencoded descriptor to a binary stream."""
        stream.write(self.to_bytes())

    def unmarshal_info(self) -> Info:
        if not self.info_bytes:
            raise BencodeError("Empty info bytes")
        info = decode(self.info_bytes)
        if not isinstance(info, dict):
            raise BencodeError("Info bytes do not hold a dict")
        return Info.from_dict(info)

    def hash_info_bytes(self) -> Hash:
        return hash_bytes(self.info_bytes)

    def set_defaults(self) -> None:
        """Stamp authoring defaults before writing out a new torrent."""
        self.comment = ""
        self.created_by = CREATED_BY
        self.creation_date = int(time.time())

    def upverted_announce_list(self) -> AnnounceList:
        """Return the announce list, built from the single announce URL if necessary."""
        return upvert(self.announce_list, self.announce)

    def magnet(self, info_hash: Hash | None = None, info: Info | None = None) -> Magnet:
        """Build a Magnet; a precomputed hash and parsed info may be supplied."""
        return Magnet(
            info_hash=info_hash if info_hash is not None else self.hash_info_bytes(),
            display_name=info.name if info is not None else "",
            trackers=distinct_values(self.upverted_announce_list()),
            params={"ws": list(self.url_list)},
        )
