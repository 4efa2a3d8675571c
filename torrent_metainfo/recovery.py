"""Best-effort reconstruction of torrents that fail strict decoding.

Recovery works on the dynamic value tree (``int``, ``bytes``, ``list`` and
``dict``) of the input and rebuilds a descriptor from the keys it knows.
Each extractor returns the field value, ``None`` when the key is absent, or
raises :class:`~torrent_metainfo.bencode.BencodeError` when the key holds
the wrong shape. The extractors are folded in :func:`rebuild`, which either
returns a complete :class:`MetaInfo` or nothing at all.

Tolerated deviations:

- ``announce-list`` given as a flat list of URLs (one tier per URL);
- a non-integer ``creation date`` (dropped);
- a ``files`` value that is not a list, and ``files`` entries that are not
  dictionaries or lack a usable ``path`` (dropped).

Everything else that is present must have the expected type, and
``info.pieces`` must be present, or the whole document is rejected.
Keys outside the known set (the fields above plus the BEP47 file
attributes) are not carried over, so the rebuilt info dictionary only
reproduces the original info hash when the original held no other keys
and was written with sorted keys.
"""

import logging
from typing import Any

from torrent_metainfo.announce import AnnounceList
from torrent_metainfo.bencode import (
    BYTES_TYPES,
    BencodeError,
    FieldTypeError,
    MissingFieldError,
    decode_tree,
    encode,
    get_bytes,
    get_dict,
    get_int,
    get_list,
    get_str,
    str_list,
    text,
)
from torrent_metainfo.info import FileEntry, Info, bep47_fields
from torrent_metainfo.metainfo import MetaInfo

logger = logging.getLogger(__name__)


def _announce_list(tree: dict) -> AnnounceList:
    entries = get_list(tree, b"announce-list")
    if entries is None:
        return []
    tiers: AnnounceList = []
    for entry in entries:
        if not isinstance(entry, BYTES_TYPES):
            raise FieldTypeError(b"announce-list", entry, "byte string entry")
        tiers.append([text(entry)])
    return tiers


def _creation_date(tree: dict) -> int:
    v = tree.get(b"creation date")
    if isinstance(v, int):
        return v
    if v is not None:
        logger.debug("Dropping non-integer 'creation date' of type %s", type(v).__name__)
    return 0


def _file_entry(fe: Any) -> FileEntry | None:
    if not isinstance(fe, dict):
        return None
    length = get_int(fe, b"length") or 0
    parts = fe.get(b"path")
    if not isinstance(parts, list) or not parts:
        return None
    return FileEntry(length=length, path=str_list(b"path", parts), **bep47_fields(fe))


def _files(info: dict) -> list[FileEntry]:
    fentries = info.get(b"files")
    if not isinstance(fentries, list):
        if fentries is not None:
            logger.debug("Dropping 'files' of type %s", type(fentries).__name__)
        return []
    files: list[FileEntry] = []
    for fe in fentries:
        entry = _file_entry(fe)
        if entry is None:
            logger.debug("Dropping file entry without a usable path")
            continue
        files.append(entry)
    return files


def _info(tree: dict) -> Info:
    info = get_dict(tree, b"info")
    if info is None:
        raise MissingFieldError("Missing 'info' dict")
    pieces = get_bytes(info, b"pieces")
    if pieces is None:
        raise MissingFieldError("Missing 'pieces' in info dict")
    private_v = get_int(info, b"private")
    return Info(
        piece_length=get_int(info, b"piece length") or 0,
        pieces=pieces,
        name=get_str(info, b"name") or "",
        length=get_int(info, b"length") or 0,
        private=None if private_v is None else private_v != 0,
        source=get_str(info, b"source") or "",
        files=_files(info),
    )


def rebuild(tree: Any) -> MetaInfo | None:
    """Rebuild a MetaInfo from a dynamic value tree, or return None."""
    if not isinstance(tree, dict):
        logger.debug("Recovery needs a dict at the top level, got %s", type(tree).__name__)
        return None
    try:
        info = _info(tree)
        url_list = get_list(tree, b"url-list")
        return MetaInfo(
            info_bytes=encode(info.to_dict()),
            announce=get_str(tree, b"announce") or "",
            announce_list=_announce_list(tree),
            creation_date=_creation_date(tree),
            comment=get_str(tree, b"comment") or "",
            created_by=get_str(tree, b"created by") or "",
            encoding=get_str(tree, b"encoding") or "",
            url_list=str_list(b"url-list", url_list) if url_list is not None else [],
        )
    except BencodeError as e:
        logger.debug("Recovery abandoned: %s", e)
        return None
    except Exception:
        logger.debug("Recovery failed on unexpected input", exc_info=True)
        return None


def recover(data: bytes) -> bytes | None:
    """Return canonically re-encoded torrent bytes, or None if data cannot be rebuilt."""
    tree = decode_tree(data)
    if tree is None:
        logger.debug("Recovery skipped: input is not bencode")
        return None
    mi = rebuild(tree)
    if mi is None:
        return None
    try:
        return mi.to_bytes()
    except BencodeError as e:
        logger.debug("Recovery could not encode the rebuilt torrent: %s", e)
        return None
