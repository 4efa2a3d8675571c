"""Typed view of the torrent info dictionary."""

from dataclasses import dataclass, field
from typing import Any

from torrent_metainfo.bencode import (
    BYTES_TYPES,
    BencodeError,
    FieldTypeError,
    MissingFieldError,
    get_bytes,
    get_int,
    get_list,
    get_str,
    raw,
    str_list,
    text,
)
from torrent_metainfo.hashing import DIGEST_SIZE


def bep47_fields(fe: dict) -> dict[str, Any]:
    """Extract the optional BEP47 attributes of a file entry, skipping malformed ones."""
    sha1 = fe.get(b"sha1")
    sha1 = bytes(sha1) if isinstance(sha1, BYTES_TYPES) and len(sha1) == 20 else None

    attr = fe.get(b"attr")
    attr = text(attr) if isinstance(attr, BYTES_TYPES) else None

    symlink_parts = fe.get(b"symlink path")
    symlink_path = None
    if isinstance(symlink_parts, list):
        symlink_path = [text(part) for part in symlink_parts if isinstance(part, BYTES_TYPES)]

    return {"attr": attr, "sha1": sha1, "symlink_path": symlink_path}


@dataclass(frozen=True)
class FileEntry:
    length: int
    path: list[str]
    attr: str | None = None  # BEP47 attributes (l=link, x=exec, h=hidden, p=padding)
    sha1: bytes | None = None  # BEP47 per-file SHA1
    symlink_path: list[str] | None = None  # BEP47 symlink target

    @property
    def display_path(self) -> str:
        return "/".join(self.path)

    @classmethod
    def from_dict(cls, fe: dict) -> "FileEntry":
        """Strictly parse one entry of ``info.files``."""
        length = get_int(fe, b"length") or 0
        parts = get_list(fe, b"path")
        if not parts:
            raise BencodeError("File entry has an empty or missing 'path'")
        return cls(length=length, path=str_list(b"path", parts), **bep47_fields(fe))

    def to_dict(self) -> dict[bytes, Any]:
        d: dict[bytes, Any] = {b"length": self.length, b"path": [raw(p) for p in self.path]}
        if self.attr:
            d[b"attr"] = raw(self.attr)
        if self.sha1 is not None:
            d[b"sha1"] = self.sha1
        if self.symlink_path:
            d[b"symlink path"] = [raw(p) for p in self.symlink_path]
        return dict(sorted(d.items()))


@dataclass(frozen=True)
class Info:
    piece_length: int = 0
    pieces: bytes = b""  # concatenated SHA-1 piece hashes
    name: str = ""
    length: int = 0  # single-file torrents only
    private: bool | None = None
    source: str = ""
    files: list[FileEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, info: dict) -> "Info":
        """Strictly parse a decoded info dictionary.

        Every known key must carry its expected type. ``pieces`` is
        mandatory; every ``files`` entry must have a non-empty path.
        """
        pieces = get_bytes(info, b"pieces")
        if pieces is None:
            raise MissingFieldError("Missing 'pieces' in info dict")

        private_v = get_int(info, b"private")
        private = None if private_v is None else private_v != 0

        files: list[FileEntry] = []
        fentries = get_list(info, b"files")
        for fe in fentries or []:
            if not isinstance(fe, dict):
                raise FieldTypeError(b"files", fe, "dictionary entry")
            files.append(FileEntry.from_dict(fe))

        return cls(
            piece_length=get_int(info, b"piece length") or 0,
            pieces=pieces,
            name=get_str(info, b"name") or "",
            length=get_int(info, b"length") or 0,
            private=private,
            source=get_str(info, b"source") or "",
            files=files,
        )

    def to_dict(self) -> dict[bytes, Any]:
        """Return the bencodable form; optional keys are omitted when empty."""
        d: dict[bytes, Any] = {
            b"piece length": self.piece_length,
            b"pieces": self.pieces,
            b"name": raw(self.name),
        }
        if self.length:
            d[b"length"] = self.length
        if self.private is not None:
            d[b"private"] = 1 if self.private else 0
        if self.source:
            d[b"source"] = raw(self.source)
        if self.files:
            d[b"files"] = [f.to_dict() for f in self.files]
        return dict(sorted(d.items()))

    @property
    def is_dir(self) -> bool:
        return bool(self.files)

    @property
    def total_length(self) -> int:
        if self.files:
            return sum(f.length for f in self.files)
        return self.length

    @property
    def num_pieces(self) -> int:
        return len(self.pieces) // DIGEST_SIZE

    def piece_hash(self, index: int) -> bytes:
        """Return the SHA-1 hash of piece ``index``."""
        if not 0 <= index < self.num_pieces:
            raise IndexError(f"Piece index {index} out of range (0..{self.num_pieces - 1})")
        return self.pieces[index * DIGEST_SIZE : (index + 1) * DIGEST_SIZE]

    def upverted_files(self) -> list[FileEntry]:
        """Return the file list, turning a single-file torrent into one entry."""
        if self.files:
            return list(self.files)
        return [FileEntry(length=self.length, path=[self.name])]
