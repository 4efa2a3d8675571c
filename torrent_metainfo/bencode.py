"""Bencode codec helpers built on bencodepy."""

from typing import Any

import bencodepy

BYTES_TYPES = (bytes, bytearray)


class BencodeError(Exception):
    pass


class MissingFieldError(BencodeError):
    """A mandatory key (``info`` or ``info.pieces``) is absent."""


class FieldTypeError(BencodeError):
    """A key is present but its value has the wrong bencode type."""

    def __init__(self, key: bytes, value: Any, expected: str):
        self.key = key
        self.value = value
        super().__init__(f"Invalid {key.decode('ascii', errors='replace')!r}: expected {expected}, got {type(value).__name__}")


def decode(data: bytes) -> Any:
    """Strictly decode a complete bencoded value."""
    try:
        return bencodepy.decode(bytes(data))
    except Exception as e:
        raise BencodeError(f"Failed to decode bencoded data: {e}") from e


def decode_tree(data: bytes) -> Any | None:
    """Decode into a dynamic value tree of int, bytes, list and dict.

    Shape checks are left to the caller. Returns None when the input is not
    bencode at all.
    """
    try:
        return bencodepy.decode(bytes(data))
    except Exception:
        return None


def encode(value: Any) -> bytes:
    """Encode a value. Dictionaries are written in their own key order, not sorted."""
    try:
        return bencodepy.encode(value)
    except Exception as e:
        raise BencodeError(f"Failed to encode value: {e}") from e


def text(value: bytes) -> str:
    # surrogateescape keeps non-UTF-8 names byte-exact through a round trip
    return bytes(value).decode("utf-8", errors="surrogateescape")


def raw(value: str) -> bytes:
    return value.encode("utf-8", errors="surrogateescape")


def get_int(dct: dict, key: bytes) -> int | None:
    v = dct.get(key)
    if v is None:
        return None
    if not isinstance(v, int) or isinstance(v, bool):
        raise FieldTypeError(key, v, "integer")
    return v


def get_bytes(dct: dict, key: bytes) -> bytes | None:
    v = dct.get(key)
    if v is None:
        return None
    if not isinstance(v, BYTES_TYPES):
        raise FieldTypeError(key, v, "byte string")
    return bytes(v)


def get_str(dct: dict, key: bytes) -> str | None:
    v = get_bytes(dct, key)
    return None if v is None else text(v)


def get_list(dct: dict, key: bytes) -> list | None:
    v = dct.get(key)
    if v is None:
        return None
    if not isinstance(v, list):
        raise FieldTypeError(key, v, "list")
    return v


def get_dict(dct: dict, key: bytes) -> dict | None:
    v = dct.get(key)
    if v is None:
        return None
    if not isinstance(v, dict):
        raise FieldTypeError(key, v, "dictionary")
    return v


def str_list(key: bytes, items: list) -> list[str]:
    """Convert a list of byte strings, rejecting any other element type."""
    out: list[str] = []
    for item in items:
        if not isinstance(item, BYTES_TYPES):
            raise FieldTypeError(key, item, "byte string element")
        out.append(text(item))
    return out
