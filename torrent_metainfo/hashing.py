"""Info hash value type."""

import hashlib
from dataclasses import dataclass

DIGEST_SIZE = 20


@dataclass(frozen=True)
class Hash:
    """SHA-1 digest identifying a torrent."""

    digest: bytes

    def __post_init__(self) -> None:
        if len(self.digest) != DIGEST_SIZE:
            raise ValueError(f"Hash must be {DIGEST_SIZE} bytes, got {len(self.digest)}")

    @classmethod
    def from_hex(cls, value: str) -> "Hash":
        try:
            digest = bytes.fromhex(value)
        except ValueError as e:
            raise ValueError(f"Invalid hex info hash: {value!r}") from e
        return cls(digest)

    def hex(self) -> str:
        return self.digest.hex()

    def __str__(self) -> str:
        return self.hex()


def hash_bytes(data: bytes) -> Hash:
    """Return the SHA-1 Hash of data."""
    return Hash(hashlib.sha1(data).digest())  # nosec B324
