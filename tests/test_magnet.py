"""Test magnet links and info hashes."""

import pytest

from torrent_metainfo.hashing import Hash, hash_bytes
from torrent_metainfo.magnet import Magnet

HASH = Hash(bytes(range(20)))


def test_hash_hex_round_trip():
    assert Hash.from_hex(HASH.hex()) == HASH
    assert str(HASH) == "000102030405060708090a0b0c0d0e0f10111213"


def test_hash_wrong_length():
    with pytest.raises(ValueError):
        Hash(b"short")
    with pytest.raises(ValueError):
        Hash.from_hex("zz")


def test_hash_bytes_known_value():
    assert hash_bytes(b"").hex() == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_magnet_minimal():
    assert str(Magnet(info_hash=HASH)) == f"magnet:?xt=urn:btih:{HASH.hex()}"


def test_magnet_full():
    m = Magnet(
        info_hash=HASH,
        display_name="my file",
        trackers=["http://a/announce", "udp://b:80"],
        params={"ws": ["http://seed/"]},
    )
    assert str(m) == (
        f"magnet:?xt=urn:btih:{HASH.hex()}"
        "&dn=my+file"
        "&tr=http%3A%2F%2Fa%2Fannounce&tr=udp%3A%2F%2Fb%3A80"
        "&ws=http%3A%2F%2Fseed%2F"
    )


def test_magnet_empty_params_omitted():
    assert str(Magnet(info_hash=HASH, params={"ws": []})) == f"magnet:?xt=urn:btih:{HASH.hex()}"
