"""Test CLI functionality."""

import logging
from pathlib import Path
from unittest.mock import patch

import bencodepy

from torrent_metainfo.cli import main
from torrent_metainfo.metainfo import MetaInfo

INFO = {
    b"name": b"test.txt",
    b"piece length": 16384,
    b"pieces": b"a" * 20,
    b"length": 1024,
}


def _write_torrent(tmp_path: Path, root: dict) -> Path:
    torrent_file = tmp_path / "test.torrent"
    torrent_file.write_bytes(bencodepy.encode(root))
    return torrent_file


def test_main_summary(tmp_path: Path, capsys):
    """Test the default summary output."""
    torrent_file = _write_torrent(tmp_path, {b"info": INFO, b"announce": b"http://a"})

    result = main([str(torrent_file)])

    assert result == 0
    out = capsys.readouterr().out
    assert "name: test.txt" in out
    assert f"info hash: {MetaInfo.from_bytes(torrent_file.read_bytes()).hash_info_bytes()}" in out
    assert "tracker tier: http://a" in out


def test_main_hash(tmp_path: Path, capsys):
    """Test --hash flag."""
    torrent_file = _write_torrent(tmp_path, {b"info": INFO})

    result = main([str(torrent_file), "--hash"])

    assert result == 0
    expected = MetaInfo.from_bytes(torrent_file.read_bytes()).hash_info_bytes().hex()
    assert capsys.readouterr().out.strip() == expected


def test_main_magnet(tmp_path: Path, capsys):
    """Test --magnet flag."""
    torrent_file = _write_torrent(tmp_path, {b"info": INFO, b"announce": b"http://a"})

    result = main([str(torrent_file), "--magnet"])

    assert result == 0
    out = capsys.readouterr().out.strip()
    assert out.startswith("magnet:?xt=urn:btih:")
    assert "dn=test.txt" in out
    assert "tr=http%3A%2F%2Fa" in out


def test_main_files(tmp_path: Path, capsys):
    """Test --files flag on a multi-file torrent."""
    info = {
        b"name": b"test",
        b"piece length": 16384,
        b"pieces": b"a" * 20,
        b"files": [{b"length": 1024, b"path": [b"dir", b"file1.txt"]}],
    }
    torrent_file = _write_torrent(tmp_path, {b"info": info})

    result = main([str(torrent_file), "--files"])

    assert result == 0
    assert "1024\tdir/file1.txt" in capsys.readouterr().out


def test_main_rewrite_recovered(tmp_path: Path):
    """Test --rewrite writes a torrent that passes strict decoding."""
    torrent_file = _write_torrent(tmp_path, {b"info": INFO, b"announce-list": [b"http://a", b"http://b"]})
    out = tmp_path / "fixed.torrent"

    result = main([str(torrent_file), "--rewrite", str(out)])

    assert result == 0
    mi = MetaInfo.from_bytes(out.read_bytes())
    assert mi.announce_list == [["http://a"], ["http://b"]]


def test_main_missing_file(tmp_path: Path):
    """Test a nonexistent torrent path."""
    result = main([str(tmp_path / "nonexistent.torrent")])

    assert result == 1


def test_main_unrecoverable(tmp_path: Path):
    """Test a torrent that neither strict decoding nor recovery accepts."""
    torrent_file = _write_torrent(tmp_path, {b"announce": b"http://a"})

    result = main([str(torrent_file)])

    assert result == 1


def test_main_logging_configuration(tmp_path: Path):
    """Test that logging is properly configured."""
    torrent_file = _write_torrent(tmp_path, {b"info": INFO})

    with patch("logging.basicConfig") as mock_config:
        main([str(torrent_file), "--hash"])
        mock_config.assert_called_once_with(
            level=logging.INFO,
            format="%(levelname)s: %(message)s",
        )


def test_main_verbose_logging(tmp_path: Path):
    """Test that --verbose enables debug logging."""
    torrent_file = _write_torrent(tmp_path, {b"info": INFO})

    with patch("logging.basicConfig") as mock_config:
        main([str(torrent_file), "--hash", "--verbose"])
        mock_config.assert_called_once_with(
            level=logging.DEBUG,
            format="%(levelname)s: %(message)s",
        )


def test_main_argument_parsing():
    """Test that arguments are passed on as Path objects."""
    with patch("torrent_metainfo.cli.load_from_file") as mock_load:
        mock_load.side_effect = OSError("nope")

        result = main(["test.torrent"])

        assert result == 1
        (path,), _ = mock_load.call_args
        assert isinstance(path, Path)
