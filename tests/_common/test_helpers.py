"""Tests for the pure helpers in readdirtree._common.

These never touch the filesystem.
"""

import pytest

from readdirtree._common import (
    normalize_separators,
    extname,
    strip_extension,
    join_name,
    encode_content,
)
from readdirtree.config import ENCODINGS


class TestExtname:

    @pytest.mark.parametrize("name,expected", [
        ("file.txt", ".txt"),
        ("archive.tar.gz", ".gz"),
        ("README", ""),
        (".bashrc", ""),
        (".config.json", ".json"),
        ("trailing.", "."),
        ("..", ""),
        ("...", "."),
        ("..a", ".a"),
        ("...bashrc", ".bashrc"),
        (".a.b", ".b"),
        ("", ""),
        ("UPPER.TXT", ".TXT"),
    ])
    def test_extname(self, name, expected):
        assert extname(name) == expected

    @pytest.mark.parametrize("name,expected", [
        ("file.txt", "file"),
        ("archive.tar.gz", "archive.tar"),
        ("README", "README"),
        (".bashrc", ".bashrc"),
        ("trailing.", "trailing"),
        ("...bashrc", ".."),
        ("..", ".."),
    ])
    def test_strip_extension(self, name, expected):
        assert strip_extension(name) == expected


class TestJoinName:

    def test_inserts_separator(self):
        assert join_name("/data", "file.txt", "/") == "/data/file.txt"

    def test_no_double_separator(self):
        assert join_name("/", "etc", "/") == "/etc"
        assert join_name("C:\\", "Users", "\\") == "C:\\Users"

    def test_bytes(self):
        assert join_name(b"/data", b"caf\xe9", b"/") == b"/data/caf\xe9"


def test_normalize_separators():
    assert normalize_separators("C:\\Users\\me\\docs") == "C:/Users/me/docs"
    assert normalize_separators("/already/unix") == "/already/unix"


class TestEncodeContent:

    def test_base64(self):
        assert encode_content(b"hello") == "aGVsbG8="

    def test_hex(self):
        assert encode_content(b"\x00\xab", "hex") == "00ab"

    def test_binary_and_latin1(self):
        assert encode_content(b"caf\xe9", "binary") == "café"
        assert encode_content(b"caf\xe9", "latin1") == "café"

    def test_ascii_clears_high_bit(self):
        assert encode_content(b"A\xc1", "ascii") == "AA"

    def test_utf8_replaces_invalid_bytes(self):
        assert encode_content("é".encode("utf-8"), "utf-8") == "é"
        assert encode_content(b"\xff", "utf8") == "\ufffd"

    def test_utf16le_drops_odd_byte(self):
        assert encode_content(b"h\x00i\x00!", "ucs2") == "hi"

    def test_unknown_encoding(self):
        with pytest.raises(ValueError):
            encode_content(b"data", "utf32")

    @pytest.mark.parametrize("encoding", sorted(ENCODINGS))
    def test_every_configured_encoding_is_supported(self, encoding):
        assert isinstance(encode_content(b"abc", encoding), str)
