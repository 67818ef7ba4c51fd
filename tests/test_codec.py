"""Tests for the payload codec."""

import pytest

from linkless.codec import PayloadCodec, PlaceholderCipher
from linkless.errors import DecodeError


class XorHexCipher:
    """Keyed stand-in for a real cipher: XOR with the key, then hex."""

    def encode(self, data: bytes, key: bytes) -> bytes:
        return bytes(b ^ key[i % len(key)] for i, b in enumerate(data)).hex().encode("ascii")

    def decode(self, data: bytes, key: bytes) -> bytes:
        try:
            raw = bytes.fromhex(data.decode("ascii"))
        except ValueError as e:
            raise DecodeError("not hex") from e
        return bytes(b ^ key[i % len(key)] for i, b in enumerate(raw))


class TestPlaceholderCipher:
    def test_encode_is_base64(self):
        """Placeholder output should be standard base64."""
        assert PlaceholderCipher().encode(b"http://example.com", b"") == b"aHR0cDovL2V4YW1wbGUuY29t"

    def test_decode_accepts_missing_padding(self):
        """Padding should be optional."""
        assert PlaceholderCipher().decode(b"aGk", b"") == b"hi"
        assert PlaceholderCipher().decode(b"aGk=", b"") == b"hi"

    def test_decode_rejects_non_alphabet(self):
        """Characters outside the base64 alphabet should fail."""
        with pytest.raises(DecodeError):
            PlaceholderCipher().decode(b"example.com", b"")

    def test_decode_rejects_truncated_input(self):
        """A single dangling character cannot be base64."""
        with pytest.raises(DecodeError):
            PlaceholderCipher().decode(b"aGk=a", b"")
        with pytest.raises(DecodeError):
            PlaceholderCipher().decode(b"abcde", b"")


class TestPayloadCodec:
    @pytest.mark.parametrize(
        "url",
        [
            "http://example.com",
            "example.com/path?q=1&lang=en",
            "https://例え.jp/ページ",
            "",
        ],
    )
    def test_round_trip(self, url):
        """decode(encode(u)) should return u."""
        codec = PayloadCodec()
        assert codec.decode(codec.encode(url)) == url

    def test_round_trip_with_keyed_cipher(self):
        """The round trip should hold for a substituted cipher too."""
        codec = PayloadCodec(XorHexCipher(), key=b"secret")
        encoded = codec.encode("https://example.com")
        assert "example" not in encoded
        assert codec.decode(encoded) == "https://example.com"

    def test_decode_known_request(self):
        """Decoding should recover the URL a peer encoded."""
        assert PayloadCodec().decode("aHR0cDovL2V4YW1wbGUuY29t") == "http://example.com"

    def test_decode_rejects_invalid_utf8(self):
        """Bytes that are not UTF-8 should fail to decode."""
        with pytest.raises(DecodeError):
            PayloadCodec().decode("//79")

    def test_decode_rejects_non_ascii(self):
        """Non-ASCII payloads cannot come from the encoder."""
        with pytest.raises(DecodeError):
            PayloadCodec().decode("héllo")
