"""Payload codec for request and reply bodies."""

import base64
import binascii
import re

from .core.protocols import Cipher
from .errors import DecodeError

_BASE64_ALPHABET = re.compile(rb"[A-Za-z0-9+/]*={0,2}")


class PlaceholderCipher:
    """
    Reversible, non-secret stand-in for a real cipher.

    Standard base64 of the input; the key is ignored. Decoding accepts
    missing ``=`` padding and rejects anything outside the alphabet.
    """

    def encode(self, data: bytes, key: bytes) -> bytes:
        return base64.b64encode(data)

    def decode(self, data: bytes, key: bytes) -> bytes:
        data = data.strip()
        if not _BASE64_ALPHABET.fullmatch(data):
            raise DecodeError("payload is not base64")
        unpadded = data.rstrip(b"=")
        if len(unpadded) % 4 == 1:
            raise DecodeError("truncated base64 payload")
        try:
            return base64.b64decode(unpadded + b"=" * (-len(unpadded) % 4), validate=True)
        except binascii.Error as e:
            raise DecodeError(str(e)) from e


class PayloadCodec:
    """Text-level codec binding a cipher to the shared secret."""

    def __init__(self, cipher: Cipher | None = None, key: bytes = b""):
        self.cipher = cipher or PlaceholderCipher()
        self.key = key

    def encode(self, plaintext: str) -> str:
        """Encode plaintext for the wire."""
        return self.cipher.encode(plaintext.encode("utf-8"), self.key).decode("ascii")

    def decode(self, payload: str) -> str:
        """
        Recover the plaintext a peer encoded with the same secret.

        Raises ``DecodeError`` when the payload is malformed.
        """
        try:
            raw = payload.encode("ascii")
        except UnicodeEncodeError as e:
            raise DecodeError("payload contains non-ASCII characters") from e
        data = self.cipher.decode(raw, self.key)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError("decoded payload is not UTF-8") from e
