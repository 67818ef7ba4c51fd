"""Protocol definitions for gateway collaborators."""

import re
from dataclasses import dataclass, field
from typing import Protocol

# Matches both <meta charset="..."> and http-equiv content="...; charset=..."
_META_CHARSET = re.compile(rb"<meta[^>]+?charset\s*=\s*[\"']?\s*([A-Za-z0-9_.:-]+)", re.IGNORECASE)
CHARSET_SNIFF_BYTES = 4096


def sniff_charset(content: bytes) -> str | None:
    """Charset declared by a ``<meta>`` tag near the start of a document."""
    match = _META_CHARSET.search(content[:CHARSET_SNIFF_BYTES])
    if match is None:
        return None
    return match.group(1).decode("ascii")


@dataclass
class Response:
    """HTTP response container."""

    url: str
    status: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    encoding: str | None = None

    @property
    def text(self) -> str:
        """
        Decode content with the header charset, else the document's
        ``<meta>`` charset, else UTF-8.
        """
        encoding = self.encoding or sniff_charset(self.content) or "utf-8"
        try:
            return self.content.decode(encoding, errors="replace")
        except LookupError:
            return self.content.decode("utf-8", errors="replace")

    @property
    def content_type(self) -> str:
        """Media type without parameters, lowercased."""
        value = self.headers.get("content-type", "")
        return value.split(";", 1)[0].strip().lower()


class Fetcher(Protocol):
    """Protocol for URL fetchers."""

    async def fetch(self, url: str) -> Response:
        """Fetch a URL and return the response."""
        ...


class SmsTransport(Protocol):
    """Protocol for text-message transports."""

    def divide_message(self, text: str) -> list[str]:
        """Split text into transport-sized parts, preserving order."""
        ...

    def send_text(self, destination: str, text: str) -> None:
        """Send a single-part message."""
        ...

    def send_multipart(self, destination: str, parts: list[str]) -> None:
        """Send an ordered multi-part message."""
        ...


class Cipher(Protocol):
    """
    Protocol for the payload cipher.

    Implementations must produce transport-safe ASCII and raise
    ``DecodeError`` when input cannot be decoded.
    """

    def encode(self, data: bytes, key: bytes) -> bytes:
        ...

    def decode(self, data: bytes, key: bytes) -> bytes:
        ...
