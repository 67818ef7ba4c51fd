"""Reply composition, encoding and sending."""

import logging

from .codec import PayloadCodec
from .core import SmsTransport
from .extract import utf16_prefix
from .models import FetchFailure, FetchResult, OutboundPayload

ERROR_PREFIX = "Error: "
ERROR_DETAIL_LIMIT = 100

logger = logging.getLogger(__name__)


def compose(result: FetchResult) -> str:
    """Render a fetch result as reply text."""
    if isinstance(result, FetchFailure):
        return error_text(result.detail)
    return result.text


def error_text(detail: str) -> str:
    """Error reply with the detail capped to keep the reply short."""
    return ERROR_PREFIX + utf16_prefix(detail or "Unknown error", ERROR_DETAIL_LIMIT)


class ResponseComposer:
    """Builds outbound payloads and hands them to the transport."""

    def __init__(
        self,
        transport: SmsTransport,
        codec: PayloadCodec | None = None,
        encode_errors: bool = False,
    ):
        self.transport = transport
        self.codec = codec or PayloadCodec()
        self.encode_errors = encode_errors

    def encode(self, plaintext: str) -> str:
        return self.codec.encode(plaintext)

    def render(self, destination: str, result: FetchResult) -> OutboundPayload:
        """
        Compose and encode the reply for ``result``.

        Page text is always encoded. Error replies stay readable unless
        ``encode_errors`` is set.
        """
        text = compose(result)
        if result.ok or self.encode_errors:
            text = self.encode(text)
        return OutboundPayload(destination=destination, text=text)

    def render_error(self, destination: str, detail: str) -> OutboundPayload:
        """Reply for a failure that happened outside the fetcher."""
        text = error_text(detail)
        if self.encode_errors:
            text = self.encode(text)
        return OutboundPayload(destination=destination, text=text)

    def send(self, destination: str, text: str) -> int:
        """
        Send text, letting the transport divide it into parts.

        Returns the number of parts sent.
        """
        parts = self.transport.divide_message(text)
        if len(parts) == 1:
            self.transport.send_text(destination, text)
        else:
            self.transport.send_multipart(destination, parts)
        logger.info("Sent reply to %s in %d part(s)", destination, len(parts))
        return len(parts)

    def deliver(self, payload: OutboundPayload) -> int:
        return self.send(payload.destination, payload.text)
