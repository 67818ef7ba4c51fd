"""Recognition and decoding of inbound protocol requests."""

import logging

from .codec import PayloadCodec
from .errors import DecodeError
from .models import InboundMessage, Request

REQUEST_MARKER = "LK:"

logger = logging.getLogger(__name__)


def recognize(body: str) -> str | None:
    """Return the encoded payload if ``body`` is a protocol request."""
    if body.startswith(REQUEST_MARKER):
        return body[len(REQUEST_MARKER):]
    return None


class RequestDispatcher:
    """Turns inbound messages into fetch requests."""

    def __init__(self, codec: PayloadCodec | None = None, strict: bool = False):
        self.codec = codec or PayloadCodec()
        self.strict = strict

    def decode(self, payload: str) -> str:
        """
        Decode a payload into the target URL.

        Unless ``strict`` is set, a payload that cannot be decoded is taken
        to be the literal URL, so unencoded test requests still get a reply.
        """
        try:
            return self.codec.decode(payload)
        except DecodeError:
            if self.strict:
                raise
            logger.warning("Payload could not be decoded, using it as the URL")
            return payload

    def dispatch(self, message: InboundMessage) -> Request | None:
        """Recognize and decode a message; ``None`` if it is not a request."""
        payload = recognize(message.body)
        if payload is None:
            logger.debug("Not a protocol message from %s, ignoring", message.sender)
            return None
        return Request(sender=message.sender, target_url=self.decode(payload))
