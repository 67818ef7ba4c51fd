"""Exception hierarchy for the gateway."""


class LinklessError(Exception):
    """Base class for gateway errors."""


class DecodeError(LinklessError):
    """An inbound payload could not be decoded."""


class TransportError(LinklessError):
    """The message transport is misconfigured or refused a message."""


class UnsupportedContentError(LinklessError):
    """The fetched document is not text that can be rendered."""


class BridgeError(LinklessError):
    """A bridge call failed with a structured error code."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message
