"""Messages and results passed between gateway components."""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class InboundMessage:
    """A text message as delivered by the transport."""

    sender: str
    body: str


@dataclass(frozen=True)
class Request:
    """A recognized and decoded fetch request."""

    sender: str
    target_url: str


class FailureKind(str, Enum):
    HTTP_STATUS = "http_status"
    NETWORK = "network"
    OTHER = "other"


# Error codes exposed by the bridge, one per failure kind
BRIDGE_ERROR_CODES = {
    FailureKind.HTTP_STATUS: "HTTP_ERROR",
    FailureKind.NETWORK: "NETWORK_ERROR",
    FailureKind.OTHER: "FETCH_ERROR",
}


@dataclass(frozen=True)
class FetchSuccess:
    """Bounded page text."""

    text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure:
    """A classified fetch failure."""

    kind: FailureKind
    detail: str
    status: int | None = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def code(self) -> str:
        """Bridge error code for this failure."""
        return BRIDGE_ERROR_CODES[self.kind]


FetchResult = FetchSuccess | FetchFailure


@dataclass(frozen=True)
class OutboundPayload:
    """Reply text addressed to the original sender."""

    destination: str
    text: str
