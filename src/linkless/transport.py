"""SMS transports and GSM 03.38 message segmentation."""

import logging

from twilio.rest import Client

from .config import GatewaySettings, settings as default_settings
from .core import SmsTransport
from .errors import TransportError

logger = logging.getLogger(__name__)

# GSM 03.38 default alphabet (ESC excluded) and the extension table
GSM7_BASIC = frozenset(
    "@£$¥èéùìòÇ\nØø\rÅåΔ_ΦΓΛΩΠΨΣΘΞÆæßÉ !\"#¤%&'()*+,-./0123456789:;<=>?"
    "¡ABCDEFGHIJKLMNOPQRSTUVWXYZÄÖÑÜ§¿abcdefghijklmnopqrstuvwxyzäöñüà"
)
GSM7_EXTENDED = frozenset("^{}\\[~]|€\f")

GSM7_SINGLE, GSM7_PART = 160, 153
UCS2_SINGLE, UCS2_PART = 70, 67

TWILIO_MAX_BODY = 1600


def _gsm7_cost(char: str) -> int | None:
    if char in GSM7_BASIC:
        return 1
    if char in GSM7_EXTENDED:
        return 2
    return None


def _ucs2_cost(char: str) -> int:
    # Characters outside the BMP take a surrogate pair
    return 2 if ord(char) > 0xFFFF else 1


def divide_message(text: str) -> list[str]:
    """
    Split text into SMS parts the way handset SMS stacks do.

    GSM-7 text fits 160 septets in a single message or 153 per part of a
    concatenated one; anything else is sent as UCS-2 with 70 / 67 UTF-16
    units. A character (an escaped GSM-7 symbol or a surrogate pair) is
    never split across parts.
    """
    costs = [_gsm7_cost(c) for c in text]
    if all(cost is not None for cost in costs):
        single, per_part = GSM7_SINGLE, GSM7_PART
    else:
        costs = [_ucs2_cost(c) for c in text]
        single, per_part = UCS2_SINGLE, UCS2_PART

    if sum(costs) <= single:
        return [text]

    parts: list[str] = []
    start = used = 0
    for i, cost in enumerate(costs):
        if used + cost > per_part:
            parts.append(text[start:i])
            start, used = i, 0
        used += cost
    parts.append(text[start:])
    return parts


class TwilioTransport:
    """Sends messages through the Twilio REST API."""

    def __init__(self, account_sid: str, auth_token: str, from_number: str, client: Client | None = None):
        if not account_sid or not auth_token:
            raise TransportError(
                "Twilio credentials are not configured "
                "(LINKLESS_TWILIO_ACCOUNT_SID / LINKLESS_TWILIO_AUTH_TOKEN)"
            )
        if not from_number:
            raise TransportError("LINKLESS_TWILIO_FROM_NUMBER is not configured")
        self.from_number = from_number
        self._client = client or Client(account_sid, auth_token)

    def divide_message(self, text: str) -> list[str]:
        return divide_message(text)

    def _create(self, destination: str, body: str) -> None:
        msg = self._client.messages.create(to=destination, from_=self.from_number, body=body)
        logger.info("Twilio send success | sid=%s | to=%s", msg.sid, destination)

    def send_text(self, destination: str, text: str) -> None:
        self._create(destination, text)

    def send_multipart(self, destination: str, parts: list[str]) -> None:
        """
        Send parts in order.

        Twilio concatenates a long body itself, so consecutive parts are
        joined into as few API calls as its body limit allows.
        """
        body = ""
        for part in parts:
            if body and len(body) + len(part) > TWILIO_MAX_BODY:
                self._create(destination, body)
                body = ""
            body += part
        self._create(destination, body)


class LogTransport:
    """Dry-run transport that logs outbound messages instead of sending them."""

    def divide_message(self, text: str) -> list[str]:
        return divide_message(text)

    def send_text(self, destination: str, text: str) -> None:
        logger.info("[dry-run] to=%s | %s", destination, text)

    def send_multipart(self, destination: str, parts: list[str]) -> None:
        for index, part in enumerate(parts, 1):
            logger.info("[dry-run] to=%s | part %d/%d | %s", destination, index, len(parts), part)


def build_transport(settings: GatewaySettings | None = None) -> SmsTransport:
    """Create the transport selected by ``LINKLESS_TRANSPORT``."""
    settings = settings or default_settings
    if settings.transport == "twilio":
        token = settings.twilio_auth_token.get_secret_value() if settings.twilio_auth_token else ""
        return TwilioTransport(
            account_sid=settings.twilio_account_sid or "",
            auth_token=token,
            from_number=settings.twilio_from_number or "",
        )
    return LogTransport()
