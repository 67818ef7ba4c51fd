"""SMS request pipeline: dispatch, fetch, reply."""

import asyncio
import logging

from .codec import PayloadCodec
from .composer import ResponseComposer
from .config import GatewaySettings, settings as default_settings
from .content import ContentFetcher
from .core import SmsTransport
from .dispatcher import RequestDispatcher, recognize
from .errors import DecodeError
from .models import InboundMessage
from .pool import RequestPool
from .transport import build_transport

BUSY_DETAIL = "Gateway busy, try again later"

logger = logging.getLogger(__name__)


class Gateway:
    """
    Answers protocol requests arriving over the SMS transport.

    ``handle_inbound`` runs on the transport's delivery path and only
    recognizes and queues; fetching and replying happen on the request pool.
    Every queued request gets exactly one reply, an error reply if anything
    fails along the way.
    """

    def __init__(
        self,
        transport: SmsTransport,
        content: ContentFetcher,
        dispatcher: RequestDispatcher | None = None,
        composer: ResponseComposer | None = None,
        workers: int = 4,
        max_pending: int = 100,
    ):
        self.transport = transport
        self.content = content
        self.dispatcher = dispatcher or RequestDispatcher()
        self.composer = composer or ResponseComposer(transport)
        self.pool: RequestPool[InboundMessage] = RequestPool(
            self.process, workers=workers, max_pending=max_pending
        )
        self._background: set[asyncio.Task] = set()

    @classmethod
    def from_settings(
        cls,
        settings: GatewaySettings | None = None,
        transport: SmsTransport | None = None,
        content: ContentFetcher | None = None,
    ) -> "Gateway":
        """Build a gateway wired from configuration."""
        settings = settings or default_settings
        codec = PayloadCodec(key=settings.shared_secret.get_secret_value().encode("utf-8"))
        transport = transport or build_transport(settings)
        return cls(
            transport=transport,
            content=content or ContentFetcher(settings=settings),
            dispatcher=RequestDispatcher(codec, strict=settings.strict_decode),
            composer=ResponseComposer(
                transport, codec, encode_errors=settings.encode_error_replies
            ),
            workers=settings.workers,
            max_pending=settings.max_pending,
        )

    def handle_inbound(self, message: InboundMessage) -> bool:
        """
        Accept a delivered message without blocking.

        Returns True if the message was a protocol request.
        """
        if recognize(message.body) is None:
            logger.debug("Not a protocol message from %s, ignoring", message.sender)
            return False

        logger.info("Received request from %s", message.sender)
        if not self.pool.submit(message):
            task = asyncio.create_task(self.send_error(message.sender, BUSY_DETAIL))
            self._background.add(task)
            task.add_done_callback(self._background.discard)
        return True

    async def process(self, message: InboundMessage):
        """Decode, fetch and reply for one request."""
        try:
            request = self.dispatcher.dispatch(message)
            if request is None:
                return
            logger.info("Fetching URL: %s", request.target_url)
            result = await self.content.fetch(request.target_url)
            payload = self.composer.render(request.sender, result)
            await asyncio.to_thread(self.composer.deliver, payload)
        except DecodeError as e:
            logger.warning("Rejected undecodable request from %s: %s", message.sender, e)
            await self.send_error(message.sender, f"Could not decode request: {e}")
        except Exception as e:
            logger.exception("Error processing request from %s", message.sender)
            await self.send_error(message.sender, str(e))

    async def send_error(self, destination: str, detail: str):
        """Best-effort error reply; a failure here is only logged."""
        try:
            payload = self.composer.render_error(destination, detail)
            await asyncio.to_thread(self.composer.deliver, payload)
        except Exception:
            logger.exception("Failed to send error reply to %s", destination)

    async def start(self):
        await self.pool.start()

    async def stop(self):
        """Finish queued requests, then release resources."""
        await self.pool.stop()
        if self._background:
            await asyncio.gather(*self._background, return_exceptions=True)
        await self.content.close()
