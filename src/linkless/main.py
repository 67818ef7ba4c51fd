"""HTTP surface: SMS provider webhook and the local bridge."""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Body, FastAPI, Form, HTTPException, Request, Response
from fastapi.responses import JSONResponse
from twilio.request_validator import RequestValidator

from . import __version__
from .bridge import INVALID_ARGUMENT, NOT_IMPLEMENTED, FetchBridge
from .config import GatewaySettings, settings as default_settings
from .errors import BridgeError
from .gateway import Gateway
from .log import setup_logging
from .models import InboundMessage

EMPTY_TWIML = """<?xml version="1.0" encoding="UTF-8"?>
<Response></Response>"""

BRIDGE_ERROR_STATUS = {INVALID_ARGUMENT: 400, NOT_IMPLEMENTED: 404}

logger = logging.getLogger(__name__)


def create_app(
    settings: GatewaySettings | None = None,
    gateway: Gateway | None = None,
    bridge: FetchBridge | None = None,
) -> FastAPI:
    """Build the application; collaborators can be injected for tests."""
    settings = settings or default_settings
    if gateway is None:
        gateway = Gateway.from_settings(settings)
    bridge = bridge or FetchBridge(gateway.content)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        await gateway.start()
        logger.info("Gateway started with %d workers", gateway.pool.workers)
        yield
        await gateway.stop()

    app = FastAPI(title="linkless", version=__version__, lifespan=lifespan)
    app.state.gateway = gateway
    app.state.bridge = bridge

    async def verify_signature(request: Request) -> None:
        """Reject webhook calls not signed with the Twilio auth token."""
        token = settings.twilio_auth_token.get_secret_value() if settings.twilio_auth_token else ""
        if not token:
            raise HTTPException(status_code=500, detail="Twilio auth token not configured")
        form = await request.form()
        signature = request.headers.get("X-Twilio-Signature", "")
        params = {key: str(value) for key, value in form.items()}
        if not RequestValidator(token).validate(str(request.url), params, signature):
            raise HTTPException(status_code=403, detail="Invalid signature")

    @app.post("/sms/inbound")
    async def sms_inbound(
        request: Request,
        From_: str = Form(..., alias="From"),
        Body_: str = Form("", alias="Body"),
    ) -> Response:
        """
        Twilio-style SMS webhook.

        Protocol requests are queued for background processing; the reply is
        sent later through the transport, so the webhook answers with empty
        TwiML right away.
        """
        if settings.validate_signature:
            await verify_signature(request)

        gateway.handle_inbound(InboundMessage(sender=From_, body=Body_))
        return Response(content=EMPTY_TWIML, media_type="application/xml")

    @app.post("/bridge/{method}")
    async def bridge_call(
        method: str,
        args: dict[str, Any] | None = Body(None),
    ) -> JSONResponse:
        """Local method-call interface (``fetchWeb``, ``ping``)."""
        try:
            result = await bridge.call(method, args)
        except BridgeError as e:
            return JSONResponse(
                {"ok": False, "error": {"code": e.code, "message": e.message}},
                status_code=BRIDGE_ERROR_STATUS.get(e.code, 502),
            )
        return JSONResponse({"ok": True, "result": result})

    return app


app = create_app()
