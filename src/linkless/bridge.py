"""Fetch-on-demand bridge for local callers."""

import logging
from collections.abc import Mapping
from typing import Any

from .content import ContentFetcher
from .errors import BridgeError
from .models import FetchFailure, FetchResult

INVALID_ARGUMENT = "INVALID_ARGUMENT"
NOT_IMPLEMENTED = "NOT_IMPLEMENTED"

logger = logging.getLogger(__name__)


class FetchBridge:
    """
    Method-call interface over the content fetcher.

    Shares normalization, truncation and failure classification with the
    SMS path. Failures are reported to the caller and never retried.
    """

    def __init__(self, content: ContentFetcher):
        self.content = content

    async def fetch_for_caller(self, url: str) -> FetchResult:
        """Fetch a page and return the structured result."""
        return await self.content.fetch(url)

    async def fetch_web(self, url: str) -> str:
        """Return bounded page text or raise ``BridgeError``."""
        result = await self.fetch_for_caller(url)
        if isinstance(result, FetchFailure):
            raise BridgeError(result.code, result.detail)
        return result.text

    def ping(self) -> str:
        return "pong"

    async def call(self, method: str, args: Mapping[str, Any] | None = None) -> str:
        """Invoke a bridge method by name."""
        args = args or {}
        if method == "fetchWeb":
            url = args.get("url")
            if not isinstance(url, str):
                raise BridgeError(INVALID_ARGUMENT, "URL is required")
            return await self.fetch_web(url)
        if method == "ping":
            return self.ping()
        logger.debug("Unknown bridge method %r", method)
        raise BridgeError(NOT_IMPLEMENTED, f"Method {method!r} is not implemented")
