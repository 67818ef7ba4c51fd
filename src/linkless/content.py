"""Fetch a page and reduce it to bounded plain text."""

import logging

import httpx

from .config import GatewaySettings, settings as default_settings
from .core import Fetcher, HttpFetcher
from .errors import UnsupportedContentError
from .extract import body_text, bound_text
from .models import FailureKind, FetchFailure, FetchResult, FetchSuccess

logger = logging.getLogger(__name__)

TEXT_CONTENT_TYPES = ("application/xml", "application/xhtml+xml")


def normalize_url(url: str) -> str:
    """Default to https:// when the URL has no http(s) scheme."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        return f"https://{url}"
    return url


def is_text_content(content_type: str) -> bool:
    """Whether a media type can be rendered as page text."""
    if not content_type:
        return True
    return (
        content_type.startswith("text/")
        or content_type in TEXT_CONTENT_TYPES
        or content_type.endswith("+xml")
    )


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


def classify_error(exc: Exception) -> FetchFailure:
    """Map an exception raised while fetching to a failure kind."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        reason = exc.response.reason_phrase or "HTTP error fetching URL"
        return FetchFailure(FailureKind.HTTP_STATUS, f"HTTP {status}: {reason}", status=status)
    if isinstance(exc, (httpx.RequestError, UnsupportedContentError)):
        return FetchFailure(FailureKind.NETWORK, f"Failed to fetch page: {_describe(exc)}")
    return FetchFailure(FailureKind.OTHER, f"Error fetching web page: {_describe(exc)}")


class ContentFetcher:
    """Fetches pages and renders them as bounded text."""

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        max_length: int | None = None,
        hard_cap: bool | None = None,
        settings: GatewaySettings | None = None,
    ):
        settings = settings or default_settings
        self.fetcher = fetcher or HttpFetcher(
            timeout=settings.fetch_timeout,
            user_agent=settings.user_agent,
            max_connections=settings.max_connections,
            max_keepalive_connections=settings.max_keepalive_connections,
        )
        self.max_length = max_length if max_length is not None else settings.max_text_length
        self.hard_cap = hard_cap if hard_cap is not None else settings.hard_length_cap

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch ``url`` and return its bounded body text.

        Never raises: every failure is returned as a ``FetchFailure``.
        No retries are attempted.
        """
        target = normalize_url(url)
        try:
            response = await self.fetcher.fetch(target)
            if not is_text_content(response.content_type):
                raise UnsupportedContentError(f"Unsupported content type: {response.content_type}")
            text = body_text(response.text)
        except Exception as e:
            failure = classify_error(e)
            logger.warning("Fetch of %s failed: %s", target, failure.detail)
            return failure

        logger.info("Fetched %d characters from %s", len(text), target)
        return FetchSuccess(bound_text(text, self.max_length, hard_cap=self.hard_cap))

    async def close(self):
        """Close the underlying fetcher if it holds resources."""
        close = getattr(self.fetcher, "close", None)
        if close is not None:
            await close()
