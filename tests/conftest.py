"""Shared fixtures and test doubles."""

import pytest

from linkless.content import ContentFetcher
from linkless.core import Response
from linkless.gateway import Gateway
from linkless.transport import divide_message


class RecordingTransport:
    """Transport that records sent messages instead of sending them."""

    def __init__(self, fail: bool = False, fail_times: int = 0):
        self.fail = fail
        self.fail_times = fail_times
        self.sent: list[tuple[str, list[str]]] = []

    def divide_message(self, text: str) -> list[str]:
        return divide_message(text)

    def send_text(self, destination: str, text: str) -> None:
        self._maybe_fail()
        self.sent.append((destination, [text]))

    def send_multipart(self, destination: str, parts: list[str]) -> None:
        self._maybe_fail()
        self.sent.append((destination, list(parts)))

    def _maybe_fail(self) -> None:
        if self.fail:
            raise ConnectionError("radio off")
        if self.fail_times > 0:
            self.fail_times -= 1
            raise ConnectionError("radio off")

    def bodies(self) -> list[str]:
        return ["".join(parts) for _, parts in self.sent]


class StubFetcher:
    """Fetcher returning a canned page or raising a canned error."""

    def __init__(self, html: str = "", exc: Exception | None = None, content_type: str = "text/html"):
        self.html = html
        self.exc = exc
        self.content_type = content_type
        self.urls: list[str] = []

    async def fetch(self, url: str) -> Response:
        self.urls.append(url)
        if self.exc is not None:
            raise self.exc
        return Response(
            url=url,
            status=200,
            content=self.html.encode("utf-8"),
            headers={"content-type": self.content_type},
            encoding="utf-8",
        )


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def stub_fetcher():
    return StubFetcher(html="<html><body><p>Example Domain</p></body></html>")


@pytest.fixture
def gateway(transport, stub_fetcher):
    return Gateway(transport=transport, content=ContentFetcher(fetcher=stub_fetcher), workers=2)
