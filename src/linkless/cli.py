"""CLI interface using typer."""

import asyncio
import sys

import typer

from .bridge import FetchBridge
from .codec import PayloadCodec
from .config import settings
from .content import ContentFetcher
from .dispatcher import REQUEST_MARKER, recognize
from .errors import BridgeError, DecodeError
from .log import setup_logging

app = typer.Typer(
    name="linkless",
    help="SMS-to-web gateway",
    no_args_is_help=True,
)


def _codec() -> PayloadCodec:
    return PayloadCodec(key=settings.shared_secret.get_secret_value().encode("utf-8"))


async def _fetch(url: str) -> str:
    """Fetch through the bridge so output matches what the gateway replies."""
    content = ContentFetcher(settings=settings)
    try:
        return await FetchBridge(content).fetch_web(url)
    finally:
        await content.close()


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
):
    """Run the webhook and bridge HTTP server."""
    import uvicorn

    setup_logging(settings.log_level)
    uvicorn.run("linkless.main:app", host=host, port=port)


@app.command()
def fetch(
    url: str = typer.Argument(..., help="URL to fetch"),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Only output content"),
):
    """Fetch a page the way the gateway would answer it."""
    if not quiet:
        setup_logging(settings.log_level)
    try:
        text = asyncio.run(_fetch(url))
    except BridgeError as e:
        typer.echo(f"{e.code}: {e.message}", err=True)
        raise typer.Exit(code=1)

    if quiet:
        sys.stdout.write(text)
    else:
        typer.echo(f"Length: {len(text)}")
        typer.echo("---")
        typer.echo(text)


@app.command()
def encode(
    url: str = typer.Argument(..., help="URL to request"),
):
    """Print the request message a peer would send for URL."""
    typer.echo(REQUEST_MARKER + _codec().encode(url))


@app.command()
def decode(
    text: str = typer.Argument(..., help="Encoded reply, or a full request message"),
):
    """Decode a reply body or request message."""
    payload = recognize(text)
    try:
        typer.echo(_codec().decode(payload if payload is not None else text))
    except DecodeError as e:
        typer.echo(f"Could not decode: {e}", err=True)
        raise typer.Exit(code=1)


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"linkless {__version__}")


if __name__ == "__main__":
    app()
