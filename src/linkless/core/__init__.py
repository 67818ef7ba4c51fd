"""Core gateway components."""

from .fetcher import HttpFetcher
from .protocols import Cipher, Fetcher, Response, SmsTransport

__all__ = ["Cipher", "Fetcher", "HttpFetcher", "Response", "SmsTransport"]
