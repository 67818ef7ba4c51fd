"""SMS-to-web gateway: answers encoded URL requests with bounded page text."""

__version__ = "0.1.0"
