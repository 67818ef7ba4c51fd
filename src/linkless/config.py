"""Configuration using pydantic-settings."""

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class GatewaySettings(BaseSettings):
    """Gateway configuration."""

    # Content fetching
    fetch_timeout: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT
    max_text_length: int = 1200
    hard_length_cap: bool = False
    max_connections: int = 20
    max_keepalive_connections: int = 10

    # Protocol
    shared_secret: SecretStr = SecretStr("")
    strict_decode: bool = False
    encode_error_replies: bool = False

    # Request pool
    workers: int = 4
    max_pending: int = 100

    # Transport
    transport: Literal["log", "twilio"] = "log"
    twilio_account_sid: str | None = None
    twilio_auth_token: SecretStr | None = None
    twilio_from_number: str | None = None
    validate_signature: bool = False

    log_level: str = "INFO"

    model_config = {"env_prefix": "LINKLESS_"}


settings = GatewaySettings()
