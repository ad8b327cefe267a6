"""Configuration via environment variables."""

from enum import Enum
from pydantic_settings import BaseSettings


class Transport(str, Enum):
    STDIO = "stdio"
    STREAMABLE_HTTP = "streamable-http"


class Settings(BaseSettings):
    model_config = {"env_prefix": "TRANSCRIPT_TOPICS_"}

    debug_parsing: bool = False
    gap_threshold_seconds: int = 120
    session_max_size: int = 100
    session_ttl_seconds: int = 3600
    rate_limit_per_minute: int = 60
    transport: Transport = Transport.STDIO
