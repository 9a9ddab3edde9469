from typing import Literal

from pydantic_settings import BaseSettings

from tasktrack.core.modules.session.models import SESSION_TTL_SECONDS


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = "mongodb://localhost:27017/tasktrack"
    redis_url: str = "redis://localhost:6379/0"
    host: str = "127.0.0.1"
    port: int = 3100
    debug: bool = False
    cors_origins: list[str] = []
    session_backend: Literal["redis", "memory"] = "redis"  # "memory" keeps sessions in-process (dev only)
    session_ttl_seconds: int = SESSION_TTL_SECONDS
    cookie_secure: bool = False  # Set to True in production with HTTPS
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "TASKTRACK_",
        "extra": "ignore",
    }
