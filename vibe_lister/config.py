# vibe_lister/config.py
from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv, find_dotenv
from pydantic import BaseModel

load_dotenv(find_dotenv(), override=False)

DEFAULT_REDIRECT_URI = "https://vibe-lister-ui.onrender.com"
DEFAULT_PORT = 3001


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Settings(BaseModel):
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_redirect_uri: str = DEFAULT_REDIRECT_URI
    openai_api_key: str = ""
    openai_model: str = "gpt-4"

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_origins: List[str] = ["*"]

    # 0 keeps sessions until restart
    session_ttl_seconds: int = 86400
    resolve_concurrency: int = 1
    http_timeout_seconds: float = 15.0

    log_level: str = "INFO"
    log_format: str = "text"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            spotify_client_id=os.getenv("SPOTIFY_CLIENT_ID", ""),
            spotify_client_secret=os.getenv("SPOTIFY_CLIENT_SECRET", ""),
            spotify_redirect_uri=os.getenv("SPOTIFY_REDIRECT_URI") or DEFAULT_REDIRECT_URI,
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL") or "gpt-4",
            host=os.getenv("HOST", "0.0.0.0"),
            port=_get_int("PORT", DEFAULT_PORT),
            cors_origins=_get_csv_list("CORS_ORIGINS", "*"),
            session_ttl_seconds=max(0, _get_int("SESSION_TTL_SECONDS", 86400)),
            resolve_concurrency=max(1, _get_int("RESOLVE_CONCURRENCY", 1)),
            http_timeout_seconds=_get_float("HTTP_TIMEOUT_SECONDS", 15.0),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("LOG_FORMAT", "text").strip().lower(),
        )
