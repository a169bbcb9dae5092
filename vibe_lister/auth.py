# vibe_lister/auth.py
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from vibe_lister.config import Settings
from vibe_lister.errors import AuthenticationFailedError
from vibe_lister.sessions import Session, SessionStore, new_session_id
from vibe_lister.spotify import request_token

log = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
SCOPES = "playlist-modify-public playlist-modify-private"
# refresh this many seconds before the access token actually lapses
EXPIRY_MARGIN_SECONDS = 30


# ---- OAuth helpers ----
def build_authorization_url(settings: Settings) -> str:
    return (
        f"{AUTHORIZE_URL}?response_type=code"
        f"&client_id={settings.spotify_client_id}"
        f"&scope={quote(SCOPES, safe='')}"
        f"&redirect_uri={quote(settings.spotify_redirect_uri, safe='')}"
    )


def _expires_at(tokens: Dict[str, Any]) -> int:
    expires_in = tokens.get("expires_in")
    if expires_in is None:
        return 0
    return int(time.time()) + int(expires_in)


def _error_detail(e: Exception) -> Any:
    if isinstance(e, httpx.HTTPStatusError):
        return e.response.text
    return str(e)


async def exchange_code(
    client: httpx.AsyncClient, settings: Settings, store: SessionStore, code: Optional[str]
) -> str:
    """Trade an authorization code for tokens and open a session for them.

    Returns the new session id. Nothing is stored when the exchange fails.
    """
    if not code:
        log.error("OAuth error: missing authorization code")
        raise AuthenticationFailedError()
    try:
        tokens = await request_token(
            client,
            settings,
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": settings.spotify_redirect_uri,
            },
        )
        session = Session(
            access_token=tokens["access_token"],
            refresh_token=tokens.get("refresh_token"),
            expires_at=_expires_at(tokens),
        )
    except (httpx.HTTPError, KeyError, ValueError) as e:
        log.error("OAuth error: %s", _error_detail(e))
        raise AuthenticationFailedError() from e

    sid = new_session_id()
    store.put(sid, session)
    log.info("Opened Spotify session %s…", sid[:6])
    return sid


def is_expired(session: Session) -> bool:
    if not session.expires_at:
        return False
    return session.expires_at - int(time.time()) <= EXPIRY_MARGIN_SECONDS


async def refresh_session(
    client: httpx.AsyncClient, settings: Settings, store: SessionStore, sid: str, session: Session
) -> Session:
    """Return a session whose access token is usable, refreshing it if needed."""
    if not is_expired(session) or not session.refresh_token:
        return session
    tokens = await request_token(
        client,
        settings,
        {"grant_type": "refresh_token", "refresh_token": session.refresh_token},
    )
    fresh = session.model_copy(
        update={
            "access_token": tokens["access_token"],
            # carry forward refresh_token if not returned
            "refresh_token": tokens.get("refresh_token") or session.refresh_token,
            "expires_at": _expires_at(tokens),
        }
    )
    store.put(sid, fresh)
    log.info("Refreshed access token for session %s…", sid[:6])
    return fresh
