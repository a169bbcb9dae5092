# vibe_lister/spotify.py
from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from vibe_lister.config import Settings
from vibe_lister.schemas import ResolvedTrack

log = logging.getLogger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"
API_BASE = "https://api.spotify.com/v1"
SEARCH_URL = f"{API_BASE}/search"


# ----------------------------
# Token Handling
# ----------------------------
def basic_auth_header(settings: Settings) -> Dict[str, str]:
    auth = base64.b64encode(
        f"{settings.spotify_client_id}:{settings.spotify_client_secret}".encode()
    ).decode()
    return {"Authorization": f"Basic {auth}"}


async def request_token(client: httpx.AsyncClient, settings: Settings, data: Dict[str, str]) -> Dict[str, Any]:
    """POST a grant to the accounts service and return the decoded token payload."""
    r = await client.post(TOKEN_URL, headers=basic_auth_header(settings), data=data)
    r.raise_for_status()
    return r.json()


async def get_catalog_token(client: httpx.AsyncClient, settings: Settings) -> str:
    """Fetch an app-level access token using the Client Credentials Flow."""
    data = await request_token(client, settings, {"grant_type": "client_credentials"})
    return data["access_token"]


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# ----------------------------
# Search & Resolve
# ----------------------------
def _to_resolved(item: Dict[str, Any]) -> ResolvedTrack:
    return ResolvedTrack(
        title=item.get("name", ""),
        artist=", ".join(a.get("name", "") for a in item.get("artists", [])),
        url=(item.get("external_urls") or {}).get("spotify", ""),
        uri=item.get("uri"),
    )


async def resolve_track(client: httpx.AsyncClient, query: str, token: str) -> Optional[ResolvedTrack]:
    """Return the best catalog match for ``query``, or None when nothing usable comes back.

    A failed search is logged and reported as no match so one bad candidate
    never sinks the rest of a batch.
    """
    params = {"q": query, "type": "track", "limit": 1}
    try:
        r = await client.get(SEARCH_URL, headers=bearer(token), params=params)
        r.raise_for_status()
        items = (r.json().get("tracks") or {}).get("items") or []
        if not items:
            log.warning("No Spotify match for: %s", query)
            return None
        return _to_resolved(items[0])
    except Exception as e:
        log.warning("Spotify search failed for: %s (%s)", query, e)
        return None


def pair_query(title: str, artist: str) -> str:
    return f"{title} {artist}"


async def resolve_many(
    client: httpx.AsyncClient,
    queries: Sequence[str],
    token: str,
    concurrency: int = 1,
) -> List[ResolvedTrack]:
    """Resolve every query, keeping input order and dropping misses.

    With ``concurrency`` of 1 the searches run strictly one after another.
    """
    if concurrency <= 1:
        found = []
        for q in queries:
            found.append(await resolve_track(client, q, token))
    else:
        sem = asyncio.Semaphore(concurrency)

        async def _bounded(q: str) -> Optional[ResolvedTrack]:
            async with sem:
                return await resolve_track(client, q, token)

        found = await asyncio.gather(*(_bounded(q) for q in queries))
    return [t for t in found if t is not None]


# ----------------------------
# User & Playlist endpoints
# ----------------------------
async def fetch_spotify_me(client: httpx.AsyncClient, access_token: str) -> Dict[str, Any]:
    r = await client.get(f"{API_BASE}/me", headers=bearer(access_token))
    r.raise_for_status()
    return r.json()


async def create_user_playlist(
    client: httpx.AsyncClient,
    access_token: str,
    user_id: str,
    name: str,
    description: str,
    public: bool = False,
) -> Dict[str, Any]:
    r = await client.post(
        f"{API_BASE}/users/{user_id}/playlists",
        headers=bearer(access_token),
        json={"name": name, "description": description, "public": public},
    )
    r.raise_for_status()
    return r.json()


async def add_tracks_to_playlist(
    client: httpx.AsyncClient, access_token: str, playlist_id: str, uris: List[str]
) -> Dict[str, Any]:
    r = await client.post(
        f"{API_BASE}/playlists/{playlist_id}/tracks",
        headers=bearer(access_token),
        json={"uris": uris},
    )
    r.raise_for_status()
    return r.json()
