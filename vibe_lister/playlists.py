# vibe_lister/playlists.py
# ---------------------------------------------------------------------------
# Request-level orchestration: mood -> generated text -> catalog tracks, and
# session -> new playlist in the user's Spotify account.
# ---------------------------------------------------------------------------
from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from vibe_lister import spotify
from vibe_lister.auth import refresh_session
from vibe_lister.config import Settings
from vibe_lister.errors import (
    InvalidRequestError,
    InvalidSessionError,
    PlaylistCreationError,
    PlaylistGenerationError,
)
from vibe_lister.llm_helper import generate_text
from vibe_lister.parsing import parse_candidates, playlist_name
from vibe_lister.schemas import (
    GeneratePlaylistRequest,
    PlaylistCreationResult,
    PlaylistResult,
    TrackRequest,
)
from vibe_lister.sessions import SessionStore

log = logging.getLogger(__name__)

PLAYLIST_DESCRIPTION = "Created with Vibe Lister"


async def generate_playlist(
    client: httpx.AsyncClient,
    llm: Any,
    settings: Settings,
    req: GeneratePlaylistRequest,
) -> PlaylistResult:
    mood = (req.mood or "").strip()
    if not mood:
        raise InvalidRequestError("Mood is required")

    try:
        raw = await generate_text(llm, req.mood, req.song_count, req.genres, model=settings.openai_model)
        candidates = parse_candidates(raw, req.song_count)
        log.info("Model suggested %d candidate lines for mood %r", len(candidates), mood)

        token = await spotify.get_catalog_token(client, settings)
        tracks = await spotify.resolve_many(
            client, candidates, token, concurrency=settings.resolve_concurrency
        )
    except Exception as e:
        log.exception("Playlist generation failed: %s", e)
        raise PlaylistGenerationError() from e

    return PlaylistResult(playlist_name=playlist_name(raw), tracks=tracks)


def _status_detail(e: Exception) -> str:
    if isinstance(e, httpx.HTTPStatusError):
        return f"{e.response.status_code} {e.response.text}"
    return str(e)


async def create_playlist(
    client: httpx.AsyncClient,
    store: SessionStore,
    settings: Settings,
    session_id: str,
    name: str,
    tracks: Sequence[TrackRequest],
) -> PlaylistCreationResult:
    """Create a private playlist for the session's user and fill it.

    Tracks that cannot be found are skipped, so ``tracks_added`` may be lower
    than ``len(tracks)``.
    """
    session = store.get(session_id)
    if session is None:
        raise InvalidSessionError()

    try:
        session = await refresh_session(client, settings, store, session_id, session)
        token = session.access_token

        me = await spotify.fetch_spotify_me(client, token)
        playlist = await spotify.create_user_playlist(
            client, token, me["id"], name, PLAYLIST_DESCRIPTION, public=False
        )
        playlist_id = playlist["id"]

        resolved = await spotify.resolve_many(
            client,
            [spotify.pair_query(t.title, t.artist) for t in tracks],
            token,
            concurrency=settings.resolve_concurrency,
        )
        uris = [t.uri for t in resolved if t.uri]

        if uris:
            await spotify.add_tracks_to_playlist(client, token, playlist_id, uris)
    except Exception as e:
        log.error("Playlist creation error: %s", _status_detail(e))
        raise PlaylistCreationError() from e

    log.info("Created playlist %s with %d/%d tracks", playlist_id, len(uris), len(tracks))
    return PlaylistCreationResult(
        success=True,
        playlist_url=(playlist.get("external_urls") or {}).get("spotify", ""),
        tracks_added=len(uris),
    )
