# vibe_lister/ui_client.py
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Sequence

import requests

DEFAULT_API_BASE = "http://127.0.0.1:3001"


class ApiError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class VibeListerClient:
    """Thin blocking client for the Vibe Lister HTTP API, used by the Streamlit page."""

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None, timeout: float = 60):
        self.base_url = (base_url or os.getenv("VIBE_LISTER_API", DEFAULT_API_BASE)).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _call(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        r = self.session.request(method, f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        try:
            data = r.json()
        except ValueError:
            data = {}
        if r.status_code >= 400:
            raise ApiError(r.status_code, data.get("error") or r.reason or "Request failed")
        return data

    def generate_playlist(self, mood: str, song_count: int = 10, genres: Sequence[str] = ()) -> Dict[str, Any]:
        return self._call(
            "POST",
            "/generate-playlist",
            {"mood": mood, "songCount": song_count, "genres": list(genres)},
        )

    def auth_url(self) -> str:
        return self._call("GET", "/auth/spotify")["authUrl"]

    def exchange_code(self, code: str) -> str:
        return self._call("POST", "/auth/callback", {"code": code})["sessionId"]

    def create_playlist(self, session_id: str, name: str, tracks: List[Dict[str, str]]) -> Dict[str, Any]:
        return self._call(
            "POST",
            "/create-spotify-playlist",
            {
                "sessionId": session_id,
                "playlistName": name,
                "tracks": [{"title": t["title"], "artist": t["artist"]} for t in tracks],
            },
        )

    def logout(self, session_id: str) -> None:
        self._call("POST", "/auth/logout", {"sessionId": session_id})
