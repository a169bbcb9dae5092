# vibe_lister/sessions.py
from __future__ import annotations

import abc
import secrets
import time
from typing import Callable, Dict, Optional

from pydantic import BaseModel


class Session(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    # epoch seconds; 0 means the lifetime was not reported
    expires_at: int = 0
    created_at: int = 0


def new_session_id() -> str:
    return secrets.token_urlsafe(24)


class SessionStore(abc.ABC):
    """Maps opaque session ids to the OAuth credentials of a connected user."""

    @abc.abstractmethod
    def put(self, sid: str, session: Session) -> None: ...

    @abc.abstractmethod
    def get(self, sid: str) -> Optional[Session]: ...

    @abc.abstractmethod
    def expire(self, sid: str) -> None: ...


class InMemorySessionStore(SessionStore):
    """Process-local store; everything is lost on restart.

    Sessions older than ``ttl_seconds`` are dropped on lookup. A ttl of 0
    keeps them until the process exits.
    """

    def __init__(self, ttl_seconds: int = 0, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: Dict[str, Session] = {}

    def put(self, sid: str, session: Session) -> None:
        if not session.created_at:
            session = session.model_copy(update={"created_at": int(self._clock())})
        self._sessions[sid] = session

    def get(self, sid: str) -> Optional[Session]:
        if not sid:
            return None
        rec = self._sessions.get(sid)
        if rec is None:
            return None
        if self.ttl_seconds and int(self._clock()) - rec.created_at > self.ttl_seconds:
            self._sessions.pop(sid, None)
            return None
        return rec

    def expire(self, sid: str) -> None:
        self._sessions.pop(sid, None)

    def __len__(self) -> int:
        return len(self._sessions)
