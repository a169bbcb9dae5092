# vibe_lister/fastapi_app.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional
from uuid import uuid4

import httpx
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vibe_lister import __version__
from vibe_lister.auth import build_authorization_url, exchange_code
from vibe_lister.config import Settings
from vibe_lister.errors import VibeListerError
from vibe_lister.llm_helper import make_llm_client
from vibe_lister.observability import request_id_var
from vibe_lister.playlists import create_playlist, generate_playlist
from vibe_lister.schemas import (
    AuthCallbackRequest,
    AuthCallbackResponse,
    AuthUrlResponse,
    CreatePlaylistRequest,
    GeneratePlaylistRequest,
    LogoutRequest,
    PlaylistCreationResult,
    PlaylistResult,
)
from vibe_lister.sessions import InMemorySessionStore, SessionStore

log = logging.getLogger(__name__)


# ----------------------------------
# Dependencies
# ----------------------------------
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_http(request: Request) -> httpx.AsyncClient:
    return request.app.state.http


def get_llm(request: Request) -> Any:
    return request.app.state.llm


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


# ----------------------------------
# Playlist generation / creation
# ----------------------------------
router_playlists = APIRouter(tags=["playlists"])


@router_playlists.post("/generate-playlist", response_model=PlaylistResult)
async def api_generate_playlist(
    body: GeneratePlaylistRequest,
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http),
    llm: Any = Depends(get_llm),
):
    return await generate_playlist(http, llm, settings, body)


@router_playlists.post("/create-spotify-playlist", response_model=PlaylistCreationResult)
async def api_create_spotify_playlist(
    body: CreatePlaylistRequest,
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http),
    sessions: SessionStore = Depends(get_sessions),
):
    return await create_playlist(
        http, sessions, settings, body.session_id, body.playlist_name, body.tracks
    )


# ----------------------------------
# OAuth Login Flow
# ----------------------------------
router_auth = APIRouter(prefix="/auth", tags=["spotify auth"])


@router_auth.get("/spotify", response_model=AuthUrlResponse)
def spotify_login(settings: Settings = Depends(get_settings)):
    return AuthUrlResponse(auth_url=build_authorization_url(settings))


@router_auth.post("/callback", response_model=AuthCallbackResponse)
async def spotify_callback(
    body: AuthCallbackRequest,
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http),
    sessions: SessionStore = Depends(get_sessions),
):
    sid = await exchange_code(http, settings, sessions, body.code)
    return AuthCallbackResponse(session_id=sid)


@router_auth.post("/logout")
def logout(body: LogoutRequest, sessions: SessionStore = Depends(get_sessions)):
    if body.session_id:
        sessions.expire(body.session_id)
    return {"ok": True}


# ----------------------------------
# Error mapping
# ----------------------------------
async def _handle_service_error(request: Request, exc: VibeListerError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    log.info("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ----------------------------------
# App
# ----------------------------------
def create_app(
    settings: Optional[Settings] = None,
    http: Optional[httpx.AsyncClient] = None,
    llm: Any = None,
    sessions: Optional[SessionStore] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    owns_http = http is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_http:
            await app.state.http.aclose()

    app = FastAPI(
        title="Vibe Lister API",
        version=__version__,
        description="Mood-based playlist generation backed by OpenAI and Spotify.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.http = http if http is not None else httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    app.state.llm = llm if llm is not None else make_llm_client(settings)
    app.state.sessions = (
        sessions if sessions is not None else InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    @app.middleware("http")
    async def _request_id(request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or uuid4().hex
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers.setdefault("X-Request-ID", rid)
        return response

    app.add_exception_handler(VibeListerError, _handle_service_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)

    app.include_router(router_playlists)
    app.include_router(router_auth)

    # Utility routes
    @app.get("/")
    def root():
        return {"service": "vibe-lister", "status": "ok"}

    @app.get("/health")
    def health():
        return {"ok": True}

    return app
