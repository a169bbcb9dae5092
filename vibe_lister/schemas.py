from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeneratePlaylistRequest(_CamelModel):
    # checked in the handler so a missing mood maps to 400, not 422
    mood: Optional[str] = None
    song_count: int = Field(default=10, ge=1)
    genres: List[str] = Field(default_factory=list)


class ResolvedTrack(_CamelModel):
    title: str
    artist: str
    url: str
    uri: Optional[str] = Field(default=None, exclude=True)


class PlaylistResult(_CamelModel):
    playlist_name: str
    tracks: List[ResolvedTrack]


class AuthUrlResponse(_CamelModel):
    auth_url: str


class AuthCallbackRequest(_CamelModel):
    code: Optional[str] = None


class AuthCallbackResponse(_CamelModel):
    session_id: str


class LogoutRequest(_CamelModel):
    session_id: Optional[str] = None


class TrackRequest(_CamelModel):
    title: str
    artist: str = ""


class CreatePlaylistRequest(_CamelModel):
    session_id: Optional[str] = None
    playlist_name: str
    tracks: List[TrackRequest] = Field(default_factory=list)


class PlaylistCreationResult(_CamelModel):
    success: bool
    playlist_url: str
    tracks_added: int
