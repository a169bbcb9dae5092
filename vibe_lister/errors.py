"""Errors surfaced to API callers.

Each error carries the HTTP status and the public message; upstream detail is
logged where the error is raised and never copied into the message.
"""

from typing import Optional


class VibeListerError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidRequestError(VibeListerError):
    """Raised when the client sends an unusable body."""

    status_code = 400
    message = "Invalid request"


class AuthenticationFailedError(VibeListerError):
    """Raised when the OAuth code exchange fails."""

    status_code = 400
    message = "Authentication failed"


class InvalidSessionError(VibeListerError):
    """Raised when a session id is unknown or expired."""

    status_code = 401
    message = "Invalid session"


class PlaylistGenerationError(VibeListerError):
    status_code = 500
    message = "Server error generating playlist"


class PlaylistCreationError(VibeListerError):
    status_code = 500
    message = "Failed to create playlist"
