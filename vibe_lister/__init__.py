"""Vibe Lister: mood-based playlists from OpenAI suggestions resolved on Spotify."""

__version__ = "1.0.0"
