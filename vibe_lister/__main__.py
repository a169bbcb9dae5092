# vibe_lister/__main__.py
import logging

import uvicorn

from vibe_lister.config import Settings
from vibe_lister.fastapi_app import create_app
from vibe_lister.observability import configure_logging

log = logging.getLogger("vibe_lister")


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_format)
    if not settings.spotify_client_id or not settings.spotify_client_secret:
        log.warning("SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET not set; Spotify calls will fail")
    if not settings.openai_api_key:
        log.warning("OPENAI_API_KEY not set; playlist generation will fail")

    app = create_app(settings)
    log.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
