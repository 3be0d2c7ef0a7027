"""Entry point for the ynal license server."""

import logging

import uvicorn

from ynal.config import Settings
from ynal.main import create_app


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def main() -> None:
    """Load settings, build the app and serve it until interrupted."""
    settings = Settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("ynal")

    host, port = settings.host, settings.port
    app = create_app(settings)

    logger.info(f"Listening on http://{host}:{port}")
    # uvicorn logs requests through RequestLogMiddleware instead
    uvicorn.run(app, host=host, port=port, access_log=False, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
