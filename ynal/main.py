#!/usr/bin/env python3
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from ynal.catalog import discover_licenses
from ynal.config import Settings, settings as default_settings
from ynal.middleware.request_log import RequestLogMiddleware
from ynal.rendering import build_environment
from ynal.views import build_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Licenses are loaded and every page is rendered before this returns, so
    any unreadable license or broken template raises here and nothing is
    served.
    """
    settings = settings or default_settings

    env = build_environment(settings.templates_dir)
    licenses = discover_licenses(settings.licenses_dir)

    app = FastAPI(title="ynal", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.licenses = licenses

    app.add_middleware(RequestLogMiddleware, config=settings)

    app.include_router(build_router(licenses, env))

    # Catch-all for static assets, so it must come after the routes above.
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.static_dir)), name="static")
    else:
        logger.warning(f"Static directory not found at {settings.static_dir}. Static files will not be served.")

    logger.info(f"Serving {len(licenses)} license(s): {', '.join(lic.url for lic in licenses)}")
    return app
