"""
License routes and the index page.
"""
import logging
from typing import Sequence

from fastapi import APIRouter, Request, Response
from fastapi.responses import HTMLResponse
from jinja2 import Environment

from ynal.catalog import LicenseData
from ynal.handlers import LicenseHandler
from ynal.rendering import render_index

logger = logging.getLogger(__name__)


def _license_endpoint(handler: LicenseHandler):
    async def serve_license(request: Request) -> Response:
        return handler.respond(request.headers.get("accept", ""))

    return serve_license


def build_router(licenses: Sequence[LicenseData], env: Environment) -> APIRouter:
    """
    Create a router serving every license plus the index page.

    All pages are rendered here, before the router is returned, so a broken
    template or license stops the application from starting.

    Args:
        licenses: Licenses to expose, one route each.
        env: Jinja2 environment holding the page templates.

    Returns:
        APIRouter with ``GET /`` and ``GET /<slug>`` routes.
    """
    router = APIRouter()

    index_page = render_index(licenses, env)

    @router.get("/", include_in_schema=False)
    async def serve_index(request: Request):
        """Serve the license index."""
        return HTMLResponse(content=index_page)

    for license in licenses:
        handler = LicenseHandler.for_license(license, env)
        router.add_api_route(
            license.url,
            _license_endpoint(handler),
            methods=["GET", "HEAD"],
            response_class=Response,
            include_in_schema=False,
            name=f"license:{license.title}",
        )
        logger.debug(f"Registered {license.title} at {license.url}")

    return router
