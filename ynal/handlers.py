"""
Per-license request handling.

A LicenseHandler holds the three representations of one license, rendered
once at startup, and picks one per request from the ``Accept`` header.
"""

import logging
from typing import Dict

from fastapi import Response, status
from fastapi.responses import PlainTextResponse
from jinja2 import Environment

from ynal.catalog import LicenseData
from ynal.negotiation import MediaType, resolve
from ynal.rendering import render_html, render_json

logger = logging.getLogger(__name__)


class LicenseHandler:
    """
    Serve one license as plain text, HTML or JSON.

    The bodies are immutable bytes shared by all requests; nothing is
    rendered at request time.
    """

    def __init__(self, plain: bytes, html: bytes, json: bytes) -> None:
        self._bodies: Dict[MediaType, bytes] = {
            MediaType.PLAIN: plain,
            MediaType.HTML: html,
            MediaType.JSON: json,
        }

    @classmethod
    def for_license(cls, license: LicenseData, env: Environment) -> "LicenseHandler":
        """
        Render every representation of ``license`` and build its handler.

        Raises:
            TemplateRenderError: If the HTML page cannot be rendered.
        """
        return cls(
            plain=license.text.encode("utf-8"),
            html=render_html(license, env),
            json=render_json(license),
        )

    def body_for(self, media_type: MediaType) -> bytes:
        """Return the pre-rendered body served for ``media_type``."""
        return self._bodies[media_type]

    def respond(self, accept: str) -> Response:
        """
        Build the response for a request carrying ``accept``.

        Args:
            accept: Raw ``Accept`` header value, empty if absent.

        Returns:
            The negotiated representation, or a 406 if no body is held for
            the negotiated type.
        """
        media_type = resolve(accept)
        body = self._bodies.get(media_type)
        if body is None:
            logger.warning(f"No representation for negotiated type {media_type.value}")
            return PlainTextResponse(
                f"unrecognized media type: {media_type.value}",
                status_code=status.HTTP_406_NOT_ACCEPTABLE,
            )

        # Set the header directly so Starlette does not append a charset.
        return Response(content=body, headers={"Content-Type": media_type.value})
