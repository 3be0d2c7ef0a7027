"""
Startup rendering of license representations and the index page.
"""

import json
from pathlib import Path
from typing import Sequence, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from ynal.catalog import LicenseData

LICENSE_TEMPLATE = "license.html"
INDEX_TEMPLATE = "index.html"


class TemplateRenderError(RuntimeError):
    """Raised when a page template cannot be loaded or rendered."""


def build_environment(templates_dir: Union[str, Path]) -> Environment:
    """Create the Jinja2 environment used for all HTML pages."""
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=True,
        undefined=StrictUndefined,
    )


def _render(env: Environment, name: str, **context) -> bytes:
    try:
        return env.get_template(name).render(**context).encode("utf-8")
    except TemplateError as exc:
        raise TemplateRenderError(f"could not render {name}: {exc}") from exc


def render_html(license: LicenseData, env: Environment) -> bytes:
    """Render the HTML page for a license. Title, text and URL are escaped."""
    return _render(env, LICENSE_TEMPLATE, license=license)


def render_json(license: LicenseData) -> bytes:
    """Render the JSON document for a license."""
    return json.dumps(license.as_dict(), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def render_index(licenses: Sequence[LicenseData], env: Environment) -> bytes:
    """Render the index page listing every license."""
    return _render(env, INDEX_TEMPLATE, licenses=licenses)
