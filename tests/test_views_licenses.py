"""Tests for the license routes, index page and static files."""

import json

import pytest

from ynal.catalog import DuplicateLicenseError, LicenseLoadError, discover_licenses
from ynal.config import PACKAGE_DIR, Settings
from ynal.main import create_app
from ynal.rendering import TemplateRenderError


@pytest.mark.integration
class TestLicenseRoutes:
    """GET /<slug> with various Accept headers."""

    @pytest.mark.parametrize(
        "accept, content_type",
        [
            ("text/plain", "text/plain"),
            ("text/html", "text/html"),
            ("application/json", "application/json"),
            ("*/*", "text/plain"),
            ("lol/wut", "text/plain"),
            ("text/css, text/plain; q=0.8, text/html; q=0.9", "text/html"),
        ],
    )
    def test_negotiated_content_type(self, client, accept, content_type):
        response = client.get("/mit", headers={"Accept": accept})

        assert response.status_code == 200
        assert response.headers["content-type"] == content_type

    def test_plain_text_body(self, client):
        response = client.get("/mit", headers={"Accept": "text/plain"})
        assert response.content == b"MIT License text"

    def test_json_scenario(self, client):
        response = client.get("/mit", headers={"Accept": "application/json"})

        assert response.content == b'{"title":"MIT","content":"MIT License text","url":"/mit"}'
        assert response.json() == {"title": "MIT", "content": "MIT License text", "url": "/mit"}

    def test_html_body(self, client):
        response = client.get("/mit", headers={"Accept": "text/html"})

        assert "<h1>" in response.text
        assert "MIT License text" in response.text

    def test_missing_accept_header_serves_plain_text(self, client):
        # TestClient sends "*/*" by default; an explicit empty value behaves like a missing header.
        response = client.get("/mit", headers={"Accept": ""})

        assert response.headers["content-type"] == "text/plain"
        assert response.content == b"MIT License text"

    @pytest.mark.parametrize(
        "accept, content_type",
        [("application/json", "application/json"), ("text/html", "text/html"), ("", "text/plain")],
    )
    def test_head_request_is_negotiated(self, client, accept, content_type):
        response = client.head("/mit", headers={"Accept": accept})

        assert response.status_code == 200
        assert response.headers["content-type"] == content_type

    def test_slug_is_case_sensitive(self, client):
        assert client.get("/MIT").status_code == 404

    def test_unknown_license_is_404(self, client):
        assert client.get("/gpl-3.0").status_code == 404

    def test_post_not_served(self, client):
        assert client.post("/mit").status_code in (404, 405)


@pytest.mark.integration
class TestIndexPage:
    """GET / lists every license."""

    def test_index_lists_licenses(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert '<a href="/mit">MIT</a>' in response.text

    def test_index_is_html_whatever_the_accept_header(self, client):
        response = client.get("/", headers={"Accept": "application/json"})
        assert response.headers["content-type"].startswith("text/html")


@pytest.mark.integration
class TestStaticFiles:
    """Anything else is looked up in the static directory."""

    def test_stylesheet_served(self, client):
        response = client.get("/style.css")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/css")

    def test_missing_file_is_404(self, client):
        assert client.get("/nope.css").status_code == 404

    def test_app_without_static_dir(self, settings, tmp_path):
        from fastapi.testclient import TestClient

        settings.static_dir = tmp_path / "no-static"
        with TestClient(create_app(settings)) as client:
            assert client.get("/mit").status_code == 200
            assert client.get("/style.css").status_code == 404


@pytest.mark.integration
class TestBundledLicenses:
    """The licenses shipped with the package."""

    def test_every_bundled_license_round_trips(self, bundled_client):
        for lic in discover_licenses(PACKAGE_DIR / "licenses"):
            plain = bundled_client.get(lic.url, headers={"Accept": "text/plain"})
            as_json = bundled_client.get(lic.url, headers={"Accept": "application/json"})

            assert json.loads(as_json.content)["content"].encode("utf-8") == plain.content

    def test_unlicense_html_is_escaped(self, bundled_client):
        response = bundled_client.get("/unlicense", headers={"Accept": "text/html"})

        assert "&lt;https://unlicense.org&gt;" in response.text


@pytest.mark.integration
class TestStartupFailures:
    """create_app() refuses to build an app from a broken configuration."""

    def test_missing_license_dir(self, tmp_path):
        settings = Settings(licenses_dir=tmp_path / "missing")
        with pytest.raises(LicenseLoadError):
            create_app(settings)

    def test_colliding_licenses(self, license_dir, settings):
        (license_dir / "mit.txt").write_text("duplicate", encoding="utf-8")
        with pytest.raises(DuplicateLicenseError):
            create_app(settings)

    def test_missing_templates(self, settings, tmp_path):
        settings.templates_dir = tmp_path / "no-templates"
        with pytest.raises(TemplateRenderError):
            create_app(settings)

    def test_broken_license_template(self, settings, tmp_path):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "index.html").write_text("ok", encoding="utf-8")
        (templates / "license.html").write_text("{{ license.nope }}", encoding="utf-8")
        settings.templates_dir = templates

        with pytest.raises(TemplateRenderError):
            create_app(settings)

    def test_bundled_templates_exist(self):
        assert (PACKAGE_DIR / "templates" / "license.html").is_file()
        assert (PACKAGE_DIR / "templates" / "index.html").is_file()
