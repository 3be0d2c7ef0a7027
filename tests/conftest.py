"""
Pytest configuration and shared fixtures for ynal tests.
"""

import os
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Keep a developer's .env or shell settings from leaking into the tests.
for _key in [k for k in os.environ if k.startswith("YNAL_")]:
    del os.environ[_key]

from ynal.config import PACKAGE_DIR, Settings  # noqa: E402
from ynal.main import create_app  # noqa: E402


@pytest.fixture
def license_dir(tmp_path: Path) -> Path:
    """A license directory holding a single MIT.txt."""
    directory = tmp_path / "licenses"
    directory.mkdir()
    (directory / "MIT.txt").write_text("MIT License text", encoding="utf-8")
    return directory


@pytest.fixture
def settings(license_dir: Path) -> Settings:
    """Settings pointing at the temporary license directory and the bundled templates."""
    return Settings(
        licenses_dir=license_dir,
        templates_dir=PACKAGE_DIR / "templates",
        static_dir=PACKAGE_DIR / "static",
    )


@pytest.fixture
def client(settings: Settings) -> TestClient:
    """Test client for an app serving the temporary licenses."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def bundled_client() -> TestClient:
    """Test client for an app serving the licenses shipped with the package."""
    with TestClient(create_app(Settings())) as test_client:
        yield test_client


# Markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual functions/methods")
    config.addinivalue_line("markers", "integration: Integration tests for API endpoints and workflows")
