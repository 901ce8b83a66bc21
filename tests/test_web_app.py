"""Tests for the dev server application.

Uses TestClient against a bundle directory in tmp_path.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from run_wasm import __version__
from run_wasm.builds.page import PageTemplate
from web.app import create_app, serve


@pytest.fixture
def bundle(tmp_path):
    """Create a bundle directory like build_bundle would."""
    PageTemplate().write(tmp_path, "demo")
    (tmp_path / "demo.js").write_text("export default async function init() {}")
    (tmp_path / "demo_bg.wasm").write_bytes(b"\0asm\x01\0\0\0")
    return tmp_path


@pytest.fixture
def client(bundle):
    """Create a test client for the bundle."""
    with TestClient(create_app(bundle, "demo")) as test_client:
        yield test_client


class TestHealth:
    """Tests for /health."""

    def test_health(self, client):
        """Should report status, version and bundle name."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "version": __version__,
            "bundle": "demo",
        }


class TestStaticFiles:
    """Tests for bundle serving."""

    def test_index(self, client):
        """/ should serve the generated page."""
        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "./demo.js" in response.text

    def test_wasm_content_type(self, client):
        """.wasm files should be served as application/wasm."""
        response = client.get("/demo_bg.wasm")
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/wasm"
        assert response.content.startswith(b"\0asm")

    def test_js_content_type(self, client):
        """The loader should be served as JavaScript."""
        response = client.get("/demo.js")
        assert response.status_code == 200
        assert "javascript" in response.headers["content-type"]

    def test_missing_file(self, client):
        """Unknown paths should 404."""
        assert client.get("/nope.js").status_code == 404


class TestServe:
    """Tests for serve."""

    def test_runs_uvicorn(self, bundle):
        """Should hand the app and address to uvicorn."""
        with patch("web.app.uvicorn.run") as mock_run:
            serve(bundle, "demo", host="127.0.0.1", port=8123, log_level="DEBUG")

        args, kwargs = mock_run.call_args
        assert args[0].state.bundle_name == "demo"
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8123
        assert kwargs["log_level"] == "debug"
