"""FastAPI application factory for the dev server.

The bundle directory is mounted at `/` with `html=True`, so `/` serves the
generated index.html next to the wasm-bindgen output.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from rich.console import Console

from run_wasm import __version__
from web.routers import health

logger = logging.getLogger(__name__)

# Browsers refuse WebAssembly.instantiateStreaming without this type.
mimetypes.add_type("application/wasm", ".wasm")
mimetypes.add_type("text/javascript", ".js")


def create_app(bundle_dir: Path, name: str) -> FastAPI:
    """Create the dev server application for a bundle.

    Args:
        bundle_dir: Directory holding index.html and the wasm-bindgen output.
        name: Bundle name, reported by /health.

    Returns:
        Configured FastAPI application.
    """
    application = FastAPI(
        title=f"run-wasm: {name}",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    application.state.bundle_name = name

    # Routes must be registered before the catch-all static mount.
    application.include_router(health.router, tags=["health"])
    application.mount(
        "/",
        StaticFiles(directory=bundle_dir, html=True),
        name="bundle",
    )

    return application


def serve(
    bundle_dir: Path,
    name: str,
    host: str = "localhost",
    port: int = 8000,
    log_level: str = "INFO",
    console: Console | None = None,
) -> None:
    """Serve a bundle until interrupted.

    Args:
        bundle_dir: Directory to serve.
        name: Bundle name.
        host: Host to listen on.
        port: Port to listen on.
        log_level: Log level for the HTTP server.
        console: Console for the startup line; a new one when None.
    """
    if console is None:
        console = Console()
    application = create_app(bundle_dir, name)
    console.print(f"\nServing `{name}` on http://{host}:{port}")
    logger.debug("Serving directory %s", bundle_dir)
    uvicorn.run(application, host=host, port=port, log_level=log_level.lower())


__all__ = ["create_app", "serve"]
