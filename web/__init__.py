"""FastAPI dev server for run-wasm bundles.

Serves a generated bundle directory as static files. All build logic lives
in run_wasm/; this package only hosts the result.
"""

from web.app import create_app, serve

__all__ = ["create_app", "serve"]
