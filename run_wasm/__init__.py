"""run-wasm - Build a Cargo binary or example for the web and serve it.

This package wraps cargo and wasm-bindgen: it locates the workspace's target
directory, compiles to wasm32-unknown-unknown, generates the JS loader and an
index.html host page, and serves the bundle on a local dev server.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
