"""Build orchestration module.

This module handles:
- Composing and running the cargo wasm build
- Locating the produced artifact
- Running wasm-bindgen
- Rendering the host page
"""

from run_wasm.builds.page import PageTemplate
from run_wasm.builds.service import BundleResult, build_bundle

__all__ = ["BundleResult", "PageTemplate", "build_bundle"]
