"""Build service module.

This module provides the high-level build API:
- build_bundle(): compile, post-process and write the host page

Steps run strictly in order and stop at the first failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from run_wasm.builds.artifacts import (
    artifact_path,
    bundle_dir,
    verify_artifact,
    wasm_target_dir,
)
from run_wasm.builds.bindgen import run_bindgen
from run_wasm.builds.page import PageTemplate
from run_wasm.builds.runner import run_cargo_build, validate_cargo_args
from run_wasm.errors import PostProcessingError
from run_wasm.types import BuildRequest, WorkspaceLocation

logger = logging.getLogger(__name__)


@dataclass
class BundleResult:
    """Result of a successful bundle build.

    Attributes:
        name: Binary name, also the bundle directory name.
        artifact_path: The .wasm file cargo produced.
        bundle_dir: Directory ready to be served.
        index_path: The generated host page.
    """

    name: str
    artifact_path: Path
    bundle_dir: Path
    index_path: Path


def build_bundle(
    location: WorkspaceLocation,
    request: BuildRequest,
    *,
    cargo: str = "cargo",
    wasm_bindgen: str = "wasm-bindgen",
    page: PageTemplate | None = None,
) -> BundleResult:
    """Build a request into a servable bundle.

    Args:
        location: Resolved workspace directories.
        request: What to build.
        cargo: Cargo executable.
        wasm_bindgen: wasm-bindgen executable.
        page: Host page template; the default template when None.

    Returns:
        BundleResult describing the written bundle.

    Raises:
        ConfigurationError: If the request carries banned cargo flags.
        ToolchainError: If cargo fails.
        ArtifactMissingError: If cargo succeeded without producing the .wasm.
        PostProcessingError: If wasm-bindgen fails or the bundle cannot be
            written.
    """
    if page is None:
        page = PageTemplate()

    validate_cargo_args(request.cargo_args)

    run_cargo_build(
        cargo,
        request,
        workspace_root=location.workspace_root,
        wasm_target_dir=wasm_target_dir(location),
    )

    wasm_source = verify_artifact(artifact_path(location, request))

    dest = bundle_dir(location, request)
    try:
        dest.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PostProcessingError(
            f"Failed to create bundle directory {dest}: {e}"
        ) from e

    run_bindgen(wasm_bindgen, wasm_source, dest)

    try:
        index_path = page.write(dest, request.binary_name)
    except OSError as e:
        raise PostProcessingError(f"Failed to write the host page: {e}") from e

    logger.info("Bundle for %s written to %s", request.binary_name, dest)
    return BundleResult(
        name=request.binary_name,
        artifact_path=wasm_source,
        bundle_dir=dest,
        index_path=index_path,
    )


__all__ = ["BundleResult", "build_bundle"]
