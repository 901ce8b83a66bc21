"""Artifact and bundle locations.

All paths are derived from the workspace's target directory. Artifacts:

    <target>/wasm-examples-target/wasm32-unknown-unknown/<profile>/<name>.wasm
    <target>/wasm-examples-target/wasm32-unknown-unknown/<profile>/examples/<name>.wasm

Bundles:

    <target>/wasm-examples/<name>/
"""

from __future__ import annotations

import logging
from pathlib import Path

from run_wasm.builds.runner import WASM_TARGET
from run_wasm.errors import ArtifactMissingError
from run_wasm.types import BuildRequest, WorkspaceLocation

logger = logging.getLogger(__name__)

WASM_TARGET_DIR_NAME = "wasm-examples-target"
BUNDLES_DIR_NAME = "wasm-examples"
WASM_EXTENSION = ".wasm"


def wasm_target_dir(location: WorkspaceLocation) -> Path:
    """Return the target directory used for wasm builds."""
    return location.target_directory / WASM_TARGET_DIR_NAME


def bundle_dir(location: WorkspaceLocation, request: BuildRequest) -> Path:
    """Return the directory the served bundle is written to."""
    return location.target_directory / BUNDLES_DIR_NAME / request.binary_name


def artifact_path(location: WorkspaceLocation, request: BuildRequest) -> Path:
    """Return where cargo writes the .wasm file for a request.

    Args:
        location: Workspace directories.
        request: What was built.

    Returns:
        Path of the expected .wasm artifact.
    """
    profile_dir = wasm_target_dir(location) / WASM_TARGET / request.profile_dir_name
    if request.is_example:
        profile_dir = profile_dir / "examples"
    return profile_dir / f"{request.binary_name}{WASM_EXTENSION}"


def verify_artifact(path: Path) -> Path:
    """Check that a build produced its artifact.

    Args:
        path: Expected artifact path.

    Returns:
        The same path.

    Raises:
        ArtifactMissingError: If nothing exists at path.
    """
    if not path.is_file():
        logger.debug("Expected artifact not found: %s", path)
        raise ArtifactMissingError(path)
    return path


__all__ = [
    "BUNDLES_DIR_NAME",
    "WASM_EXTENSION",
    "WASM_TARGET_DIR_NAME",
    "artifact_path",
    "bundle_dir",
    "verify_artifact",
    "wasm_target_dir",
]
