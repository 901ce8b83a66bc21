"""Resolve the workspace root and target directory.

`cargo metadata` is started speculatively on a worker thread while we walk
up from the manifest directory looking for a `target` directory next to a
`Cargo.toml`. The walk wins whenever it finds something; the metadata query
is then abandoned and its outcome ignored.

The walk only misses when cargo was told to use a different target
directory (e.g. CARGO_TARGET_DIR): a target directory must already exist
for this tool to have been built, and packages can only live below their
workspace root.

Known limitation: an unused directory named `target` next to a stray
`Cargo.toml` is accepted as a match.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from run_wasm.types import WorkspaceLocation
from run_wasm.workspace.metadata import query_cargo_metadata

logger = logging.getLogger(__name__)

TARGET_DIR_NAME = "target"
MANIFEST_NAME = "Cargo.toml"


def find_workspace_heuristic(manifest_dir: Path) -> WorkspaceLocation | None:
    """Find the workspace by walking ancestor directories.

    Args:
        manifest_dir: Directory of the package's Cargo.toml.

    Returns:
        WorkspaceLocation of the first ancestor (manifest_dir included) holding
        both a target directory and a Cargo.toml, or None.
    """
    start = manifest_dir.absolute()
    for candidate in (start, *start.parents):
        target = candidate / TARGET_DIR_NAME
        if target.exists() and (candidate / MANIFEST_NAME).exists():
            return WorkspaceLocation(workspace_root=candidate, target_directory=target)
    return None


def resolve_directories(manifest_dir: Path, cargo: str = "cargo") -> WorkspaceLocation:
    """Resolve the workspace directories.

    Args:
        manifest_dir: Directory of the package's Cargo.toml.
        cargo: Cargo executable.

    Returns:
        WorkspaceLocation for the workspace.

    Raises:
        ResolutionError: If the walk finds nothing and `cargo metadata` fails.
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="cargo-metadata")
    query: Future[WorkspaceLocation] = executor.submit(
        query_cargo_metadata, cargo, manifest_dir
    )
    try:
        location = find_workspace_heuristic(manifest_dir)
        if location is not None:
            query.cancel()
            logger.debug(
                "Found workspace by directory walk: %s", location.workspace_root
            )
            return location

        logger.debug("Directory walk found nothing, waiting for cargo metadata")
        location = query.result()
        logger.debug("cargo metadata reported workspace: %s", location.workspace_root)
        return location
    finally:
        executor.shutdown(wait=False)


__all__ = [
    "MANIFEST_NAME",
    "TARGET_DIR_NAME",
    "find_workspace_heuristic",
    "resolve_directories",
]
