"""Workspace discovery module.

This module handles:
- Querying `cargo metadata` for the authoritative directories
- Finding the workspace by walking ancestor directories
- Racing the two, preferring the cheap walk
"""

from run_wasm.workspace.metadata import CargoMetadata, query_cargo_metadata
from run_wasm.workspace.resolver import find_workspace_heuristic, resolve_directories

__all__ = [
    "CargoMetadata",
    "find_workspace_heuristic",
    "query_cargo_metadata",
    "resolve_directories",
]
