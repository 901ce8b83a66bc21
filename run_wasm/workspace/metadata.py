"""Query `cargo metadata` for the workspace directories.

This is the authoritative source for the workspace root and target
directory, but spawning cargo costs tens of milliseconds, so the resolver
only waits on it when the ancestor walk finds nothing.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from run_wasm.errors import ResolutionError
from run_wasm.types import WorkspaceLocation

logger = logging.getLogger(__name__)


class CargoMetadata(BaseModel):
    """The subset of `cargo metadata --format-version=1` output we use."""

    model_config = ConfigDict(extra="ignore", strict=True)

    target_directory: str
    workspace_root: str

    def to_location(self) -> WorkspaceLocation:
        """Convert to a WorkspaceLocation."""
        return WorkspaceLocation(
            workspace_root=Path(self.workspace_root),
            target_directory=Path(self.target_directory),
        )


def metadata_command(cargo: str) -> list[str]:
    """Compose the `cargo metadata` command.

    Args:
        cargo: Cargo executable.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    return [cargo, "metadata", "--no-deps", "--format-version=1"]


def parse_metadata(text: str) -> CargoMetadata:
    """Parse `cargo metadata` JSON output.

    Args:
        text: Raw stdout of the metadata command.

    Returns:
        Parsed CargoMetadata.

    Raises:
        ResolutionError: If the output is not JSON or lacks the expected fields.
    """
    try:
        return CargoMetadata.model_validate_json(text)
    except ValidationError as e:
        raise ResolutionError(
            f"Unexpected `cargo metadata` output: {e.error_count()} error(s), "
            f"first: {e.errors()[0]['msg']}"
        ) from e


def query_cargo_metadata(cargo: str, manifest_dir: Path) -> WorkspaceLocation:
    """Run `cargo metadata` and return the directories it reports.

    Args:
        cargo: Cargo executable.
        manifest_dir: Directory to run cargo in.

    Returns:
        WorkspaceLocation from cargo's output.

    Raises:
        ResolutionError: If cargo cannot be run, fails, or prints bad output.
    """
    cmd = metadata_command(cargo)
    logger.debug("Querying metadata: %s (cwd=%s)", shlex.join(cmd), manifest_dir)

    try:
        result = subprocess.run(
            cmd,
            cwd=manifest_dir,
            capture_output=True,
            encoding="utf-8",
            check=False,
        )
    except OSError as e:
        raise ResolutionError(f"Failed to run {cargo} metadata: {e}") from e
    except UnicodeDecodeError as e:
        raise ResolutionError(
            f"`cargo metadata` output is not valid UTF-8: {e}"
        ) from e

    if result.returncode != 0:
        raise ResolutionError(
            f"`cargo metadata` failed with exit code {result.returncode}: "
            f"{result.stderr.strip()}"
        )

    return parse_metadata(result.stdout).to_location()


__all__ = [
    "CargoMetadata",
    "metadata_command",
    "parse_metadata",
    "query_cargo_metadata",
]
