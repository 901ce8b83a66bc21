"""Shared type definitions for run_wasm.

This module contains the dataclasses shared across subpackages to avoid
circular imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from run_wasm.errors import ConfigurationError


@dataclass(frozen=True)
class WorkspaceLocation:
    """Where a Cargo workspace lives and where it writes build output.

    Attributes:
        workspace_root: Directory holding the top-level Cargo.toml.
        target_directory: Directory cargo writes artifacts to.
    """

    workspace_root: Path
    target_directory: Path


@dataclass(frozen=True)
class BuildRequest:
    """What to build and how.

    Exactly one conceptual target is selected. When several selectors are
    given, the binary name comes from example, then bin, then package, and
    all of them are still forwarded to cargo.
    """

    package: str | None = None
    example: str | None = None
    bin: str | None = None
    profile: str | None = None
    features: tuple[str, ...] = ()
    cargo_args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not (self.example or self.bin or self.package):
            raise ConfigurationError(
                "Need to use at least one of `--package NAME`, `--example NAME` "
                "`--bin NAME`.\nRun run-wasm run --help for more info."
            )

    @property
    def binary_name(self) -> str:
        """Name of the produced binary (and of the bundle directory)."""
        return self.example or self.bin or self.package or ""

    @property
    def profile_dir_name(self) -> str:
        """Directory cargo uses for the selected profile."""
        if self.profile is None or self.profile == "dev":
            return "debug"
        return self.profile

    @property
    def is_example(self) -> bool:
        return self.example is not None


@dataclass
class OperationResult:
    """Result of a run_wasm operation, for callers embedding it as a library."""

    success: bool
    message: str
    code: str | None = None
    details: dict[str, object] = field(default_factory=dict)


__all__ = [
    "BuildRequest",
    "OperationResult",
    "WorkspaceLocation",
]
