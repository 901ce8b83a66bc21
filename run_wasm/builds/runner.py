"""Cargo runner for wasm builds.

This module handles:
- Validating caller-supplied cargo flags
- Composing the `cargo build` command for the wasm target
- Executing the build with subprocess

Cargo's own output goes straight to the terminal; on failure it has already
explained itself, so we only report that the build failed.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Iterable
from pathlib import Path

from run_wasm.errors import ConfigurationError, ToolchainError
from run_wasm.types import BuildRequest

logger = logging.getLogger(__name__)

WASM_TARGET = "wasm32-unknown-unknown"

# We set these ourselves and rely on them to find the artifact.
BANNED_CARGO_ARGS = ("--target", "--target-dir")


def resolve_profile(release: bool, profile: str | None) -> str | None:
    """Combine the --release and --profile options into one profile.

    Args:
        release: Whether --release was given.
        profile: Value of --profile, if given.

    Returns:
        Profile name, or None for cargo's default.

    Raises:
        ConfigurationError: If both options were given.
    """
    if release and profile is not None:
        raise ConfigurationError(
            "conflicting usage of --profile and --release.\n"
            "The `--release` flag is the same as `--profile=release`.\n"
            "Remove one flag or the other to continue."
        )
    if release:
        return "release"
    return profile


def validate_cargo_args(args: Iterable[str]) -> None:
    """Reject passthrough flags that would override our own.

    Args:
        args: Extra cargo arguments.

    Raises:
        ConfigurationError: If a banned option is present.
    """
    for arg in args:
        option = arg.split("=", 1)[0]
        if option in BANNED_CARGO_ARGS:
            raise ConfigurationError(f"run-wasm does not support the {option} option")


def compose_cargo_command(
    cargo: str,
    request: BuildRequest,
    wasm_target_dir: Path,
) -> list[str]:
    """Compose the `cargo build` command for a request.

    Args:
        cargo: Cargo executable.
        request: What to build.
        wasm_target_dir: Target directory for wasm builds.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    # Native builds often set linker flags that don't apply to wasm, and
    # differing RUSTFLAGS force a full rebuild, so wasm gets its own target dir.
    cmd = [
        cargo,
        "build",
        "--target",
        WASM_TARGET,
        "--target-dir",
        str(wasm_target_dir),
    ]

    if request.package:
        cmd.extend(["--package", request.package])
    if request.example:
        cmd.extend(["--example", request.example])
    if request.bin:
        cmd.extend(["--bin", request.bin])
    if request.profile:
        cmd.extend(["--profile", request.profile])
    if request.features:
        cmd.extend(["--features", ",".join(request.features)])

    cmd.extend(request.cargo_args)
    return cmd


def run_cargo_build(
    cargo: str,
    request: BuildRequest,
    workspace_root: Path,
    wasm_target_dir: Path,
) -> None:
    """Build a request with cargo.

    Args:
        cargo: Cargo executable.
        request: What to build.
        workspace_root: Directory to run cargo in.
        wasm_target_dir: Target directory for wasm builds.

    Raises:
        ToolchainError: If cargo cannot be started or exits non-zero.
    """
    cmd = compose_cargo_command(cargo, request, wasm_target_dir)

    logger.info("Executing build: %s", shlex.join(cmd))
    logger.debug("Working directory: %s", workspace_root)

    try:
        result = subprocess.run(cmd, cwd=workspace_root, check=False)
    except OSError as e:
        raise ToolchainError(f"Failed to execute {cargo}: {e}") from e

    if result.returncode != 0:
        logger.debug("cargo exited with code %d", result.returncode)
        raise ToolchainError(exit_code=result.returncode)


__all__ = [
    "BANNED_CARGO_ARGS",
    "WASM_TARGET",
    "compose_cargo_command",
    "resolve_profile",
    "run_cargo_build",
    "validate_cargo_args",
]
