"""Run wasm-bindgen on a built artifact.

Generates the ES module loader (`<name>.js`) and the processed
`<name>_bg.wasm` next to it, targeting plain browsers without a bundler.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path

from run_wasm.errors import PostProcessingError

logger = logging.getLogger(__name__)


def bindgen_command(wasm_bindgen: str, artifact: Path, out_dir: Path) -> list[str]:
    """Compose the wasm-bindgen command.

    Args:
        wasm_bindgen: wasm-bindgen executable.
        artifact: .wasm file produced by cargo.
        out_dir: Directory to write the loader code to.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    return [
        wasm_bindgen,
        "--target",
        "web",
        "--no-typescript",
        "--out-dir",
        str(out_dir),
        str(artifact),
    ]


def run_bindgen(wasm_bindgen: str, artifact: Path, out_dir: Path) -> None:
    """Generate browser loader code for an artifact.

    Args:
        wasm_bindgen: wasm-bindgen executable.
        artifact: .wasm file produced by cargo.
        out_dir: Existing directory to write the loader code to.

    Raises:
        PostProcessingError: If wasm-bindgen cannot be run or fails. Its
            stderr is passed along unchanged.
    """
    cmd = bindgen_command(wasm_bindgen, artifact, out_dir)
    logger.info("Running wasm-bindgen: %s", shlex.join(cmd))

    try:
        # stderr is only shown to the user, so undecodable bytes are replaced
        result = subprocess.run(
            cmd,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise PostProcessingError(
            f"Failed to run {wasm_bindgen}: {e}. "
            "Install it with `cargo install wasm-bindgen-cli`, matching the "
            "wasm-bindgen version in your Cargo.lock."
        ) from e

    if result.returncode != 0:
        raise PostProcessingError(
            result.stderr.strip() or f"wasm-bindgen exited with {result.returncode}",
            exit_code=result.returncode,
        )


__all__ = ["bindgen_command", "run_bindgen"]
