"""Error definitions for run_wasm.

Every failure the tool reports derives from RunWasmError and carries a
stable code for programmatic handling. The CLI and RunWasm.run() turn these
into a human-readable message; nothing here is meant to crash the process.
"""

from __future__ import annotations

# Error code constants
CONFIGURATION_ERROR = "configuration"
RESOLUTION_ERROR = "resolution"
TOOLCHAIN_ERROR = "toolchain"
ARTIFACT_MISSING_ERROR = "artifact_missing"
POST_PROCESSING_ERROR = "post_processing"
TEMPLATE_ERROR = "template"


class RunWasmError(Exception):
    """Base error for run_wasm operations."""

    def __init__(self, message: str, code: str = "run_wasm_error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigurationError(RunWasmError):
    """Raised for conflicting or unsupported options.

    Always detected before any external process is started.
    """

    def __init__(self, message: str, code: str = CONFIGURATION_ERROR) -> None:
        super().__init__(message, code)


class ResolutionError(RunWasmError):
    """Raised when the workspace root or target directory cannot be found."""

    def __init__(self, message: str, code: str = RESOLUTION_ERROR) -> None:
        super().__init__(message, code)


class ToolchainError(RunWasmError):
    """Raised when cargo exits non-zero.

    Cargo prints its own diagnostics, so the message stays generic.
    """

    def __init__(
        self,
        message: str = "Failed due to cargo error",
        exit_code: int | None = None,
        code: str = TOOLCHAIN_ERROR,
    ) -> None:
        super().__init__(message, code)
        self.exit_code = exit_code


class ArtifactMissingError(RunWasmError):
    """Raised when cargo succeeded but the expected .wasm file is absent."""

    def __init__(self, path: object, code: str = ARTIFACT_MISSING_ERROR) -> None:
        super().__init__(
            f"There is no binary at {path}, maybe you used `--package NAME` "
            "on a package that has no binary?",
            code,
        )
        self.path = path


class PostProcessingError(RunWasmError):
    """Raised when wasm-bindgen fails. Not recoverable."""

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        code: str = POST_PROCESSING_ERROR,
    ) -> None:
        super().__init__(message, code)
        self.exit_code = exit_code


class TemplateError(RunWasmError):
    """Raised for disallowed css or a page template missing a marker."""

    def __init__(self, message: str, code: str = TEMPLATE_ERROR) -> None:
        super().__init__(message, code)


__all__ = [
    "ARTIFACT_MISSING_ERROR",
    "CONFIGURATION_ERROR",
    "POST_PROCESSING_ERROR",
    "RESOLUTION_ERROR",
    "TEMPLATE_ERROR",
    "TOOLCHAIN_ERROR",
    "ArtifactMissingError",
    "ConfigurationError",
    "PostProcessingError",
    "ResolutionError",
    "RunWasmError",
    "TemplateError",
    "ToolchainError",
]
