"""Library entry point for embedding run-wasm in a custom build script.

Typical use from an xtask-style script::

    from run_wasm.api import RunWasm

    result = RunWasm(css="body { margin: 0px; }", package="my_app").run()
    if not result.success:
        print(result.message)

RunWasm.run() will:
1. Resolve the workspace and target directories
2. Compile the selected target to wasm
3. Run wasm-bindgen
4. Generate an index.html that loads the wasm
5. Serve the bundle until interrupted (unless build_only)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from run_wasm.builds.page import PageTemplate
from run_wasm.builds.runner import validate_cargo_args
from run_wasm.builds.service import BundleResult, build_bundle
from run_wasm.config import Settings, get_settings
from run_wasm.errors import RunWasmError
from run_wasm.types import BuildRequest, OperationResult
from run_wasm.workspace.resolver import resolve_directories

logger = logging.getLogger(__name__)


class RunWasm:
    """Low level control over a run-wasm invocation.

    css and template are validated here, so a bad stylesheet fails before
    anything is built or written. The selectors and cargo flags are
    validated when the build starts, before any external process runs.

    Args:
        css: Stylesheet text for the generated page. By default the page
            keeps the browser's body margins; full-page apps usually want
            ``"body { margin: 0px; }"``.
        template: Custom page template text, or None for the default.
        package: Package with the target to run.
        example: Name of the example target to run.
        bin: Name of the bin target to run.
        profile: Cargo profile; None builds with cargo's default.
        features: Cargo features to activate.
        cargo_args: Raw cargo flags for anything not covered above. Must not
            include --target or --target-dir.
        build_only: Only build the bundle, do not serve it.
        host: Dev server host; settings.host when None.
        port: Dev server port; settings.port when None.
        settings: Settings to use; loaded from the environment when None.

    Raises:
        TemplateError: If css or template is rejected.
    """

    def __init__(
        self,
        css: str = "",
        template: str | None = None,
        package: str | None = None,
        example: str | None = None,
        bin: str | None = None,
        profile: str | None = None,
        features: Sequence[str] = (),
        cargo_args: Sequence[str] = (),
        build_only: bool = False,
        host: str | None = None,
        port: int | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.page = PageTemplate(css=css, template=template)
        self.package = package
        self.example = example
        self.bin = bin
        self.profile = profile
        self.features = tuple(features)
        self.cargo_args = tuple(cargo_args)
        self.build_only = build_only
        self.settings = settings if settings is not None else get_settings()
        self.host = host if host is not None else self.settings.host
        self.port = port if port is not None else self.settings.port

    def request(self) -> BuildRequest:
        """Build the BuildRequest for this invocation.

        Raises:
            ConfigurationError: If no target is selected.
        """
        return BuildRequest(
            package=self.package,
            example=self.example,
            bin=self.bin,
            profile=self.profile,
            features=self.features,
            cargo_args=self.cargo_args,
        )

    def build(self) -> BundleResult:
        """Resolve the workspace and build the bundle.

        Returns:
            BundleResult for the written bundle.

        Raises:
            RunWasmError: On any failure, see build_bundle().
        """
        request = self.request()
        validate_cargo_args(request.cargo_args)
        location = resolve_directories(
            Path(self.settings.manifest_dir), cargo=self.settings.cargo
        )
        return build_bundle(
            location,
            request,
            cargo=self.settings.cargo,
            wasm_bindgen=self.settings.wasm_bindgen,
            page=self.page,
        )

    def run(self, console: Console | None = None) -> OperationResult:
        """Build, then serve unless build_only.

        Blocks while serving, until interrupted.

        Returns:
            OperationResult; failures carry the error's message and code.
        """
        try:
            bundle = self.build()
        except RunWasmError as e:
            logger.debug("run-wasm failed: %s (%s)", e.message, e.code)
            return OperationResult(success=False, message=e.message, code=e.code)

        if not self.build_only:
            from web.app import serve

            serve(
                bundle.bundle_dir,
                bundle.name,
                host=self.host,
                port=self.port,
                log_level=self.settings.log_level,
                console=console,
            )

        return OperationResult(
            success=True,
            message=f"Built {bundle.name} into {bundle.bundle_dir}",
            details={
                "name": bundle.name,
                "bundle_dir": str(bundle.bundle_dir),
                "artifact_path": str(bundle.artifact_path),
            },
        )


__all__ = ["RunWasm"]
