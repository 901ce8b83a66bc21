"""Thin CLI wrapper for run_wasm.

This module provides the command-line interface using Typer.
All build logic is delegated to run_wasm.api and the core modules.

Projects that always want the same page styling can ship their own entry
point built with make_app(css=...).
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from run_wasm import __version__
from run_wasm.config import get_settings, print_settings_json

console = Console()

RUN_HELP_EPILOG = (
    "At least one of `--package`, `--bin` or `--example` must be used. "
    "Options not listed here are passed to `cargo build` unchanged, "
    "except --target and --target-dir which run-wasm sets itself."
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"run-wasm version {__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Send log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def make_app(css: str = "", template: str | None = None) -> typer.Typer:
    """Create the run-wasm Typer application.

    Args:
        css: Default stylesheet text for the generated page.
        template: Default page template text.

    Returns:
        Typer application.
    """
    app = typer.Typer(
        name="run-wasm",
        help="Build a Cargo binary or example as wasm and serve it locally",
        no_args_is_help=True,
    )

    @app.callback()
    def main(
        version: Annotated[
            bool | None,
            typer.Option(
                "--version",
                "-V",
                help="Show version and exit",
                callback=version_callback,
                is_eager=True,
            ),
        ] = None,
    ) -> None:
        """Build a Cargo binary or example as wasm and serve it locally."""
        configure_logging(get_settings().log_level)

    @app.command()
    def config(
        json_output: Annotated[
            bool,
            typer.Option("--json", help="Output as JSON"),
        ] = False,
    ) -> None:
        """Show effective configuration."""
        settings = get_settings()
        if json_output:
            console.print(print_settings_json(settings))
        else:
            console.print("[bold]Effective Configuration:[/bold]")
            console.print()
            console.print("[bold]Toolchain:[/bold]")
            console.print(f"  Cargo:               {settings.cargo}")
            console.print(f"  wasm-bindgen:        {settings.wasm_bindgen}")
            console.print(f"  Manifest directory:  {settings.manifest_dir}")
            console.print()
            console.print("[bold]Dev server:[/bold]")
            console.print(f"  Host:                {settings.host}")
            console.print(f"  Port:                {settings.port}")
            console.print()
            console.print("[bold]Operational:[/bold]")
            console.print(f"  Log level:           {settings.log_level}")

    @app.command(
        context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
        epilog=RUN_HELP_EPILOG,
    )
    def run(
        ctx: typer.Context,
        package: Annotated[
            str | None,
            typer.Option("--package", "-p", help="Package with the target to run"),
        ] = None,
        example: Annotated[
            str | None,
            typer.Option("--example", help="Name of the example target to run"),
        ] = None,
        bin_name: Annotated[
            str | None,
            typer.Option("--bin", help="Name of the bin target to run"),
        ] = None,
        release: Annotated[
            bool,
            typer.Option("--release", "-r", help="Build artifacts in release mode"),
        ] = False,
        profile: Annotated[
            str | None,
            typer.Option(
                "--profile", help="Build artifacts with the specified profile"
            ),
        ] = None,
        features: Annotated[
            list[str] | None,
            typer.Option(
                "--features", "-F", help="Features to activate (can be repeated)"
            ),
        ] = None,
        build_only: Annotated[
            bool,
            typer.Option(
                "--build-only", help="Only build the wasm bundle, do not serve it"
            ),
        ] = False,
        host: Annotated[
            str | None,
            typer.Option("--host", help="Host the dev server listens on"),
        ] = None,
        port: Annotated[
            int | None,
            typer.Option(
                "--port", help="Port the dev server listens on", min=1, max=65535
            ),
        ] = None,
        page_css: Annotated[
            str | None,
            typer.Option("--css", help="Stylesheet text for the generated page"),
        ] = None,
        template_path: Annotated[
            Path | None,
            typer.Option(
                "--template",
                help="HTML template with {{name}} and {{css}} markers",
                exists=True,
                dir_okay=False,
            ),
        ] = None,
    ) -> None:
        """Build a binary or example as wasm and serve it."""
        from run_wasm.api import RunWasm
        from run_wasm.builds.page import load_template
        from run_wasm.builds.runner import resolve_profile
        from run_wasm.errors import (
            CONFIGURATION_ERROR,
            ConfigurationError,
            RunWasmError,
        )

        try:
            runner = RunWasm(
                css=page_css if page_css is not None else css,
                template=(
                    load_template(template_path)
                    if template_path is not None
                    else template
                ),
                package=package,
                example=example,
                bin=bin_name,
                profile=resolve_profile(release, profile),
                features=features or [],
                cargo_args=list(ctx.args),
                build_only=build_only,
                host=host,
                port=port,
            )
            result = runner.run(console=console)
        except ConfigurationError as e:
            console.print(f"[red]{escape(e.message)}[/red]")
            console.print("Run `run-wasm run --help` for usage.")
            raise typer.Exit(code=1) from None
        except RunWasmError as e:
            console.print(f"[red]{escape(e.message)}[/red]")
            raise typer.Exit(code=1) from None

        if not result.success:
            console.print(f"[red]{escape(result.message)}[/red]")
            if result.code == CONFIGURATION_ERROR:
                console.print("Run `run-wasm run --help` for usage.")
            raise typer.Exit(code=1)

        if build_only:
            console.print(f"[green]✓ {escape(result.message)}[/green]")

    return app


app = make_app()


if __name__ == "__main__":
    app()
