"""Configuration settings for run_wasm.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.

Cargo exports CARGO and CARGO_MANIFEST_DIR when it runs a subcommand or a
build script, so those are accepted as aliases. They are read here only;
the resolver and orchestrator receive them as plain parameters.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_manifest_dir() -> Path:
    """Return the default manifest directory (the current directory)."""
    return Path.cwd()


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the RUN_WASM_ prefix.
    CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="RUN_WASM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Toolchain
    cargo: str = Field(
        default="cargo",
        validation_alias=AliasChoices("RUN_WASM_CARGO", "CARGO"),
        description="Cargo executable",
    )
    wasm_bindgen: str = Field(
        default="wasm-bindgen",
        description="wasm-bindgen CLI executable",
    )

    # Paths
    manifest_dir: Path = Field(
        default_factory=_default_manifest_dir,
        validation_alias=AliasChoices("RUN_WASM_MANIFEST_DIR", "CARGO_MANIFEST_DIR"),
        description="Directory of the package's Cargo.toml",
    )

    # Dev server
    host: str = Field(
        default="localhost",
        description="Host the dev server listens on",
    )
    port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port the dev server listens on",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
