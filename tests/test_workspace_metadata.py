"""Tests for workspace/metadata.py module.

Uses mocked subprocess so cargo is not required.
"""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from run_wasm.errors import ResolutionError
from run_wasm.types import WorkspaceLocation
from run_wasm.workspace.metadata import (
    CargoMetadata,
    metadata_command,
    parse_metadata,
    query_cargo_metadata,
)

SAMPLE_METADATA = {
    "packages": [],
    "workspace_members": [],
    "resolve": None,
    "target_directory": "/ws/custom-target",
    "version": 1,
    "workspace_root": "/ws",
    "metadata": None,
}


class TestMetadataCommand:
    """Tests for metadata_command function."""

    def test_command(self):
        """Should ask for format version 1 without dependencies."""
        assert metadata_command("cargo") == [
            "cargo",
            "metadata",
            "--no-deps",
            "--format-version=1",
        ]

    def test_custom_cargo(self):
        """Should use the given executable."""
        assert metadata_command("/opt/cargo")[0] == "/opt/cargo"


class TestParseMetadata:
    """Tests for parse_metadata function."""

    def test_valid_output(self):
        """Should extract both directories and ignore other fields."""
        metadata = parse_metadata(json.dumps(SAMPLE_METADATA))
        assert isinstance(metadata, CargoMetadata)
        assert metadata.target_directory == "/ws/custom-target"
        assert metadata.workspace_root == "/ws"

    def test_to_location(self):
        """Should convert to a WorkspaceLocation."""
        location = parse_metadata(json.dumps(SAMPLE_METADATA)).to_location()
        assert location == WorkspaceLocation(Path("/ws"), Path("/ws/custom-target"))

    def test_not_json(self):
        """Should raise ResolutionError for non-JSON output."""
        with pytest.raises(ResolutionError):
            parse_metadata("error: could not find `Cargo.toml`")

    def test_missing_target_directory(self):
        """Should raise ResolutionError when target_directory is absent."""
        data = dict(SAMPLE_METADATA)
        del data["target_directory"]
        with pytest.raises(ResolutionError):
            parse_metadata(json.dumps(data))

    def test_missing_workspace_root(self):
        """Should raise ResolutionError when workspace_root is absent."""
        data = dict(SAMPLE_METADATA)
        del data["workspace_root"]
        with pytest.raises(ResolutionError):
            parse_metadata(json.dumps(data))

    def test_wrong_type(self):
        """Should raise ResolutionError when a field is not a string."""
        data = dict(SAMPLE_METADATA, target_directory=42)
        with pytest.raises(ResolutionError):
            parse_metadata(json.dumps(data))


class TestQueryCargoMetadata:
    """Tests for query_cargo_metadata with mocked subprocess."""

    def test_success(self, tmp_path):
        """Should run cargo in the manifest directory and parse its output."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(
                returncode=0, stdout=json.dumps(SAMPLE_METADATA), stderr=""
            )

            location = query_cargo_metadata("cargo", tmp_path)

            assert location.workspace_root == Path("/ws")
            assert location.target_directory == Path("/ws/custom-target")
            assert mock_run.call_args[0][0] == metadata_command("cargo")
            assert mock_run.call_args[1]["cwd"] == tmp_path

    def test_nonzero_exit(self, tmp_path):
        """Should raise ResolutionError carrying cargo's stderr."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(
                returncode=101, stdout="", stderr="error: manifest not found"
            )

            with pytest.raises(ResolutionError) as exc_info:
                query_cargo_metadata("cargo", tmp_path)

            assert "manifest not found" in str(exc_info.value)

    def test_decodes_output_as_utf8(self, tmp_path):
        """Should decode cargo's output as UTF-8 regardless of locale."""
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(
                returncode=0, stdout=json.dumps(SAMPLE_METADATA), stderr=""
            )

            query_cargo_metadata("cargo", tmp_path)

            assert mock_run.call_args[1]["encoding"] == "utf-8"

    def test_invalid_utf8_output(self, tmp_path):
        """Should raise ResolutionError when cargo prints undecodable bytes."""
        error = UnicodeDecodeError("utf-8", b"\xff\xfe{bad", 0, 1, "invalid start byte")
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = error

            with pytest.raises(ResolutionError) as exc_info:
                query_cargo_metadata("cargo", tmp_path)

            assert "not valid UTF-8" in str(exc_info.value)
            assert exc_info.value.__cause__ is error

    def test_cargo_missing(self, tmp_path):
        """Should raise ResolutionError when cargo cannot be started."""
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = FileNotFoundError("cargo")

            with pytest.raises(ResolutionError):
                query_cargo_metadata("cargo", tmp_path)
