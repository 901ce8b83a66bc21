"""Tests for shared type definitions."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from run_wasm.errors import ConfigurationError
from run_wasm.types import BuildRequest, OperationResult, WorkspaceLocation


class TestWorkspaceLocation:
    """Tests for WorkspaceLocation."""

    def test_is_immutable(self):
        """Should not allow reassigning fields."""
        location = WorkspaceLocation(Path("/ws"), Path("/ws/target"))
        with pytest.raises(FrozenInstanceError):
            location.workspace_root = Path("/other")  # type: ignore[misc]

    def test_equality(self):
        """Should compare by value."""
        a = WorkspaceLocation(Path("/ws"), Path("/ws/target"))
        b = WorkspaceLocation(Path("/ws"), Path("/ws/target"))
        assert a == b


class TestBuildRequest:
    """Tests for BuildRequest."""

    def test_requires_a_selector(self):
        """Should reject a request without package, example or bin."""
        with pytest.raises(ConfigurationError) as exc_info:
            BuildRequest()
        assert "--package" in str(exc_info.value)
        assert exc_info.value.code == "configuration"

    def test_binary_name_from_package(self):
        """Package alone names the binary."""
        assert BuildRequest(package="demo").binary_name == "demo"

    def test_binary_name_prefers_example(self):
        """Example wins over bin and package."""
        request = BuildRequest(package="pkg", bin="tool", example="triangle")
        assert request.binary_name == "triangle"

    def test_binary_name_prefers_bin_over_package(self):
        """Bin wins over package."""
        assert BuildRequest(package="pkg", bin="tool").binary_name == "tool"

    @pytest.mark.parametrize(
        ("profile", "expected"),
        [
            (None, "debug"),
            ("dev", "debug"),
            ("release", "release"),
            ("profiling", "profiling"),
        ],
    )
    def test_profile_dir_name(self, profile, expected):
        """Should map cargo profiles to their output directory names."""
        request = BuildRequest(package="demo", profile=profile)
        assert request.profile_dir_name == expected

    def test_is_example(self):
        """Only example selectors are examples."""
        assert BuildRequest(example="demo").is_example is True
        assert BuildRequest(bin="demo").is_example is False


class TestOperationResult:
    """Tests for OperationResult."""

    def test_defaults(self):
        """Should default code to None and details to empty."""
        result = OperationResult(success=True, message="ok")
        assert result.code is None
        assert result.details == {}
