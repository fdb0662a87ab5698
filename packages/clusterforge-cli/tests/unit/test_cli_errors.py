"""Tests for CLI error handling."""

from __future__ import annotations

import pytest

from clusterforge_cli.errors import (
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    CLIError,
    exit_code_for,
    format_forge_error,
    handle_forge_error,
    handle_permission_error,
)
from clusterforge_core.errors import (
    AssetResolutionError,
    FieldViolation,
    InstallConfigValidationError,
    MissingInputError,
)


class TestCLIError:
    """Tests for CLIError."""

    def test_default_exit_code(self) -> None:
        assert CLIError("boom").exit_code == EXIT_USER_ERROR

    def test_custom_exit_code(self) -> None:
        assert CLIError("boom", exit_code=EXIT_SYSTEM_ERROR).exit_code == EXIT_SYSTEM_ERROR

    def test_show_uses_rich(self, capsys: pytest.CaptureFixture[str]) -> None:
        CLIError("Something failed").show()
        assert "Something failed" in capsys.readouterr().out


class TestExitCodes:
    """Tests for exit code classification."""

    def test_user_error(self) -> None:
        assert exit_code_for(MissingInputError("Base domain is required")) == EXIT_USER_ERROR

    def test_system_error_root_cause(self) -> None:
        err = AssetResolutionError("Install Config", "load", PermissionError("denied"))
        assert exit_code_for(err) == EXIT_SYSTEM_ERROR

    def test_wrapped_user_error(self) -> None:
        inner = AssetResolutionError("Base Domain", "generate", MissingInputError("missing"))
        outer = AssetResolutionError("Install Config", "dependency", inner)
        assert exit_code_for(outer) == EXIT_USER_ERROR


class TestFormatForgeError:
    """Tests for error formatting."""

    def test_single_violation_kept_inline(self) -> None:
        err = InstallConfigValidationError(
            "invalid install config",
            violations=[FieldViolation("baseDomain", "is required")],
        )
        assert format_forge_error(err) == "invalid install config: baseDomain: is required"

    def test_violations_listed(self) -> None:
        cause = InstallConfigValidationError(
            "invalid install config",
            violations=[
                FieldViolation("baseDomain", "is required"),
                FieldViolation("pullSecret", "is required"),
            ],
        )
        err = AssetResolutionError("Install Config", "generate", cause)

        assert format_forge_error(err) == (
            'failed to generate asset "Install Config": invalid install config:\n'
            "  - baseDomain: is required\n"
            "  - pullSecret: is required"
        )


class TestHandlers:
    """Tests for raising handlers."""

    def test_handle_forge_error(self) -> None:
        with pytest.raises(CLIError) as exc_info:
            handle_forge_error(MissingInputError("Cluster name is required"))
        assert exc_info.value.exit_code == EXIT_USER_ERROR
        assert exc_info.value.message == "Cluster name is required"

    def test_handle_permission_error(self) -> None:
        with pytest.raises(CLIError, match="Permission denied: Cannot write to /cluster") as exc_info:
            handle_permission_error("/cluster", "write to")
        assert exc_info.value.exit_code == EXIT_SYSTEM_ERROR
