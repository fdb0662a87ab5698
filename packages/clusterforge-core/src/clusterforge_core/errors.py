"""Custom exception hierarchy for clusterforge-core.

This module defines the exception classes used throughout clusterforge:
- ForgeError: Base exception for all clusterforge errors
- ConfigurationError / SerializationError: Malformed persisted files
- UpgradeError, DefaultingError, ValidationError: Install config pipeline stages
- PreconditionError: Accessor or dependency used before initialization
- MissingInputError: Required user input was not supplied
- AssetResolutionError, DependencyCycleError: Asset graph resolution failures

User-facing messages are safe to display; technical details are logged
internally via structlog and never exposed to the user.

Not-found is deliberately absent from this hierarchy: an asset whose
persisted file is missing reports ``False`` from ``load()`` and the store
falls back to generation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = structlog.get_logger(__name__)


class ForgeError(Exception):
    """Base exception for clusterforge.

    All clusterforge exceptions inherit from this class. User-facing messages
    are safe to display; technical details are logged internally.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but NEVER exposed to the user.

    Example:
        >>> raise ForgeError(
        ...     "Install config invalid",
        ...     internal_details="networking.machineCIDR: '10.0.0.1/16' has host bits set"
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ForgeError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "forge_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(ForgeError):
    """Raised when a persisted configuration file cannot be used.

    Provides file path and field context for actionable error messages.

    Attributes:
        file_path: Path of the offending file (if known).
        field_path: Dot-separated path to the invalid field (e.g., "networking.machineCIDR").
        line_number: Line number in the file where the error occurred (if available).
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        line_number: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the configuration file (optional).
            field_path: Dot-separated path to the field (optional).
            line_number: Line number in the file (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if line_number:
            context_parts.append(f"line {line_number}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path
        self.line_number = line_number


class SerializationError(ConfigurationError):
    """Raised when structured data cannot be serialized or deserialized.

    Use this exception when:
    - A persisted YAML document is syntactically invalid
    - The document does not match the record shape (unknown keys, wrong types)
    - A record cannot be rendered to YAML
    """

    pass


class UpgradeError(ForgeError):
    """Raised when an older install config cannot be migrated to the current schema.

    Attributes:
        api_version: The schema version found in the document.
    """

    def __init__(
        self,
        user_message: str,
        *,
        api_version: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message, internal_details=internal_details)
        self.api_version = api_version


class DefaultingError(ForgeError):
    """Raised when a default value could not be computed for a record."""

    pass


class FieldViolation:
    """A single violated validation rule.

    Attributes:
        field_path: Dot-separated path of the offending field.
        message: What is wrong with it.
    """

    __slots__ = ("field_path", "message")

    def __init__(self, field_path: str, message: str) -> None:
        self.field_path = field_path
        self.message = message

    def __str__(self) -> str:
        return f"{self.field_path}: {self.message}"

    def __repr__(self) -> str:
        return f"FieldViolation({self.field_path!r}, {self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldViolation):
            return NotImplemented
        return (self.field_path, self.message) == (other.field_path, other.message)

    def __hash__(self) -> int:
        return hash((self.field_path, self.message))


class ValidationError(ForgeError):
    """Raised when validation fails.

    Carries every violated rule, not only the first one.

    Attributes:
        violations: All violated rules, in the order they were checked.

    Example:
        >>> raise ValidationError(
        ...     "invalid install config",
        ...     violations=[FieldViolation("baseDomain", "must be a DNS subdomain")],
        ... )
        # User sees: "invalid install config: baseDomain: must be a DNS subdomain"
    """

    def __init__(
        self,
        user_message: str,
        *,
        violations: Sequence[FieldViolation] = (),
        internal_details: str | None = None,
    ) -> None:
        self.violations = list(violations)
        if self.violations:
            joined = "; ".join(str(v) for v in self.violations)
            if len(self.violations) > 1:
                user_message = f"{user_message}: [{joined}]"
            else:
                user_message = f"{user_message}: {joined}"
        super().__init__(user_message, internal_details=internal_details)


class InstallConfigValidationError(ValidationError):
    """Raised when an install config fails the validation rule set."""

    pass


class PreconditionError(ForgeError):
    """Raised when an asset is used before it has been materialized.

    Example:
        >>> raise PreconditionError("ClusterNetworkRanges called before initialization")
    """

    pass


class MissingInputError(ForgeError):
    """Raised when a required input was not supplied.

    Attributes:
        input_name: Name of the missing input (field or environment variable).
    """

    def __init__(
        self,
        user_message: str,
        *,
        input_name: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message, internal_details=internal_details)
        self.input_name = input_name


class AssetResolutionError(ForgeError):
    """Raised when an asset could not be loaded or generated.

    The store wraps every failure with the asset name and the stage that
    failed; failures in dependencies are wrapped once more per level so the
    message reads as a path from the requested asset down to the failure.

    Attributes:
        asset_name: Human-friendly name of the asset that failed.
        stage: One of "load", "generate" or "dependency".

    Example:
        >>> str(err)
        'failed to fetch dependency of "Network Config": failed to generate asset
        "Install Config": invalid install config: baseDomain: must be a DNS subdomain'
    """

    STAGE_MESSAGES = {
        "load": 'failed to load asset "{name}"',
        "generate": 'failed to generate asset "{name}"',
        "dependency": 'failed to fetch dependency of "{name}"',
    }

    def __init__(self, asset_name: str, stage: str, cause: BaseException) -> None:
        prefix = self.STAGE_MESSAGES[stage].format(name=asset_name)
        super().__init__(f"{prefix}: {cause}")
        self.asset_name = asset_name
        self.stage = stage
        self.__cause__ = cause

    @property
    def root_cause(self) -> BaseException:
        """Return the innermost error that is not a resolution wrapper."""
        err: BaseException = self
        while isinstance(err, AssetResolutionError) and err.__cause__ is not None:
            err = err.__cause__
        return err


class DependencyCycleError(ForgeError):
    """Raised when asset dependency declarations do not form a DAG.

    Attributes:
        cycle: Asset names along the cycle, first name repeated at the end.
    """

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = list(cycle)
        super().__init__(f"dependency cycle detected: {' -> '.join(self.cycle)}")
