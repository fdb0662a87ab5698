"""YAML codec for clusterforge records.

Records are pydantic models serialized with their camelCase aliases, unset
optional fields dropped, and keys kept in declaration order, so that a
current-version record always renders to the same bytes.
"""

from __future__ import annotations

from typing import Any, TypeVar

import yaml
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from clusterforge_core.errors import SerializationError

M = TypeVar("M", bound=BaseModel)


def to_document(model: BaseModel) -> dict[str, Any]:
    """Return the plain, alias-keyed mapping a record serializes to."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def dump_yaml(data: BaseModel | dict[str, Any]) -> bytes:
    """Serialize a record (or an already plain mapping) to YAML bytes.

    Args:
        data: Record or mapping to serialize.

    Returns:
        UTF-8 encoded YAML document.

    Raises:
        SerializationError: If the data cannot be represented as YAML.
    """
    document = to_document(data) if isinstance(data, BaseModel) else data
    try:
        text = yaml.safe_dump(document, sort_keys=False, default_flow_style=False)
    except yaml.YAMLError as e:
        raise SerializationError("failed to marshal document", internal_details=str(e)) from e
    return text.encode("utf-8")


def load_yaml(
    data: bytes | str,
    model_cls: type[M],
    *,
    file_path: str | None = None,
    subject: str = "document",
) -> M:
    """Deserialize YAML bytes into a record.

    Args:
        data: YAML document.
        model_cls: Record model to validate the document against.
        file_path: Name of the file the data came from, for error context.
        subject: What the document is, used in error messages.

    Returns:
        The validated record.

    Raises:
        SerializationError: If the YAML is malformed or does not match the
            record shape.
    """
    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as e:
        line_number = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line_number = mark.line + 1
        raise SerializationError(
            f"failed to unmarshal {subject}: invalid YAML",
            file_path=file_path,
            line_number=line_number,
            internal_details=str(e),
        ) from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise SerializationError(
            f"failed to unmarshal {subject}: expected a mapping, got {type(raw).__name__}",
            file_path=file_path,
        )

    try:
        return model_cls.model_validate(raw)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field_path = ".".join(str(part) for part in first["loc"]) or None
        raise SerializationError(
            f"failed to unmarshal {subject}: {first['msg']}",
            file_path=file_path,
            field_path=field_path,
            internal_details=str(e),
        ) from e
