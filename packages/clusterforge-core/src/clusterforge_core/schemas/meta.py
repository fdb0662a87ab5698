"""Kubernetes-style object metadata shared by clusterforge records."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ObjectMeta(BaseModel):
    """Object metadata.

    Attributes:
        name: Object name.
        namespace: Namespace for namespaced objects; omitted otherwise.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(default="", description="Object name")
    namespace: str | None = Field(default=None, description="Object namespace")
