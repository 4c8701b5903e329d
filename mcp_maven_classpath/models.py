"""Pydantic domain and response models.

``Artifact`` is the minimal identity needed to locate a jar in the local
repository. It is frozen so that instances compare and hash by value and can be
collected into sets.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Artifact(BaseModel):
    """A resolved Maven artifact identity (group:name:version).

    Type, classifier and scope from the dependency listing are not kept; they
    do not affect where the jar lives.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    group: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1)

    @field_validator("group", "name", "version")
    @classmethod
    def _strip_and_validate(cls, v: str) -> str:
        v_stripped = v.strip()
        if not v_stripped:
            raise ValueError("must not be empty")
        return v_stripped

    def __str__(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"


# Tool response models (returned by MCP tools).


class ClasspathResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    descriptor: str
    entries: list[str] = Field(default_factory=list)
    # Size of the deduplicated artifact set before missing jars were dropped
    artifact_count: int = Field(default=0, ge=0)
    sources: bool = False
    caveats: list[str] = Field(default_factory=list)


__all__ = ["Artifact", "ClasspathResponse"]
