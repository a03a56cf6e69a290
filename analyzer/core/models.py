"""Canonical data models.

- `OutputRecord`: one named blob destined for one archive entry.
- Probe descriptors: the configuration surface (what to run), discriminated by `kind`.
- `CollectionResult`: summary of one run, returned to the CLI.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ERRORS_ENTRY_NAME = "errors.txt"


class BaseModelStrict(BaseModel):
    model_config = ConfigDict(extra="forbid")


class OutputRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    contents: bytes = b""

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("output name must be non-empty")
        return v


class CommandProbeSpec(BaseModelStrict):
    kind: Literal["command"] = "command"
    name: str
    program: str
    args: List[str] = Field(default_factory=list)

    @field_validator("args", mode="before")
    @classmethod
    def _stringify_scalar_args(cls, v: Any) -> Any:
        # Hand-written YAML turns `ping -c 30` into [-c, 30]; argv is always strings.
        if isinstance(v, list):
            return [str(a) if isinstance(a, (int, float)) and not isinstance(a, bool) else a for a in v]
        return v


class FetchProbeSpec(BaseModelStrict):
    kind: Literal["fetch"] = "fetch"
    name: str
    url: str


class ReadProbeSpec(BaseModelStrict):
    kind: Literal["read"] = "read"
    name: str
    path: str


ProbeSpec = Annotated[Union[CommandProbeSpec, FetchProbeSpec, ReadProbeSpec], Field(discriminator="kind")]


class ProbePlan(BaseModelStrict):
    """Ordered list of probe descriptors.

    Output names become archive entry names, so they must be non-empty and unique, and must not
    collide with the reserved error report entry.
    """

    probes: List[ProbeSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_names(self) -> "ProbePlan":
        seen = set()
        for spec in self.probes:
            if not spec.name.strip():
                raise ValueError(f"{spec.kind} probe has an empty output name")
            if spec.name == ERRORS_ENTRY_NAME:
                raise ValueError(f"output name {ERRORS_ENTRY_NAME!r} is reserved for the error report")
            if spec.name in seen:
                raise ValueError(f"duplicate output name {spec.name!r}")
            seen.add(spec.name)
        return self


class CollectionResult(BaseModelStrict):
    output_path: str
    entries: List[str] = Field(default_factory=list)
    probe_count: int = 0
    error_count: int = 0
    elapsed_seconds: float = 0.0
    report_error: Optional[str] = None
    archive_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.archive_error is None
