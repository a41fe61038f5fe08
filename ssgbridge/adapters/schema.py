"""Data models for tool parameters, process results, and dispatch envelopes."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

# JSON-schema type name -> accepted Python types
SCHEMA_TYPES: Dict[str, tuple] = {
    "string": (str,),
    "number": (int, float),
    "integer": (int,),
    "boolean": (bool,),
    "object": (dict,),
    "array": (list, tuple),
}


class ToolParam(BaseModel):
    """A single input property of a tool."""

    name: str
    type: str = "string"
    description: str = ""
    required: bool = False

    def schema_fragment(self) -> Dict[str, str]:
        return {"type": self.type, "description": self.description}


class ProcessResult(BaseModel):
    """Outcome of one external process run.

    ``exit_code`` is ``None`` only when the process could not be spawned.
    """

    success: bool = False
    stdout: str = ""
    stderr: str = ""
    exit_code: Optional[int] = None

    @property
    def spawned(self) -> bool:
        return self.exit_code is not None


class ErrorInfo(BaseModel):
    """Structured description of a dispatch failure."""

    kind: str
    message: str
    adapter: Optional[str] = None
    tool: Optional[str] = None
    violations: List[str] = Field(default_factory=list)


class DispatchRequest(BaseModel):
    """One tool invocation addressed to an adapter."""

    adapter: str
    tool: str
    arguments: Dict[str, Any] = Field(default_factory=dict)
    cwd: Optional[str] = None


class DispatchResponse(BaseModel):
    """Uniform answer to a dispatch: either a process result or an error."""

    ok: bool
    result: Optional[ProcessResult] = None
    error: Optional[ErrorInfo] = None
    duration_ms: int = 0

    @classmethod
    def success(cls, result: ProcessResult, duration_ms: int = 0) -> "DispatchResponse":
        return cls(ok=True, result=result, duration_ms=duration_ms)

    @classmethod
    def failure(cls, error: ErrorInfo, duration_ms: int = 0) -> "DispatchResponse":
        return cls(ok=False, error=error, duration_ms=duration_ms)


# ── Schema helpers ────────────────────────────────────────────────────────


def build_input_schema(params: Sequence[ToolParam]) -> Dict[str, Any]:
    """Render parameters as a JSON-schema ``object`` description."""
    return {
        "type": "object",
        "properties": {p.name: p.schema_fragment() for p in params},
        "required": [p.name for p in params if p.required],
    }


def _type_matches(value: Any, type_name: str) -> bool:
    accepted = SCHEMA_TYPES.get(type_name)
    if accepted is None:
        return True  # unknown schema types are not enforced
    # bool is an int subclass; keep it out of numeric slots
    if isinstance(value, bool) and type_name in ("number", "integer"):
        return False
    return isinstance(value, accepted)


def json_type(value: Any) -> str:
    for name, accepted in SCHEMA_TYPES.items():
        if name == "integer":
            continue
        if _type_matches(value, name):
            return name
    return type(value).__name__


def validate_arguments(params: Sequence[ToolParam], arguments: Mapping[str, Any]) -> List[str]:
    """
    Check ``arguments`` against ``params`` and return every violation.

    Missing required properties are reported first, then type mismatches,
    both in declaration order. A ``None`` value counts as absent.
    Properties not declared by the tool are ignored.
    """
    violations: List[str] = []
    for param in params:
        if param.required and arguments.get(param.name) is None:
            violations.append(f"missing required property '{param.name}'")

    for param in params:
        value = arguments.get(param.name)
        if value is None:
            continue
        if not _type_matches(value, param.type):
            violations.append(
                f"property '{param.name}' must be of type {param.type}, got {json_type(value)}"
            )
    return violations


def normalize_arguments(arguments: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop ``None`` values so that absent and null arguments look the same."""
    if not arguments:
        return {}
    return {key: value for key, value in arguments.items() if value is not None}
