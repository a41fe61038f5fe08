"""Dispatch error taxonomy."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ssgbridge.adapters.schema import ErrorInfo


class DispatchError(Exception):
    """Base class for errors surfaced in ``DispatchResponse.error``."""

    kind = "DispatchError"

    def __init__(self, message: str, adapter: Optional[str] = None, tool: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.adapter = adapter
        self.tool = tool

    def to_info(self) -> ErrorInfo:
        return ErrorInfo(
            kind=self.kind,
            message=self.message,
            adapter=self.adapter,
            tool=self.tool,
        )


class DuplicateAdapterError(DispatchError):
    """Raised when registering an adapter whose name is already taken."""

    kind = "DuplicateAdapterError"

    def __init__(self, adapter: str):
        super().__init__(f"Adapter already registered: {adapter}", adapter=adapter)


class UnknownAdapterError(DispatchError):
    """Raised when no adapter has the requested name."""

    kind = "UnknownAdapterError"

    def __init__(self, adapter: str):
        super().__init__(f"Unknown adapter: {adapter}", adapter=adapter)


class UnknownToolError(DispatchError):
    """Raised when an adapter has no tool with the requested name."""

    kind = "UnknownToolError"

    def __init__(self, adapter: str, tool: str):
        super().__init__(f"Adapter '{adapter}' has no tool '{tool}'", adapter=adapter, tool=tool)


class InvalidInputError(DispatchError):
    """Raised when arguments violate a tool's input schema."""

    kind = "InvalidInputError"

    def __init__(self, adapter: str, tool: str, violations: Sequence[str]):
        self.violations: List[str] = list(violations)
        message = f"Invalid input for {adapter}.{tool}: " + "; ".join(self.violations)
        super().__init__(message, adapter=adapter, tool=tool)

    def to_info(self) -> ErrorInfo:
        info = super().to_info()
        info.violations = list(self.violations)
        return info


class AdapterUnavailableError(DispatchError):
    """Raised when an adapter's availability probes all fail."""

    kind = "AdapterUnavailableError"

    def __init__(self, adapter: str, tool: Optional[str] = None):
        super().__init__(
            f"Adapter '{adapter}' is unavailable: no probe succeeded. "
            "Is the tool installed and on PATH?",
            adapter=adapter,
            tool=tool,
        )


class ExecutionError(DispatchError):
    """Raised when a tool's executor fails instead of returning a result."""

    kind = "ExecutionError"

    def __init__(self, adapter: str, tool: str, cause: BaseException):
        self.cause = cause
        super().__init__(
            f"{adapter}.{tool} failed: {type(cause).__name__}: {cause}",
            adapter=adapter,
            tool=tool,
        )
