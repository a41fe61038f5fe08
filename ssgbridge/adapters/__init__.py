"""
Adapter core - one interface over many static-site-generator CLIs.

Each adapter declares tools with JSON-schema-like inputs; a tool builds an
argument list and the shared ProcessRunner executes it.

    caller --> Dispatcher --> Registry --> validate --> connect? --> ProcessRunner
"""

from ssgbridge.adapters.schema import (
    DispatchRequest,
    DispatchResponse,
    ErrorInfo,
    ProcessResult,
    ToolParam,
    validate_arguments,
)
from ssgbridge.adapters.errors import (
    AdapterUnavailableError,
    DispatchError,
    DuplicateAdapterError,
    ExecutionError,
    InvalidInputError,
    UnknownAdapterError,
    UnknownToolError,
)
from ssgbridge.adapters.runner import ProcessRunner
from ssgbridge.adapters.base import AdapterDescriptor, Command, ConnectionState, Probe, Tool
from ssgbridge.adapters.registry import AdapterRegistry
from ssgbridge.adapters.dispatcher import Dispatcher

__all__ = [
    "AdapterDescriptor",
    "AdapterRegistry",
    "AdapterUnavailableError",
    "Command",
    "ConnectionState",
    "DispatchError",
    "DispatchRequest",
    "DispatchResponse",
    "Dispatcher",
    "DuplicateAdapterError",
    "ErrorInfo",
    "ExecutionError",
    "InvalidInputError",
    "Probe",
    "ProcessResult",
    "ProcessRunner",
    "Tool",
    "ToolParam",
    "UnknownAdapterError",
    "UnknownToolError",
    "validate_arguments",
]
