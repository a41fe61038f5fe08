"""
SSGBridge - One interface over many static-site-generator CLIs.

Each supported generator is an adapter with a declared list of tools.
A tool validates its arguments against a JSON-schema-like description,
builds an argument list, and runs the generator as a subprocess.

Architecture:
- Adapters are pure data: binary names, probes, argument builders
- One ProcessRunner spawns every subprocess and captures its output
- The Dispatcher validates, connects on demand, and reports uniformly
- Nothing is cached or persisted between invocations
"""

__version__ = "0.1.0"
__license__ = "Apache-2.0"

from ssgbridge.adapters import (
    AdapterDescriptor,
    AdapterRegistry,
    Dispatcher,
    DispatchResponse,
    ProcessResult,
    ProcessRunner,
)
from ssgbridge.catalog import build_registry

__all__ = [
    "AdapterDescriptor",
    "AdapterRegistry",
    "Dispatcher",
    "DispatchResponse",
    "ProcessResult",
    "ProcessRunner",
    "build_registry",
    "__version__",
]
