"""Dispatcher - turns tool invocations into uniform responses."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

from ssgbridge.adapters.errors import (
    AdapterUnavailableError,
    DispatchError,
    ExecutionError,
    InvalidInputError,
)
from ssgbridge.adapters.registry import AdapterRegistry
from ssgbridge.adapters.schema import DispatchRequest, DispatchResponse, json_type, normalize_arguments

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Turns ``(adapter, tool, arguments)`` into a ``DispatchResponse``.

    Every failure is reported in the response; ``invoke`` never raises a
    dispatch error. A tool whose subprocess exits non-zero is still a
    successful dispatch (``ok=True``) and callers inspect
    ``result.success`` to tell the two apart.

    An adapter found disconnected is connected on demand; if its probes
    fail the tool is not run and ``AdapterUnavailableError`` is returned.
    Tools declared with ``requires_connection=False`` (version queries) skip
    this step and report a missing binary through their ``ProcessResult``.
    """

    def __init__(self, registry: AdapterRegistry):
        self._registry = registry

    @property
    def registry(self) -> AdapterRegistry:
        return self._registry

    async def invoke(
        self,
        adapter_name: str,
        tool_name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        cwd: Optional[str] = None,
    ) -> DispatchResponse:
        """
        Run one tool.

        Parameters
        ----------
        adapter_name : registered adapter name, e.g. ``zola``
        tool_name : tool within that adapter, e.g. ``zola_build``
        arguments : values for the tool's input schema
        cwd : working directory for commands that do not set their own
        """
        t0 = time.perf_counter()
        logger.debug("dispatch %s.%s %s", adapter_name, tool_name, arguments)
        try:
            adapter, tool = self._registry.find_tool(adapter_name, tool_name)

            if arguments is not None and not isinstance(arguments, Mapping):
                raise InvalidInputError(
                    adapter_name, tool_name, [f"input must be an object, got {json_type(arguments)}"]
                )
            values = normalize_arguments(arguments)
            violations = tool.validate(values)
            if violations:
                raise InvalidInputError(adapter_name, tool_name, violations)

            if tool.requires_connection and not await adapter.ensure_connected():
                raise AdapterUnavailableError(adapter_name, tool_name)

            try:
                result = await adapter.execute(tool, values, cwd=cwd)
            except Exception as exc:
                logger.exception("executor for %s.%s raised", adapter_name, tool_name)
                raise ExecutionError(adapter_name, tool_name, exc) from exc

        except DispatchError as exc:
            elapsed_ms = self._elapsed_ms(t0)
            logger.warning("dispatch %s.%s failed: %s", adapter_name, tool_name, exc.message)
            return DispatchResponse.failure(exc.to_info(), duration_ms=elapsed_ms)

        elapsed_ms = self._elapsed_ms(t0)
        logger.info(
            "dispatch %s.%s finished: exit=%s success=%s (%d ms)",
            adapter_name,
            tool_name,
            result.exit_code,
            result.success,
            elapsed_ms,
        )
        return DispatchResponse.success(result, duration_ms=elapsed_ms)

    async def dispatch(self, request: DispatchRequest) -> DispatchResponse:
        return await self.invoke(request.adapter, request.tool, request.arguments, cwd=request.cwd)

    async def call(
        self,
        qualified_name: str,
        arguments: Optional[Mapping[str, Any]] = None,
        cwd: Optional[str] = None,
    ) -> DispatchResponse:
        """Invoke a tool addressed as ``adapter.tool``."""
        adapter_name, _, tool_name = qualified_name.partition(".")
        return await self.invoke(adapter_name, tool_name, arguments, cwd=cwd)

    @staticmethod
    def _elapsed_ms(t0: float) -> int:
        return int((time.perf_counter() - t0) * 1000)
