"""Adapter registry - owns the adapters and their aggregate lifecycle."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterator, List, Tuple

from ssgbridge.adapters.base import AdapterDescriptor, Tool
from ssgbridge.adapters.errors import DuplicateAdapterError, UnknownAdapterError, UnknownToolError

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """
    Owns the set of adapters for the lifetime of the host process.

    Adapters are kept in registration order. Tool names are namespaced by
    adapter: the same tool name may exist in two adapters and is addressed
    as ``adapter.tool``.
    """

    def __init__(self) -> None:
        self._adapters: Dict[str, AdapterDescriptor] = {}

    # ── Registration & lookup ─────────────────────────────────────────────

    def register(self, descriptor: AdapterDescriptor) -> AdapterDescriptor:
        if descriptor.name in self._adapters:
            raise DuplicateAdapterError(descriptor.name)
        self._adapters[descriptor.name] = descriptor
        logger.debug("registered adapter %s (%d tools)", descriptor.name, len(descriptor.tools))
        return descriptor

    def get(self, name: str) -> AdapterDescriptor:
        try:
            return self._adapters[name]
        except KeyError:
            raise UnknownAdapterError(name) from None

    def list_adapters(self) -> Iterator[AdapterDescriptor]:
        """Iterate adapters in registration order; each call starts afresh."""
        yield from list(self._adapters.values())

    def __iter__(self) -> Iterator[AdapterDescriptor]:
        return self.list_adapters()

    def __len__(self) -> int:
        return len(self._adapters)

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def names(self) -> List[str]:
        return list(self._adapters)

    def find_tool(self, adapter_name: str, tool_name: str) -> Tuple[AdapterDescriptor, Tool]:
        adapter = self.get(adapter_name)
        tool = adapter.get_tool(tool_name)
        if tool is None:
            raise UnknownToolError(adapter_name, tool_name)
        return adapter, tool

    def resolve(self, qualified_name: str) -> Tuple[AdapterDescriptor, Tool]:
        """Look up a tool by ``adapter.tool``."""
        adapter_name, sep, tool_name = qualified_name.partition(".")
        if not sep:
            raise UnknownToolError(adapter_name, "")
        return self.find_tool(adapter_name, tool_name)

    def list_tools(self) -> List[Tuple[AdapterDescriptor, Tool]]:
        """Every ``(adapter, tool)`` pair in registration order."""
        return [(adapter, tool) for adapter in self.list_adapters() for tool in adapter.tools]

    # ── Aggregate lifecycle ───────────────────────────────────────────────

    async def connect_all(self) -> Dict[str, bool]:
        """
        Probe every adapter concurrently.

        One adapter failing, or raising, never stops the others; the result
        maps each adapter name to whether it connected.
        """
        adapters = list(self.list_adapters())
        outcomes = await asyncio.gather(
            *(adapter.connect() for adapter in adapters),
            return_exceptions=True,
        )
        status: Dict[str, bool] = {}
        for adapter, outcome in zip(adapters, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning("connect for %s raised: %s", adapter.name, outcome)
                status[adapter.name] = False
            else:
                status[adapter.name] = bool(outcome)
        logger.info(
            "connected %d of %d adapters", sum(status.values()), len(status)
        )
        return status

    def disconnect_all(self) -> None:
        for adapter in self.list_adapters():
            try:
                adapter.disconnect()
            except Exception as exc:
                logger.warning("disconnect for %s raised: %s", adapter.name, exc)

    def status(self) -> Dict[str, bool]:
        return {adapter.name: adapter.is_connected() for adapter in self.list_adapters()}

    # ── Introspection ─────────────────────────────────────────────────────

    def describe(self) -> List[Dict[str, Any]]:
        """Manifest of every adapter and its tool schemas; runs nothing."""
        return [adapter.describe() for adapter in self.list_adapters()]
