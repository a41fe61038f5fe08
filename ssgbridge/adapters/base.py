"""Adapter descriptors, their tools, and the connection lifecycle."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ssgbridge.adapters.runner import ProcessRunner
from ssgbridge.adapters.schema import ProcessResult, ToolParam, build_input_schema, validate_arguments

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection state of an adapter."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


@dataclass(frozen=True)
class Command:
    """
    One external invocation produced by a tool.

    ``program`` is the conventional command name; the owning adapter maps it
    to a configured path. ``cwd=None`` means "the dispatch working
    directory".
    """

    program: str
    args: Tuple[str, ...] = ()
    cwd: Optional[str] = None
    stdin: Optional[str] = None


@dataclass(frozen=True)
class Probe:
    """
    A lightweight availability check, usually a version or help query.

    The probe passes when the process exits successfully. With
    ``accept_output`` set it also passes when the text appears in stdout or
    stderr; with ``require_success=False`` any spawned process passes.
    """

    program: str
    args: Tuple[str, ...] = ()
    stdin: Optional[str] = None
    accept_output: Optional[str] = None
    require_success: bool = True

    def accepts(self, result: ProcessResult) -> bool:
        if result.success:
            return True
        if not result.spawned:
            return False
        if not self.require_success:
            return True
        if self.accept_output:
            return self.accept_output in result.stdout or self.accept_output in result.stderr
        return False


BuildResult = Union[Command, Sequence[Command]]


@dataclass(frozen=True)
class Tool:
    """One callable operation of an adapter.

    ``build`` maps validated arguments to the command(s) to run and must be a
    pure function of its input.
    """

    name: str
    description: str
    build: Callable[[Dict[str, Any]], BuildResult]
    params: Tuple[ToolParam, ...] = ()
    # False for diagnostic tools (version queries) that run without a passing probe
    requires_connection: bool = True

    @property
    def input_schema(self) -> Dict[str, Any]:
        return build_input_schema(self.params)

    def param(self, name: str) -> Optional[ToolParam]:
        for p in self.params:
            if p.name == name:
                return p
        return None

    def validate(self, arguments: Mapping[str, Any]) -> List[str]:
        return validate_arguments(self.params, arguments)

    def commands(self, arguments: Dict[str, Any]) -> List[Command]:
        """Run the builder and normalize its output to a list."""
        built = self.build(arguments)
        if isinstance(built, Command):
            return [built]
        commands = list(built)
        if not commands:
            raise ValueError(f"tool '{self.name}' produced no commands")
        return commands


class AdapterDescriptor:
    """
    A named binding to one external static-site tool family.

    Holds the adapter's tools, its availability probes, and its connection
    state. The state changes only through ``connect()`` and ``disconnect()``;
    transitions are serialized by a per-adapter lock so concurrent
    on-demand connects run the probes once.

    Example:
        >>> zola = AdapterDescriptor(
        ...     name="zola",
        ...     language="Rust",
        ...     description="Fast static site generator",
        ...     probes=[Probe("zola", ("--version",))],
        ...     tools=[Tool("zola_version", "Get Zola version",
        ...                 build=lambda args: Command("zola", ("--version",)))],
        ... )
        >>> await zola.connect()
    """

    def __init__(
        self,
        name: str,
        language: str,
        description: str,
        tools: Sequence[Tool] = (),
        probes: Sequence[Probe] = (),
        programs: Sequence[str] = (),
        display_name: Optional[str] = None,
        homepage: Optional[str] = None,
        binaries: Optional[Mapping[str, str]] = None,
        runner: Optional[ProcessRunner] = None,
    ):
        self._name = name
        self.language = language
        self.description = description
        self.display_name = display_name or name
        self.homepage = homepage
        self.probes: Tuple[Probe, ...] = tuple(probes)
        self._programs: Tuple[str, ...] = tuple(programs)
        self.binaries: Dict[str, str] = dict(binaries or {})
        self.runner = runner or ProcessRunner()

        self._tools: Dict[str, Tool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ValueError(f"Duplicate tool '{tool.name}' in adapter '{name}'")
            self._tools[tool.name] = tool

        self._state = ConnectionState.DISCONNECTED
        self._lock = asyncio.Lock()
        self._epoch = 0  # bumped by disconnect() to invalidate in-flight connects
        self._attempts = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def tools(self) -> List[Tool]:
        return list(self._tools.values())

    def get_tool(self, name: str) -> Optional[Tool]:
        return self._tools.get(name)

    def programs(self) -> List[str]:
        """Every conventional command name this adapter may invoke, in first-use order."""
        seen: Dict[str, None] = dict.fromkeys(self._programs)
        for probe in self.probes:
            seen.setdefault(probe.program, None)
        return list(seen)

    def resolve(self, program: str) -> str:
        """Map a conventional command name to the configured executable."""
        return self.binaries.get(program, program)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    async def connect(self) -> bool:
        """Probe the underlying tool; ``True`` when any probe passes."""
        async with self._lock:
            return await self._connect_locked()

    async def ensure_connected(self) -> bool:
        """Connect unless already connected; concurrent callers share one probe run."""
        if self.is_connected():
            return True
        attempt, epoch = self._attempts, self._epoch
        async with self._lock:
            if self.is_connected():
                return True
            if self._attempts != attempt and self._epoch == epoch:
                # another caller probed while we waited and failed
                return False
            return await self._connect_locked()

    def disconnect(self) -> None:
        """Mark the adapter disconnected. Idempotent."""
        self._epoch += 1
        if self._state is not ConnectionState.DISCONNECTED:
            logger.info("adapter %s disconnected", self.name)
        self._state = ConnectionState.DISCONNECTED

    async def _connect_locked(self) -> bool:
        epoch = self._epoch
        try:
            available = await self._probe()
        finally:
            # bumped after probing; callers queued on the lock compare against it
            self._attempts += 1
        if self._epoch != epoch:
            # disconnect() ran while probing; it wins
            return False
        self._state = ConnectionState.CONNECTED if available else ConnectionState.DISCONNECTED
        if available:
            logger.info("adapter %s connected", self.name)
        else:
            logger.info("adapter %s unavailable", self.name)
        return available

    async def _probe(self) -> bool:
        for probe in self.probes:
            executable = self.resolve(probe.program)
            try:
                result = await self.runner.run(executable, probe.args, input=probe.stdin)
            except Exception as exc:
                logger.debug("probe %s %s raised: %s", executable, probe.args, exc)
                continue
            if probe.accepts(result):
                return True
            logger.debug(
                "probe %s %s failed (exit=%s): %s",
                executable,
                probe.args,
                result.exit_code,
                result.stderr.strip()[:200],
            )
        return False

    # ── Execution ─────────────────────────────────────────────────────────

    async def execute(
        self,
        tool: Tool,
        arguments: Dict[str, Any],
        cwd: Optional[str] = None,
    ) -> ProcessResult:
        """
        Run ``tool`` with already-validated arguments.

        Multi-command tools run in order and stop at the first failing
        command; the last result produced is returned.
        """
        result: Optional[ProcessResult] = None
        for command in tool.commands(arguments):
            result = await self.runner.run(
                self.resolve(command.program),
                command.args,
                cwd=command.cwd or cwd,
                input=command.stdin,
            )
            if not result.success:
                break
        assert result is not None
        return result

    # ── Introspection ─────────────────────────────────────────────────────

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "display_name": self.display_name,
            "language": self.language,
            "description": self.description,
            "homepage": self.homepage,
            "connected": self.is_connected(),
            "tools": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "inputSchema": tool.input_schema,
                }
                for tool in self._tools.values()
            ],
        }

    def __repr__(self) -> str:
        return f"AdapterDescriptor(name={self.name!r}, state={self._state.value})"
